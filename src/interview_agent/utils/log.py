import logging

from interview_agent.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """Attach a stream handler to the package logger.

    Library code never calls this; it is meant for scripts and applications.
    Calling it again only updates the level.

    Args:
        level: Logging level name or number. Defaults to settings.log_level.

    Returns:
        The ``interview_agent`` logger
    """
    logger = logging.getLogger("interview_agent")
    logger.setLevel(level or settings.log_level.upper())

    if not any(getattr(h, "_interview_agent", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._interview_agent = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    return logger
