"""Interview progress tracking and conversation export."""

from datetime import datetime, timezone
from typing import Literal

from interview_agent.entities import ConversationTurn, Role
from interview_agent.models import ConversationExport, ExportedTurn, InterviewProgress

InterviewType = Literal["technical", "behavioral", "general"]
ExportFormat = Literal["txt", "json"]
Personality = Literal["professional", "friendly", "casual"]

TOPIC_KEYWORDS = ("experience", "project", "skill", "team", "challenge", "achievement")

SUGGESTED_QUESTIONS: dict[str, tuple[str, ...]] = {
    "technical": (
        "Tell me about your programming experience",
        "What technologies are you most comfortable with?",
        "Describe a challenging technical problem you solved",
        "What's your experience with version control?",
    ),
    "behavioral": (
        "Tell me about a time you worked in a team",
        "How do you handle difficult situations?",
        "Describe your greatest professional achievement",
        "How do you prioritize your work?",
    ),
    "general": (
        "Tell me about yourself",
        "What are your career goals?",
        "Why are you interested in this position?",
        "What are your strengths and weaknesses?",
    ),
}

PERSONALITY_PROMPTS: dict[str, str] = {
    "professional": (
        "You are a professional job interviewer. Ask clear questions about the candidate's "
        "experience and skills. Keep responses brief and professional."
    ),
    "friendly": (
        "You are a friendly interviewer who makes candidates feel comfortable. Be warm and "
        "encouraging while asking about their experience."
    ),
    "casual": (
        "You are a relaxed interviewer having a casual conversation. Be conversational and "
        "informal while learning about the candidate."
    ),
}

INTRO_REPLIES = (
    "I have 3 years of experience",
    "I'm a recent graduate",
    "I've worked on several projects",
)
FOLLOW_UP_REPLIES = (
    "Yes, I have experience with that",
    "Could you clarify?",
    "Let me think about that",
)


class InteractionTracker:
    """Counts questions, notes covered topics and exports the conversation."""

    def __init__(
        self,
        interview_type: InterviewType = "general",
        personality: Personality = "professional",
    ) -> None:
        self._interview_type: str = interview_type
        self._personality: str = personality
        self._question_count = 0
        self._topics: list[str] = []

    def set_interview_type(self, interview_type: InterviewType) -> None:
        if interview_type not in SUGGESTED_QUESTIONS:
            raise ValueError(f"Unknown interview type: {interview_type!r}")
        self._interview_type = interview_type

    def set_personality(self, personality: Personality) -> str:
        """Switch the interviewer persona.

        Returns:
            The persona's instruction text

        Raises:
            ValueError: If the personality is unknown
        """
        if personality not in PERSONALITY_PROMPTS:
            raise ValueError(f"Unknown personality: {personality!r}")
        self._personality = personality
        return PERSONALITY_PROMPTS[personality]

    def track_progress(self, user_message: str, agent_message: str) -> None:
        """Count one exchange and record the topics it touched."""
        self._question_count += 1
        combined = f"{user_message}\n{agent_message}".lower()
        for keyword in TOPIC_KEYWORDS:
            if keyword in combined and keyword not in self._topics:
                self._topics.append(keyword)

    def get_progress(self) -> InterviewProgress:
        return InterviewProgress(
            question_count=self._question_count,
            topics_covered=list(self._topics),
            interview_type=self._interview_type,
            personality=self._personality,
        )

    def quick_replies(self) -> list[str]:
        """Canned answers the candidate can pick instead of speaking."""
        if self._question_count < 2:
            return list(INTRO_REPLIES)
        return list(FOLLOW_UP_REPLIES)

    @staticmethod
    def suggested_questions(interview_type: str) -> list[str]:
        """Opening prompts for an interview type, falling back to general."""
        return list(SUGGESTED_QUESTIONS.get(interview_type, SUGGESTED_QUESTIONS["general"]))

    def export_conversation(
        self,
        history: list[ConversationTurn],
        fmt: ExportFormat = "txt",
        now: datetime | None = None,
    ) -> str:
        """Render the conversation for download.

        Args:
            history: Turns in append order
            fmt: "json" for a ConversationExport document, "txt" for a transcript
            now: Export timestamp. Defaults to the current UTC time.

        Returns:
            The rendered export
        """
        now = now or datetime.now(timezone.utc)

        if fmt == "json":
            document = ConversationExport(
                timestamp=now.isoformat(),
                interview_type=self._interview_type,
                personality=self._personality,
                progress=self.get_progress(),
                conversation=[
                    ExportedTurn(role=turn.role.value, content=turn.text) for turn in history
                ],
            )
            return document.model_dump_json(indent=2)

        if fmt != "txt":
            raise ValueError(f"Unknown export format: {fmt!r}")

        lines = [
            "AI Interview Bot - Conversation Export",
            f"Date: {now.strftime('%Y-%m-%d %H:%M:%S %Z').strip()}",
            f"Interview Type: {self._interview_type}",
            f"Personality: {self._personality}",
            f"Questions Asked: {self._question_count}",
            "",
            "=" * 50,
            "",
        ]
        for turn in history:
            speaker = "You" if turn.role == Role.USER else "AI Interviewer"
            lines.append(f"{speaker}: {turn.text}")
            lines.append("")
        return "\n".join(lines)

    def reset(self) -> None:
        self._question_count = 0
        self._topics = []

    @property
    def question_count(self) -> int:
        return self._question_count

    @property
    def interview_type(self) -> str:
        return self._interview_type

    @property
    def personality(self) -> str:
        return self._personality
