#!/usr/bin/env python3
"""
Demo script for the interview agent.

Runs a mock technical interview in the terminal: typed answers stand in for
transcribed speech and the interviewer's questions are printed instead of
spoken. Requires a running Ollama server (see OLLAMA_BASE_URL).

Commands during the interview:
    /stats   show cache and performance statistics
    /clear   start the conversation over
    /export  print the transcript
    /quit    end the interview
"""

import argparse
import asyncio

from interview_agent.config import settings
from interview_agent.repositories import OllamaTextGenerator, create_blob_store
from interview_agent.services import InteractionTracker, InterviewSession
from interview_agent.utils import configure_logging


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def print_progress(percent: float, message: str) -> None:
    print(f"  [{percent:5.1f}%] {message}")


def print_stats(session: InterviewSession) -> None:
    cache = session.cache_stats()
    metrics = session.metrics()
    print("\n📊 Statistics:")
    print(f"  Cache size:        {cache['size']}")
    print(f"  Cache hit rate:    {cache['hit_rate']}")
    print(f"  Requests:          {metrics['total_requests']}")
    print(f"  Fallback answers:  {metrics['fallback_responses']}")
    print(f"  Avg response time: {metrics['avg_response_time_ms']:.0f}ms")


async def run_interview(interview_type: str, personality: str, pull: bool) -> None:
    print_section(f"Loading model {settings.generation_model}")
    backend = OllamaTextGenerator.create()
    await backend.initialize(on_progress=print_progress, pull=pull)

    session = InterviewSession.create(backend, store=create_blob_store())
    session.tracker.set_interview_type(interview_type)  # type: ignore[arg-type]
    session.tracker.set_personality(personality)  # type: ignore[arg-type]
    session.start()

    print_section(f"{interview_type.title()} interview")
    print("\n💡 Suggested openers:")
    for question in InteractionTracker.suggested_questions(interview_type):
        print(f"  - {question}")
    print("\nIntroduce yourself to begin. Type /quit to finish.")

    try:
        while True:
            try:
                text = (await asyncio.to_thread(input, "\n🧑 You: ")).strip()
            except EOFError:
                break

            if text == "/quit":
                break
            if text == "/stats":
                print_stats(session)
                continue
            if text == "/clear":
                session.clear_conversation()
                print("  Conversation cleared.")
                continue
            if text == "/export":
                print(session.export("txt"))
                continue

            result = await session.handle_utterance(text)
            if result is None:
                continue

            marker = "⚡" if result.from_cache else "🤖"
            print(f"\n{marker} Interviewer: {result.response}")
            print(f"  ({result.source}, {result.response_time_ms:.0f}ms)")
            print("  Quick replies: " + " | ".join(session.tracker.quick_replies()))
    finally:
        session.stop()
        print_stats(session)
        await backend.close()


def main() -> None:
    """Run the interactive demo."""
    parser = argparse.ArgumentParser(description="Mock technical interview in the terminal")
    parser.add_argument(
        "--type",
        choices=["technical", "behavioral", "general"],
        default="technical",
        help="interview flavour used for suggested openers and the export",
    )
    parser.add_argument(
        "--personality",
        choices=["professional", "friendly", "casual"],
        default="professional",
        help="interviewer persona recorded in the progress summary and export",
    )
    parser.add_argument(
        "--no-pull",
        action="store_true",
        help="assume the model is already present in Ollama",
    )
    parser.add_argument("--log-level", default=None, help="override LOG_LEVEL")
    args = parser.parse_args()

    configure_logging(args.log_level)

    print("\n🚀 Interview Agent Demo")
    try:
        asyncio.run(run_interview(args.type, args.personality, pull=not args.no_pull))
        print("\n✅ Interview finished.")
    except KeyboardInterrupt:
        print("\nInterrupted.")
    except Exception as e:
        print(f"\n❌ Error: {e}")
        print("\nMake sure Ollama is running:")
        print("  ollama serve")
        print("\nOr set OLLAMA_BASE_URL to your Ollama instance.")


if __name__ == "__main__":
    main()
