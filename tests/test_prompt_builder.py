"""
Tests for prompt construction.
"""

from interview_agent.entities import ConversationHistory, ConversationTurn, Role
from interview_agent.services import PromptBuilder


def _history(*texts: str) -> ConversationHistory:
    history = ConversationHistory()
    for i, text in enumerate(texts):
        history.append(ConversationTurn(role=Role.USER if i % 2 == 0 else Role.AGENT, text=text))
    return history


def test_first_turn_prompt():
    """With no prior turns the prompt reacts to the self-introduction."""
    prompt = PromptBuilder().build("I'm Sam, a backend engineer", ConversationHistory())

    assert 'The candidate just introduced themselves: "I\'m Sam, a backend engineer"' in prompt
    assert prompt.endswith("Technical Question:")
    assert "Conversation History" not in prompt


def test_follow_up_prompt_uses_last_two_exchanges():
    """Later turns include only the last four turns as context."""
    history = _history("u1", "a1", "u2", "a2", "u3", "a3")

    prompt = PromptBuilder().build("u4", history)

    assert "Candidate: u1" not in prompt
    assert "Interviewer: a1" not in prompt
    assert "Candidate: u2\nInterviewer: a2\nCandidate: u3\nInterviewer: a3" in prompt
    assert 'Candidate\'s Last Answer: "u4"' in prompt
    assert 'Focus on "how" and "why"' in prompt
    assert prompt.endswith("Follow-up Technical Question:")


def test_follow_up_prompt_with_short_history():
    """A single exchange is enough to switch to the follow-up template."""
    prompt = PromptBuilder().build("u2", _history("u1", "a1"))

    assert "Conversation History:\nCandidate: u1\nInterviewer: a1" in prompt
