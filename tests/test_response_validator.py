"""
Tests for response cleanup and the validation gate.
"""

import pytest

from interview_agent.services import ResponseValidator, clean_response, lexical_overlap

EXPERIENCE_INPUT = "I have five years of experience in backend systems"


def test_accepts_specific_question(validator):
    """A fresh, well-sized question passes every check."""
    result = validator.validate("How did you shard the database behind that API?", EXPERIENCE_INPUT)

    assert result.accepted is True
    assert result.reason is None


def test_rejects_missing_question_mark(validator):
    """A candidate without a question mark is always rejected."""
    result = validator.validate("Tell me about the database behind that API.", EXPERIENCE_INPUT)

    assert result.accepted is False
    assert result.reason == "not a question"


@pytest.mark.parametrize(
    "candidate",
    [
        "I am a technical interviewer. What is a closure?",
        "My name is Alex, what do you work on?",
        "As a professional job interviewer, what are your goals?",
        "Let me introduce the next topic: how does GC work?",
    ],
)
def test_rejects_denylisted_phrases(validator, candidate):
    """Self-referential openers are rejected."""
    assert validator.validate(candidate, "hello").accepted is False


@pytest.mark.parametrize("candidate", ["Why?", "How " + "x" * 300 + "?"])
def test_rejects_length_out_of_bounds(validator, candidate):
    """Too short or too long candidates are rejected."""
    result = validator.validate(candidate, "hello")

    assert result.accepted is False
    assert "length" in result.reason


def test_rejects_restated_input(validator):
    """Repeating most long words of the input is rejected."""
    candidate = "How many years of experience with backend systems do you have?"

    assert lexical_overlap(candidate, EXPERIENCE_INPUT) == pytest.approx(1.0)
    result = validator.validate(candidate, EXPERIENCE_INPUT)

    assert result.accepted is False
    assert "similar" in result.reason


def test_overlap_at_threshold_is_accepted():
    """Overlap equal to the threshold still passes."""
    utterance = "python django redis kafka"
    candidate = "Why pair django with redis?"
    validator = ResponseValidator(min_length=10, max_length=300, overlap_threshold=0.5)

    assert lexical_overlap(candidate, utterance) == pytest.approx(0.5)
    assert validator.validate(candidate, utterance).accepted is True


def test_overlap_threshold_is_configurable():
    """A threshold of 1.0 never rejects on overlap."""
    candidate = "How many years of experience with backend systems do you have?"
    validator = ResponseValidator(min_length=10, max_length=300, overlap_threshold=1.0)

    assert validator.validate(candidate, EXPERIENCE_INPUT).accepted is True


def test_overlap_ignores_short_words():
    """Words of four characters or fewer never count."""
    assert lexical_overlap("Do you like Go and Rust?", "I like Go and Rust a lot") == 0.0


def test_overlap_without_qualifying_words():
    """An input with no long words has zero overlap."""
    assert lexical_overlap("Why?", "ok sure") == 0.0


def test_invalid_length_bounds():
    with pytest.raises(ValueError):
        ResponseValidator(min_length=50, max_length=10)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Interviewer: What is Rust?", "What is Rust?"),
        ("question: why Kafka?", "why Kafka?"),
        ('"What is a mutex?"', "What is a mutex?"),
        ("'How do you test it?'", "How do you test it?"),
        ("What is a mutex? I think that it is", "What is a mutex?"),
        ("Why? Because. Then what? And more", "Why? Because. Then what?"),
        ("This is a long complete sentence. and then", "This is a long complete sentence."),
        ("Ok. then something runs on and on", "Ok. then something runs on and on"),
        ("  How does it scale?  ", "How does it scale?"),
        ("", ""),
    ],
)
def test_clean_response(raw, expected):
    """Artifacts are stripped and trailing continuation text dropped."""
    assert clean_response(raw) == expected
