"""Prompt construction for the interviewer model.

The first turn has too little context for a grounded follow-up, so it gets
its own template that reacts to the candidate's self-introduction. Later
turns include the last two exchanges and push the model toward a "how" or
"why" follow-up instead of a generic question.
"""

from interview_agent.entities import ConversationHistory, ConversationTurn, Role

CONTEXT_TURNS = 4

FIRST_TURN_TEMPLATE = (
    "Instruction: You are a Technical Interviewer for a Senior Software Engineer role. "
    'The candidate just introduced themselves: "{utterance}".\n'
    "Task: Ask a specific technical question about their coding experience "
    "or a relevant technology.\n\n"
    "Technical Question:"
)

FOLLOW_UP_TEMPLATE = (
    "Instruction: You are a strict Technical Interviewer. Analyze the conversation below. "
    "Based on the candidate's last answer, ask a follow-up TECHNICAL question to test "
    'their depth of knowledge. Avoid generic questions. Focus on "how" and "why".\n\n'
    "Conversation History:\n{conversation}\n\n"
    'Candidate\'s Last Answer: "{utterance}"\n\n'
    "Follow-up Technical Question:"
)


class PromptBuilder:
    """Builds generation prompts from the utterance and prior history."""

    def __init__(self, context_turns: int = CONTEXT_TURNS) -> None:
        self._context_turns = context_turns

    def build(self, utterance: str, history: ConversationHistory) -> str:
        """Build the prompt for one generation attempt.

        Args:
            utterance: The candidate's latest utterance
            history: Turns exchanged before this utterance

        Returns:
            The prompt text
        """
        if len(history) == 0:
            return FIRST_TURN_TEMPLATE.format(utterance=utterance)

        conversation = "\n".join(
            self._render_turn(turn) for turn in history.recent(self._context_turns)
        )
        return FOLLOW_UP_TEMPLATE.format(conversation=conversation, utterance=utterance)

    @staticmethod
    def _render_turn(turn: ConversationTurn) -> str:
        speaker = "Candidate" if turn.role == Role.USER else "Interviewer"
        return f"{speaker}: {turn.text}"
