"""Pure transition functions for the practice-round state machine.

A round walks the card list one card at a time. Each card starts in
``AWAITING_REVEAL``; an explicit reveal moves it to ``REVEALED``; a rating
moves on to the next card, wrapping to the first card at the end of the round.
"""

from lingua_franca.models.session import QuizPhase, QuizState


def enter(state: QuizState, card_count: int) -> QuizState:
    """State on entering practice: resume the index if valid, hidden answer."""
    if not 0 <= state.index < card_count:
        return QuizState()
    return QuizState(index=state.index)


def reveal(state: QuizState) -> QuizState:
    if state.phase == QuizPhase.REVEALED:
        return state
    return QuizState(index=state.index, phase=QuizPhase.REVEALED)


def can_rate(state: QuizState) -> bool:
    return state.phase == QuizPhase.REVEALED


def advance(state: QuizState, card_count: int) -> tuple[QuizState, bool]:
    """Move past a rated card.

    Returns:
        The next state and whether the round just completed.
    """
    next_index = state.index + 1
    if next_index < card_count:
        return QuizState(index=next_index), False
    return QuizState(), True
