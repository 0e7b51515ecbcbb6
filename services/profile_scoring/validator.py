import logging
from typing import Sequence, Tuple

from services.profile_scoring.models import InstrumentRange, InvalidInputError

logger = logging.getLogger(__name__)


def validate_answers(answers: Sequence[int], instrument: InstrumentRange, name: str = "answers") -> Tuple[int, ...]:
    """
    Rejects malformed answer vectors before any scoring happens.

    Args:
        answers: Raw answer values in question order.
        instrument: Expected length and closed value range.
        name: Instrument name, used in error messages.

    Returns:
        The answers as an immutable tuple.

    Raises:
        InvalidInputError: On a wrong length or any out-of-range / non-integer element.
    """
    if answers is None or isinstance(answers, (str, bytes)):
        raise InvalidInputError(f"{name} must be a sequence of {instrument.length} integers")
    try:
        values = tuple(answers)
    except TypeError:
        raise InvalidInputError(f"{name} must be a sequence of {instrument.length} integers")

    if len(values) != instrument.length:
        raise InvalidInputError(
            f"{name} must contain exactly {instrument.length} answers, got {len(values)}"
        )

    for i, value in enumerate(values):
        # bool is an int subclass but never a valid answer
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidInputError(f"Invalid answer at index {i}: {value!r} is not an integer")
        if not instrument.min_value <= value <= instrument.max_value:
            raise InvalidInputError(
                f"Invalid answer value at index {i}: must be between "
                f"{instrument.min_value} and {instrument.max_value}, got {value}"
            )

    return values
