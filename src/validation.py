"""Input checks shared by the feedback API and its client."""

from typing import Optional

from errors import ValidationError
from shared_types import VoteChoice

MAX_COMMENT_LENGTH = 500


def parse_vote(value: object) -> Optional[VoteChoice]:
    """Vote body value -> choice; ``None`` means retract.

    Raises:
        ValidationError: anything other than "like", "dislike" or None.
    """
    if value is None:
        return None
    if isinstance(value, str) and value in (VoteChoice.LIKE, VoteChoice.DISLIKE):
        return VoteChoice(value)
    raise ValidationError('Invalid vote. Must be "like", "dislike", or null')


def validate_comment_text(text: object, max_length: int = MAX_COMMENT_LENGTH) -> str:
    """Return the trimmed comment text.

    Length is checked on the raw text, emptiness after trimming.
    """
    if not isinstance(text, str) or not text.strip():
        raise ValidationError("Comment text is required")
    if len(text) > max_length:
        raise ValidationError(f"Comment must be {max_length} characters or less")
    return text.strip()
