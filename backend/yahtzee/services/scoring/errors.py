from typing import Any, Dict, Optional


class ScoringError(Exception):
    """Base class for rule violations raised by the scoring core.

    Carries enough context (category, offending value) for the request layer
    to build a user facing message.
    """

    def __init__(self, message: str, category: Optional[str] = None, value: Any = None):
        super().__init__(message)
        self.message = message
        self.category = category
        self.value = value

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {'error': self.message}
        if self.category is not None:
            payload['category'] = self.category
        if self.value is not None:
            payload['value'] = self.value
        return payload


class InvalidHand(ScoringError):
    """Dice are not exactly five values in [1, 6]."""


class InvalidCategory(ScoringError):
    """Category identifier is not one of the 13 known categories."""


class InvalidScore(ScoringError):
    """A manually entered score is impossible for its category."""


class AlreadyScored(ScoringError):
    """Commit into a category that already holds a value."""


class NotScored(ScoringError):
    """Clear of a category that holds no value."""
