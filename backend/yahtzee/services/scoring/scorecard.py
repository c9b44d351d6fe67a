"""Scorecard aggregation: committed scores, bonus Yahtzees and final totals.

A ``Scorecard`` is treated as a value. ``commit_score``, ``clear_score``,
``record_manual_score`` and ``edit_score`` never touch the card they are given;
they return a new one, so a failed operation leaves the caller's state exactly
as it was.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .engine import (
    Category,
    FULL_HOUSE_SCORE,
    LARGE_STRAIGHT_SCORE,
    LOWER_SECTION,
    SMALL_STRAIGHT_SCORE,
    UPPER_SECTION,
    YAHTZEE_SCORE,
    is_yahtzee,
    score_category,
    validate_hand,
)
from .errors import AlreadyScored, InvalidScore, NotScored

UPPER_BONUS_THRESHOLD = 63
UPPER_BONUS = 35
BONUS_YAHTZEE_POINTS = 100

BONUS_YAHTZEES_KEY = 'bonusYahtzees'

FIXED_VALUE_CATEGORIES = {
    Category.FULL_HOUSE: FULL_HOUSE_SCORE,
    Category.SMALL_STRAIGHT: SMALL_STRAIGHT_SCORE,
    Category.LARGE_STRAIGHT: LARGE_STRAIGHT_SCORE,
    Category.YAHTZEE: YAHTZEE_SCORE,
}
DICE_SUM_CATEGORIES = (Category.THREE_OF_A_KIND, Category.FOUR_OF_A_KIND, Category.CHANCE)
MIN_DICE_SUM = 5
MAX_DICE_SUM = 30


@dataclass
class Scorecard:
    scores: Dict[Category, int] = field(default_factory=dict)
    bonus_yahtzees: int = 0

    def get(self, category) -> Optional[int]:
        return self.scores.get(Category.parse(category))

    def is_used(self, category) -> bool:
        return Category.parse(category) in self.scores

    def copy(self) -> 'Scorecard':
        return Scorecard(scores=dict(self.scores), bonus_yahtzees=self.bonus_yahtzees)

    def to_dict(self) -> Dict[str, int]:
        # Categories in canonical order, then the bonus counter
        payload = {c.value: self.scores[c] for c in Category if c in self.scores}
        payload[BONUS_YAHTZEES_KEY] = self.bonus_yahtzees
        return payload

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> 'Scorecard':
        data = dict(data or {})
        bonus = int(data.pop(BONUS_YAHTZEES_KEY, 0) or 0)
        scores = {Category.parse(name): int(value) for name, value in data.items()}
        return cls(scores=scores, bonus_yahtzees=bonus)


@dataclass(frozen=True)
class FinalScore:
    upper_total: int
    upper_bonus: int
    lower_total: int
    bonus_yahtzees: int
    bonus_yahtzee_score: int
    total_score: int

    def to_dict(self) -> Dict[str, int]:
        return {
            'upperTotal': self.upper_total,
            'upperBonus': self.upper_bonus,
            'lowerTotal': self.lower_total,
            'bonusYahtzees': self.bonus_yahtzees,
            'bonusYahtzeeScore': self.bonus_yahtzee_score,
            'totalScore': self.total_score,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, int]) -> 'FinalScore':
        return cls(
            upper_total=data['upperTotal'],
            upper_bonus=data['upperBonus'],
            lower_total=data['lowerTotal'],
            bonus_yahtzees=data['bonusYahtzees'],
            bonus_yahtzee_score=data['bonusYahtzeeScore'],
            total_score=data['totalScore'],
        )


@dataclass(frozen=True)
class CommitResult:
    scorecard: Scorecard
    committed_score: int
    bonus_awarded: bool
    used_as_joker: bool
    final_score: FinalScore

    @property
    def bonus_points(self) -> int:
        return BONUS_YAHTZEE_POINTS if self.bonus_awarded else 0


@dataclass(frozen=True)
class UpperBonusProgress:
    upper_total: int
    remaining: int
    achieved: bool
    open_categories: List[Category]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'upperTotal': self.upper_total,
            'remaining': self.remaining,
            'achieved': self.achieved,
            'openCategories': [c.value for c in self.open_categories],
        }


def compute_final_score(scorecard: Scorecard) -> FinalScore:
    upper_total = sum(scorecard.scores.get(c, 0) for c in UPPER_SECTION)
    upper_bonus = UPPER_BONUS if upper_total >= UPPER_BONUS_THRESHOLD else 0
    lower_total = sum(scorecard.scores.get(c, 0) for c in LOWER_SECTION)
    bonus_yahtzee_score = scorecard.bonus_yahtzees * BONUS_YAHTZEE_POINTS
    return FinalScore(
        upper_total=upper_total,
        upper_bonus=upper_bonus,
        lower_total=lower_total,
        bonus_yahtzees=scorecard.bonus_yahtzees,
        bonus_yahtzee_score=bonus_yahtzee_score,
        total_score=upper_total + upper_bonus + lower_total + bonus_yahtzee_score,
    )


def bonus_eligible(scorecard: Scorecard, dice: List[int]) -> bool:
    # Only a genuine, positive Yahtzee unlocks bonus and joker scoring
    return is_yahtzee(dice) and scorecard.scores.get(Category.YAHTZEE, 0) > 0


def preview_score(scorecard: Scorecard, category, dice: Iterable[int]) -> int:
    """Score that committing ``category`` with ``dice`` would record right now.

    Does not check whether the category is still open.
    """
    category = Category.parse(category)
    hand = validate_hand(dice)
    if category is Category.YAHTZEE and bonus_eligible(scorecard, hand):
        return scorecard.scores[Category.YAHTZEE]
    return score_category(category, hand)


def commit_score(scorecard: Scorecard, category, dice: Iterable[int]) -> CommitResult:
    """Record ``dice`` in ``category``, resolving bonus Yahtzees and jokers.

    Raises InvalidCategory, InvalidHand or AlreadyScored; the given card is
    never modified.
    """
    category = Category.parse(category)
    hand = validate_hand(dice)
    updated = scorecard.copy()
    bonus_awarded = False
    used_as_joker = False

    if bonus_eligible(scorecard, hand):
        if category is Category.YAHTZEE:
            updated.bonus_yahtzees += 1
            committed = updated.scores[Category.YAHTZEE]
            bonus_awarded = True
        else:
            _ensure_open(scorecard, category)
            committed = score_category(category, hand)
            updated.scores[category] = committed
            updated.bonus_yahtzees += 1
            bonus_awarded = True
            used_as_joker = True
    else:
        _ensure_open(scorecard, category)
        committed = score_category(category, hand)
        updated.scores[category] = committed

    return CommitResult(
        scorecard=updated,
        committed_score=committed,
        bonus_awarded=bonus_awarded,
        used_as_joker=used_as_joker,
        final_score=compute_final_score(updated),
    )


def clear_score(scorecard: Scorecard, category) -> Scorecard:
    """Remove a committed value. Bonus Yahtzees already earned are kept."""
    category = Category.parse(category)
    if category not in scorecard.scores:
        raise NotScored(f'No score recorded for {category.value}.', category=category.value)
    updated = scorecard.copy()
    del updated.scores[category]
    return updated


def record_manual_score(scorecard: Scorecard, category, value) -> Scorecard:
    """Enter a score typed in by a player instead of computed from dice."""
    category = Category.parse(category)
    _ensure_open(scorecard, category)
    _validate_manual_value(category, value)
    updated = scorecard.copy()
    updated.scores[category] = value
    return updated


def edit_score(scorecard: Scorecard, category, value) -> Scorecard:
    """Replace an already recorded value. Bonus Yahtzees are left alone."""
    category = Category.parse(category)
    if category not in scorecard.scores:
        raise NotScored(f'No score recorded for {category.value}.', category=category.value)
    _validate_manual_value(category, value)
    updated = scorecard.copy()
    updated.scores[category] = value
    return updated


def upper_bonus_progress(scorecard: Scorecard, category=None, score: int = 0) -> UpperBonusProgress:
    """How far the upper section is from the bonus, optionally after scoring
    ``score`` in the upper ``category``."""
    projected = dict(scorecard.scores)
    if category is not None:
        category = Category.parse(category)
        if category.is_upper:
            projected[category] = score
    upper_total = sum(projected.get(c, 0) for c in UPPER_SECTION)
    return UpperBonusProgress(
        upper_total=upper_total,
        remaining=max(0, UPPER_BONUS_THRESHOLD - upper_total),
        achieved=upper_total >= UPPER_BONUS_THRESHOLD,
        open_categories=[c for c in UPPER_SECTION if c not in projected],
    )


def is_complete(scorecard: Scorecard) -> bool:
    return all(c in scorecard.scores for c in Category)


def _ensure_open(scorecard: Scorecard, category: Category) -> None:
    if category in scorecard.scores:
        raise AlreadyScored(
            f'{category.value} already has a score.',
            category=category.value,
            value=scorecard.scores[category],
        )


def _validate_manual_value(category: Category, value) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidScore('Please enter a valid score (0 or positive number).',
                           category=category.value, value=value)
    if value == 0:
        return
    if category.is_upper:
        face = category.face
        if value % face or value > face * 5:
            raise InvalidScore(f'{category.value} must be a multiple of {face} up to {face * 5}.',
                               category=category.value, value=value)
    elif category in FIXED_VALUE_CATEGORIES:
        fixed = FIXED_VALUE_CATEGORIES[category]
        if value != fixed:
            raise InvalidScore(f'{category.value} has a fixed value of {fixed} points.',
                               category=category.value, value=value)
    elif category in DICE_SUM_CATEGORIES:
        if not MIN_DICE_SUM <= value <= MAX_DICE_SUM:
            raise InvalidScore(f'Please enter a valid sum of dice ({MIN_DICE_SUM}-{MAX_DICE_SUM}).',
                               category=category.value, value=value)
