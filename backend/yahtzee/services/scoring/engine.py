"""Per-category scoring rules over a five die hand.

Everything here is pure: identical dice always give identical scores and
nothing is logged or stored.
"""

from collections import Counter
from enum import Enum
from typing import Callable, Dict, Iterable, List, Sequence

from .errors import InvalidCategory, InvalidHand

DICE_COUNT = 5
FACES = range(1, 7)

FULL_HOUSE_SCORE = 25
SMALL_STRAIGHT_SCORE = 30
LARGE_STRAIGHT_SCORE = 40
YAHTZEE_SCORE = 50

SMALL_STRAIGHTS = ({1, 2, 3, 4}, {2, 3, 4, 5}, {3, 4, 5, 6})
LARGE_STRAIGHTS = ({1, 2, 3, 4, 5}, {2, 3, 4, 5, 6})


class Category(str, Enum):
    ONES = 'ones'
    TWOS = 'twos'
    THREES = 'threes'
    FOURS = 'fours'
    FIVES = 'fives'
    SIXES = 'sixes'
    THREE_OF_A_KIND = 'threeOfAKind'
    FOUR_OF_A_KIND = 'fourOfAKind'
    FULL_HOUSE = 'fullHouse'
    SMALL_STRAIGHT = 'smallStraight'
    LARGE_STRAIGHT = 'largeStraight'
    YAHTZEE = 'yahtzee'
    CHANCE = 'chance'

    @classmethod
    def parse(cls, value) -> 'Category':
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidCategory(f'Invalid category: {value!r}.', value=value) from None

    @property
    def is_upper(self) -> bool:
        return self in UPPER_SECTION

    @property
    def face(self) -> int:
        """Face value counted by an upper section category."""
        return UPPER_SECTION.index(self) + 1


UPPER_SECTION = (
    Category.ONES, Category.TWOS, Category.THREES,
    Category.FOURS, Category.FIVES, Category.SIXES,
)
LOWER_SECTION = (
    Category.THREE_OF_A_KIND, Category.FOUR_OF_A_KIND, Category.FULL_HOUSE,
    Category.SMALL_STRAIGHT, Category.LARGE_STRAIGHT, Category.YAHTZEE,
    Category.CHANCE,
)


def validate_hand(dice: Iterable[int]) -> List[int]:
    """Return the dice as a list or raise InvalidHand."""
    try:
        hand = list(dice)
    except TypeError:
        raise InvalidHand('Invalid dice array. Must be 5 numbers.', value=dice) from None
    if len(hand) != DICE_COUNT:
        raise InvalidHand('Invalid dice array. Must be 5 numbers.', value=hand)
    for die in hand:
        # bool is an int subclass but never a die
        if isinstance(die, bool) or not isinstance(die, int) or die not in FACES:
            raise InvalidHand('Each die must be between 1 and 6.', value=hand)
    return hand


def is_yahtzee(dice: Sequence[int]) -> bool:
    return len(set(dice)) == 1


def _upper(face: int) -> Callable[[Sequence[int]], int]:
    def scorer(dice):
        return dice.count(face) * face
    return scorer


def _n_of_a_kind(n: int) -> Callable[[Sequence[int]], int]:
    def scorer(dice):
        if max(Counter(dice).values()) >= n:
            return sum(dice)
        return 0
    return scorer


def _full_house(dice):
    # five of a kind has a single distinct value and does not qualify
    if sorted(Counter(dice).values()) == [2, 3]:
        return FULL_HOUSE_SCORE
    return 0


def _small_straight(dice):
    unique = set(dice)
    if any(run.issubset(unique) for run in SMALL_STRAIGHTS):
        return SMALL_STRAIGHT_SCORE
    return 0


def _large_straight(dice):
    if set(dice) in LARGE_STRAIGHTS:
        return LARGE_STRAIGHT_SCORE
    return 0


def _yahtzee(dice):
    return YAHTZEE_SCORE if is_yahtzee(dice) else 0


def _chance(dice):
    return sum(dice)


SCORERS: Dict[Category, Callable[[Sequence[int]], int]] = {
    Category.ONES: _upper(1),
    Category.TWOS: _upper(2),
    Category.THREES: _upper(3),
    Category.FOURS: _upper(4),
    Category.FIVES: _upper(5),
    Category.SIXES: _upper(6),
    Category.THREE_OF_A_KIND: _n_of_a_kind(3),
    Category.FOUR_OF_A_KIND: _n_of_a_kind(4),
    Category.FULL_HOUSE: _full_house,
    Category.SMALL_STRAIGHT: _small_straight,
    Category.LARGE_STRAIGHT: _large_straight,
    Category.YAHTZEE: _yahtzee,
    Category.CHANCE: _chance,
}

_missing = set(Category) - set(SCORERS)
if _missing:
    raise RuntimeError(f'No scorer registered for {sorted(c.value for c in _missing)}')


def score_category(category, dice: Iterable[int]) -> int:
    """Score ``dice`` in ``category`` (a Category or its wire name)."""
    category = Category.parse(category)
    hand = validate_hand(dice)
    return SCORERS[category](hand)


def score_all(dice: Iterable[int]) -> Dict[Category, int]:
    hand = validate_hand(dice)
    return {category: SCORERS[category](hand) for category in Category}


def describe_score(category, dice: Iterable[int]) -> str:
    """Short explanation of how ``dice`` score in ``category``."""
    category = Category.parse(category)
    hand = validate_hand(dice)
    score = SCORERS[category](hand)
    if category.is_upper:
        face = category.face
        return f'Sum of all {face}s: {hand.count(face)} x {face}'
    if category is Category.CHANCE:
        return f'Sum of all dice: {sum(hand)}'
    if score == 0:
        return {
            Category.THREE_OF_A_KIND: 'No three of a kind found',
            Category.FOUR_OF_A_KIND: 'No four of a kind found',
            Category.FULL_HOUSE: 'No full house found',
            Category.SMALL_STRAIGHT: 'No small straight found',
            Category.LARGE_STRAIGHT: 'No large straight found',
            Category.YAHTZEE: 'No Yahtzee found',
        }[category]
    return {
        Category.THREE_OF_A_KIND: f'Sum of all dice: {sum(hand)}',
        Category.FOUR_OF_A_KIND: f'Sum of all dice: {sum(hand)}',
        Category.FULL_HOUSE: 'Three of one number + pair of another',
        Category.SMALL_STRAIGHT: 'Four consecutive numbers',
        Category.LARGE_STRAIGHT: 'Five consecutive numbers',
        Category.YAHTZEE: 'All five dice show the same number!',
    }[category]
