"""Yahtzee scoring core: category rules, scorecards and leaderboards.

Pure domain logic with no Flask, database or socket imports, so HTTP
routes, socket handlers and tests can all call it directly.
"""

from .engine import Category, describe_score, is_yahtzee, score_all, score_category
from .errors import (
    AlreadyScored,
    InvalidCategory,
    InvalidHand,
    InvalidScore,
    NotScored,
    ScoringError,
)
from .leaderboard import LeaderboardEntry, rank_players
from .scorecard import (
    CommitResult,
    FinalScore,
    Scorecard,
    UpperBonusProgress,
    bonus_eligible,
    clear_score,
    commit_score,
    compute_final_score,
    edit_score,
    is_complete,
    preview_score,
    record_manual_score,
    upper_bonus_progress,
)
