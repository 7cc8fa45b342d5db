"""
MCR Hand Scoring Engine
Chinese Official Mahjong (Mahjong Competition Rules)
"""

from .tiles import Tile, TileSuit, TileParseError, parse_tile
from .groups import Group, GroupKind
from .context import GameContext
from .rules import ScoringConfig, DEFAULT_CONFIG, STRICT_CONFIG, FAST_CONFIG
from .decomposition import decompose, waiting_tiles
from .patterns import ScoringPattern, PATTERNS, CHICKEN_HAND
from .scoring import HandScorer, HandScoreResult, MatchResult, score_hand, score_state, wait_set

__version__ = "0.1.0"
__all__ = [
    "Tile",
    "TileSuit",
    "TileParseError",
    "parse_tile",
    "Group",
    "GroupKind",
    "GameContext",
    "ScoringConfig",
    "DEFAULT_CONFIG",
    "STRICT_CONFIG",
    "FAST_CONFIG",
    "decompose",
    "waiting_tiles",
    "ScoringPattern",
    "PATTERNS",
    "CHICKEN_HAND",
    "HandScorer",
    "HandScoreResult",
    "MatchResult",
    "score_hand",
    "score_state",
    "wait_set",
]
