"""
MCR Hand Scorer

Scores a winning hand: every decomposition of the 14 tiles is evaluated
against all patterns, exclusions and group reuse are resolved, and the
decomposition worth the most points is reported.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Mapping, Optional

from .context import GameContext
from .decomposition import Decomposition, decompose, waiting_tiles
from .patterns import PATTERNS
from .resolution import Credit, resolve, total_points
from .rules import ScoringConfig, DEFAULT_CONFIG
from .tiles import Tile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchResult:
    """One credited pattern"""
    name: str
    points: int
    count: int = 1
    chinese_name: str = ""

    @property
    def total(self) -> int:
        return self.points * self.count

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "points": self.points, "quant": self.count}


@dataclass
class HandScoreResult:
    """Total score and the patterns that produced it"""
    score: int = 0
    matched: List[MatchResult] = field(default_factory=list)
    decomposition: Optional[Decomposition] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"score": self.score, "matched": [m.to_dict() for m in self.matched]}

    def __str__(self) -> str:
        lines = [f"{m.name} ({m.chinese_name}) {m.points} x{m.count}" for m in self.matched]
        lines.append(f"Total: {self.score}")
        return "\n".join(lines)


class HandScorer:
    """
    MCR Hand Scorer

    Evaluates the pattern registry against every decomposition of a hand
    and keeps the best result.
    """

    def __init__(self, config: ScoringConfig = DEFAULT_CONFIG):
        self.config = config
        self.patterns = PATTERNS

    def score(self, context: GameContext) -> HandScoreResult:
        """
        Calculate the score for a winning hand.

        Unscoreable hands score zero. Unless the configuration says
        otherwise, unexpected faults are logged and also score zero.
        """
        if not self.config.suppress_errors:
            return self._score(context)
        try:
            return self._score(context)
        except Exception:
            logger.exception(f"Scoring failed for winning tile {context.winning_tile}")
            return HandScoreResult()

    def score_state(self, state: Mapping[str, Any]) -> HandScoreResult:
        """Score a game-state dictionary (see GameContext.from_state)"""
        return self.score(GameContext.from_state(state, self.config))

    def _score(self, context: GameContext) -> HandScoreResult:
        decompositions = decompose(context.declared_melds, context.concealed_tiles,
                                   context.winning_tile, context.win_from_discard)
        if not decompositions:
            logger.debug("No valid decomposition, scoring zero")
            return HandScoreResult()

        best: Optional[HandScoreResult] = None
        for decomposition in decompositions:
            credited = resolve(self.evaluate(decomposition, context), decomposition,
                               context, self.config)
            score = total_points(credited)
            if best is None or score > best.score:
                best = HandScoreResult(score, _to_results(credited), decomposition)

        logger.debug(f"Best of {len(decompositions)} decompositions scores {best.score}: "
                     f"{' / '.join(str(g) for g in best.decomposition)}")
        return best

    def evaluate(self, decomposition: Decomposition, context: GameContext) -> List[Credit]:
        """Raw (pattern, count) matches for one decomposition, before resolution"""
        matches = []
        for pattern in self.patterns:
            count = pattern.evaluate(decomposition, context)
            if count > 0:
                matches.append((pattern, count))
        return matches

    def wait_set(self, context: GameContext) -> FrozenSet[Tile]:
        return wait_set(context)


def _to_results(credited: List[Credit]) -> List[MatchResult]:
    results = [MatchResult(p.name, p.points, count, p.chinese_name) for p, count in credited]
    results.sort(key=lambda m: (-m.points, m.name))
    return results


def wait_set(context: GameContext) -> FrozenSet[Tile]:
    """Tiles that would complete the hand held before the winning tile arrived"""
    return waiting_tiles(context.declared_melds, context.concealed_tiles)


_default_scorer = HandScorer()


def score_hand(context: GameContext) -> HandScoreResult:
    return _default_scorer.score(context)


def score_state(state: Mapping[str, Any]) -> HandScoreResult:
    return _default_scorer.score_state(state)
