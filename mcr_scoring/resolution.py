"""
MCR Pattern Resolution

Turns the raw pattern matches of one decomposition into the credited
patterns: exclusions are applied, group-bound patterns compete for the
groups they use, and the Big Three Winds and Chicken Hand special cases
are handled.
"""

import itertools
import logging
from typing import Dict, FrozenSet, List, Sequence, Tuple

from .context import GameContext
from .decomposition import Decomposition
from .patterns import (
    CHICKEN_HAND, PATTERN_ORDER, PATTERNS_BY_NAME, ScoringPattern,
    has_non_wind_terminal_pung,
)
from .rules import ScoringConfig, DEFAULT_CONFIG

logger = logging.getLogger(__name__)

Credit = Tuple[ScoringPattern, int]

PUNG_OF_TERMINALS = "Pung of Terminals or Honors"
BIG_THREE_WINDS = "Big Three Winds"


def _registry_key(pattern: ScoringPattern) -> Tuple[int, int]:
    return (pattern.points, PATTERN_ORDER.get(pattern.name, len(PATTERN_ORDER)))


def resolve_exclusions(matched: Sequence[ScoringPattern]) -> List[ScoringPattern]:
    """
    Remove excluded patterns until no remaining pattern excludes another.

    One pattern is removed per round, the lowest valued first (registry
    order among equals), so chains and cycles settle the same way every time.
    """
    present = list(matched)
    while True:
        excluded = [p for p in present
                    if any(p.name in q.excludes for q in present if q is not p)]
        if not excluded:
            return present
        victim = min(excluded, key=_registry_key)
        logger.debug(f"Excluding {victim.name}")
        present.remove(victim)


def assign_groups(patterns: Sequence[ScoringPattern], decomposition: Decomposition,
                  context: GameContext, max_tie_permutations: int = 6) -> Dict[str, int]:
    """
    Credit group-bound patterns without crediting the same groups twice.

    Patterns are taken from the highest value down. A match is accepted when
    it uses at least one group no earlier accepted match has used. Patterns
    of equal value are tried in every order (only registry order when there
    are more than max_tie_permutations of them), and the assignment with the
    highest total wins; the first one found is kept on ties.

    Returns:
        pattern name -> credited count
    """
    instances = {p.name: p.groups_used(decomposition, context) for p in patterns}
    ordered = sorted(patterns, key=lambda p: (-p.points, PATTERN_ORDER.get(p.name, 0)))
    tiers = [list(tier) for _, tier in itertools.groupby(ordered, key=lambda p: p.points)]

    best_total = -1
    best_counts: Dict[str, int] = {}

    def search(tier_index: int, used: FrozenSet[int], counts: Dict[str, int], total: int):
        nonlocal best_total, best_counts
        if tier_index == len(tiers):
            if total > best_total:
                best_total, best_counts = total, counts
            return

        tier = tiers[tier_index]
        if len(tier) <= max_tie_permutations:
            orderings = itertools.permutations(tier)
        else:
            orderings = [tier]

        for ordering in orderings:
            tier_used = set(used)
            tier_counts = dict(counts)
            tier_total = total
            for pattern in ordering:
                accepted = 0
                for groups in instances[pattern.name]:
                    if groups - tier_used:
                        tier_used |= groups
                        accepted += 1
                # Patterns spanning three groups are credited once
                if all(len(groups) >= 3 for groups in instances[pattern.name]):
                    accepted = min(accepted, 1)
                if accepted:
                    tier_counts[pattern.name] = accepted
                    tier_total += accepted * pattern.points
            search(tier_index + 1, frozenset(tier_used), tier_counts, tier_total)

    search(0, frozenset(), {}, 0)
    return best_counts


def resolve(matches: Sequence[Credit], decomposition: Decomposition,
            context: GameContext, config: ScoringConfig = DEFAULT_CONFIG) -> List[Credit]:
    """
    Resolve the raw matches of one decomposition into credited patterns.

    Args:
        matches: (pattern, match count) for every pattern with count > 0
        decomposition: The decomposition the matches were found on
        context: Game context
        config: Scoring configuration

    Returns:
        (pattern, credited count) list, in registry order
    """
    raw_counts = {p.name: count for p, count in matches}
    survivors = resolve_exclusions([p for p, _ in matches])

    bound = [p for p in survivors if p.is_group_bound]
    bound_counts = assign_groups(bound, decomposition, context,
                                 config.max_tie_permutations) if bound else {}

    credited: List[Credit] = []
    for pattern in survivors:
        if pattern.is_group_bound:
            count = bound_counts.get(pattern.name, 0)
        else:
            count = raw_counts[pattern.name]
        if count > 0:
            credited.append((pattern, count))

    names = {p.name for p, _ in credited}
    if (config.big_three_winds_correction and BIG_THREE_WINDS in names
            and PUNG_OF_TERMINALS not in names and has_non_wind_terminal_pung(decomposition)):
        logger.debug("Big Three Winds with a terminal pung: crediting Pung of Terminals or Honors")
        credited.append((PATTERNS_BY_NAME[PUNG_OF_TERMINALS], 1))

    if not credited:
        credited.append((CHICKEN_HAND, 1))

    return sorted(credited, key=lambda c: PATTERN_ORDER.get(c[0].name, len(PATTERN_ORDER)))


def total_points(credited: Sequence[Credit]) -> int:
    return sum(pattern.points * count for pattern, count in credited)
