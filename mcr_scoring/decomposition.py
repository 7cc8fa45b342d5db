"""
MCR Hand Decomposition

Enumerates every way the 14 tiles of a winning hand can be split into
groups: four melds and a pair, seven pairs, a knitted straight with two
more groups, or one of the whole-hand specials (Honors and Knitted Tiles,
Thirteen Orphans).

Each suit is searched separately over a count array, then the per-suit
results are combined with the declared melds.
"""

import itertools
import logging
from functools import lru_cache
from typing import FrozenSet, List, Optional, Sequence, Tuple

import numpy as np

from .groups import DeclaredMeld, Group, GroupKind, parse_declared_meld
from .tiles import (
    ALL_TILES, COPIES_PER_TYPE, NUMBERED_SUITS, ORPHANS, Tile, TileSuit,
    to_count_array,
)

logger = logging.getLogger(__name__)

Decomposition = Tuple[Group, ...]

HAND_SIZE = 14

# Count-array slice for each suit
_SUIT_RANGES = {
    TileSuit.CHARACTERS: (0, 9),
    TileSuit.BAMBOOS: (9, 18),
    TileSuit.DOTS: (18, 27),
    TileSuit.WINDS: (27, 31),
    TileSuit.DRAGONS: (31, 34),
}

# Values of a knitted straight, by offset 1, 2, 3
KNITTED_CLASSES = ((1, 4, 7), (2, 5, 8), (3, 6, 9))

WAIT_CACHE_SIZE = 4096


def decompose(declared_melds: Sequence[DeclaredMeld],
              concealed_tiles: Sequence[Tile],
              winning_tile: Tile,
              win_from_discard: bool = False) -> List[Decomposition]:
    """
    Find all valid decompositions of a winning hand.

    Args:
        declared_melds: Melds shown on the table (None marks a face-down tile)
        concealed_tiles: Tiles in hand, without the winning tile
        winning_tile: The winning tile
        win_from_discard: Whether the winning tile was claimed from a discard;
            the group it completes is then exposed

    Returns:
        List of decompositions, empty when the tiles form no winning hand
    """
    declared: List[Group] = []
    for meld in declared_melds:
        group = parse_declared_meld(meld)
        if group is None:
            logger.debug(f"Declared meld forms no group: {meld}")
            return []
        declared.append(group)

    free_tiles = list(concealed_tiles) + [winning_tile]
    counts = to_count_array(free_tiles)

    per_suit: List[List[Tuple[Group, ...]]] = []
    for suit, (start, end) in _SUIT_RANGES.items():
        suit_counts = counts[start:end]
        if not suit_counts.any():
            continue
        partitions = _partition_suit(suit, suit_counts)
        if suit == winning_tile.suit:
            partitions = _mark_winning(partitions, winning_tile, win_from_discard)
        if not partitions:
            per_suit = []
            break
        per_suit.append(partitions)

    results: List[Decomposition] = []
    if per_suit:
        for combo in itertools.product(*per_suit):
            groups = tuple(g for part in combo for g in part) + tuple(declared)
            if is_valid_decomposition(groups):
                results.append(groups)

    if not results and not declared:
        special = match_knitted_and_honors(free_tiles) or match_thirteen_orphans(free_tiles)
        if special is not None:
            results.append((special,))

    logger.debug(f"Found {len(results)} decompositions for {len(free_tiles)} free tiles "
                 f"and {len(declared)} declared melds")
    return results


def _partition_suit(suit: TileSuit, counts: np.ndarray) -> List[Tuple[Group, ...]]:
    """
    All ways to use up every tile of one suit.

    Works on an explicit stack of (remaining counts, groups so far). The
    lowest remaining tile always starts the next group, so each partition
    is reached through one ordering only; duplicates still arise from equal
    groups and are removed at the end.
    """
    numbered = suit in NUMBERED_SUITS
    size = len(counts)
    found = set()
    stack = [(counts.copy(), ())]

    while stack:
        remaining, groups = stack.pop()
        nonzero = np.flatnonzero(remaining)
        if len(nonzero) == 0:
            found.add(tuple(sorted(groups)))
            continue

        first = int(nonzero[0])
        options = []
        if remaining[first] >= 3:
            options.append((GroupKind.PUNG, (first, first, first)))
        if remaining[first] >= 2:
            options.append((GroupKind.PAIR, (first, first)))
        if numbered and first + 2 < size and remaining[first + 1] and remaining[first + 2]:
            options.append((GroupKind.CHOW, (first, first + 1, first + 2)))
        if numbered and first + 6 < size and remaining[first + 3] and remaining[first + 6]:
            options.append((GroupKind.KNITTED, (first, first + 3, first + 6)))

        for kind, used in options:
            next_counts = remaining.copy()
            for idx in used:
                next_counts[idx] -= 1
            stack.append((next_counts, groups + ((kind, first),)))

    partitions = []
    for shape in sorted(found):
        partitions.append(tuple(Group(kind, _suit_tile(suit, offset)) for kind, offset in shape))
    return partitions


def _suit_tile(suit: TileSuit, offset: int) -> Tile:
    if suit in NUMBERED_SUITS:
        return Tile(suit, offset + 1)
    return Tile(suit, offset)


def _mark_winning(partitions: List[Tuple[Group, ...]], winning_tile: Tile,
                  win_from_discard: bool) -> List[Tuple[Group, ...]]:
    """
    One variant per distinct group that could have been completed by the
    winning tile, with that group flagged as winning.
    """
    variants = []
    seen = set()
    for groups in partitions:
        for i, group in enumerate(groups):
            if not group.contains(winning_tile):
                continue
            marked = groups[:i] + (group.as_winning(exposed=win_from_discard),) + groups[i + 1:]
            key = tuple(sorted(marked, key=Group.sort_key))
            if key not in seen:
                seen.add(key)
                variants.append(marked)
    return variants


def is_valid_decomposition(groups: Sequence[Group]) -> bool:
    """
    Check the structural rules of a complete hand: 14 tile slots, one pair
    (or seven), and either no knitted triplets or three forming a knitted
    straight across all suits.
    """
    if sum(g.slot_size for g in groups) != HAND_SIZE:
        return False

    pairs = sum(1 for g in groups if g.kind == GroupKind.PAIR)
    if pairs not in (1, 7):
        return False

    knitted = [g for g in groups if g.kind == GroupKind.KNITTED]
    if knitted:
        if len(knitted) != 3:
            return False
        if len({g.suit for g in knitted}) != 3 or len({g.tile.value for g in knitted}) != 3:
            return False
    return True


def match_knitted_and_honors(tiles: Sequence[Tile]) -> Optional[Group]:
    """
    Honors and Knitted Tiles: 14 different tiles, the numbered ones taken
    from a knitted straight (1-4-7, 2-5-8, 3-6-9 in three different suits).
    """
    if len(tiles) != HAND_SIZE or len(set(tiles)) != HAND_SIZE:
        return None

    classes = {}
    for tile in tiles:
        if not tile.is_numbered:
            continue
        offset = (tile.value - 1) % 3
        if classes.setdefault(tile.suit, offset) != offset:
            return None
    if len(classes) != 3 or len(set(classes.values())) != 3:
        return None

    ordered = tuple(sorted(tiles))
    return Group(GroupKind.KNITTED_AND_HONORS, ordered[0], winning=True, hand_tiles=ordered)


def match_thirteen_orphans(tiles: Sequence[Tile]) -> Optional[Group]:
    """Thirteen Orphans: every terminal and honor, plus one more of any of them"""
    if len(tiles) != HAND_SIZE:
        return None
    if not all(t.is_terminal_or_honor for t in tiles):
        return None
    if set(tiles) != set(ORPHANS):
        return None

    ordered = tuple(sorted(tiles))
    return Group(GroupKind.THIRTEEN_ORPHANS, ordered[0], winning=True, hand_tiles=ordered)


def waiting_tiles(declared_melds: Sequence[DeclaredMeld],
                  concealed_tiles: Sequence[Tile]) -> FrozenSet[Tile]:
    """
    Tiles that would complete the hand.

    Every tile type is tried as the winning tile; a tile whose four copies
    are already all in the hand is skipped. Results are cached per hand.
    """
    key_melds = tuple(tuple(meld) for meld in declared_melds)
    key_tiles = tuple(sorted(concealed_tiles))
    return _cached_waiting_tiles(key_melds, key_tiles)


@lru_cache(maxsize=WAIT_CACHE_SIZE)
def _cached_waiting_tiles(declared_melds: Tuple[DeclaredMeld, ...],
                          concealed_tiles: Tuple[Tile, ...]) -> FrozenSet[Tile]:
    held = to_count_array(concealed_tiles)
    for meld in declared_melds:
        group = parse_declared_meld(meld)
        if group is None:
            return frozenset()
        for tile in group.tiles():
            held[tile.tile_index] += 1

    waits = set()
    for tile in ALL_TILES:
        if held[tile.tile_index] >= COPIES_PER_TYPE:
            continue
        if decompose(declared_melds, concealed_tiles, tile):
            waits.add(tile)
    logger.debug(f"Hand waits on {len(waits)} tile types")
    return frozenset(waits)


def clear_wait_cache() -> None:
    _cached_waiting_tiles.cache_clear()


def wait_cache_info():
    return _cached_waiting_tiles.cache_info()
