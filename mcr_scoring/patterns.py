"""
MCR Scoring Patterns

The scoring patterns of Chinese Official Mahjong (MCR), from 88 points
down to 1 (flower tiles are not scored), plus the Chicken Hand fallback.

Each pattern evaluates one decomposition of the hand and returns how many
times it matches (most match once; some, like Dragon Pung, count every
qualifying group). Patterns built from particular groups (the chow and pung
families) also report which groups each match uses, so that the resolution
step can stop two patterns from crediting the same groups twice.

MCR uses an exclusion principle where higher-scoring patterns exclude
patterns they imply (e.g., Big Four Winds excludes All Pungs).
"""

import itertools
from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, List, Optional, Sequence, Tuple

from .context import GameContext
from .decomposition import Decomposition, waiting_tiles
from .groups import Group, GroupKind
from .tiles import NUMBERED_SUITS, Tile

EvaluateFunc = Callable[[Decomposition, GameContext], int]
GroupsUsedFunc = Callable[[Decomposition, GameContext], List[FrozenSet[int]]]


@dataclass(frozen=True)
class ScoringPattern:
    """
    Represents a scoring pattern.

    Attributes:
        name: English pattern name
        chinese_name: Chinese pattern name
        points: Points per match
        evaluate: Returns the number of matches for a decomposition
        excludes: Names of patterns this one suppresses
        groups_used: For group-bound patterns, the group indices of every match
    """
    name: str
    chinese_name: str
    points: int
    evaluate: EvaluateFunc
    excludes: Tuple[str, ...] = ()
    groups_used: Optional[GroupsUsedFunc] = None

    @property
    def is_group_bound(self) -> bool:
        return self.groups_used is not None

    def __repr__(self) -> str:
        return f"ScoringPattern({self.name!r}, {self.points})"


# ========== Hand helpers ==========

def _pungs(d: Decomposition) -> List[Group]:
    """Pungs and kongs"""
    return [g for g in d if g.is_pung_or_kong]


def _kongs(d: Decomposition) -> List[Group]:
    return [g for g in d if g.kind == GroupKind.KONG]


def _chows(d: Decomposition) -> List[Group]:
    return [g for g in d if g.kind == GroupKind.CHOW]


def _pairs(d: Decomposition) -> List[Group]:
    return [g for g in d if g.kind == GroupKind.PAIR]


def _tiles(d: Decomposition) -> List[Tile]:
    return [t for g in d for t in g.tiles()]


def _special(d: Decomposition, kind: GroupKind) -> bool:
    return len(d) == 1 and d[0].kind == kind


def _is_standard(d: Decomposition) -> bool:
    """Four melds and a pair"""
    return len(d) == 5 and len(_pairs(d)) == 1


def _suits_present(tiles: Sequence[Tile]) -> set:
    return {t.suit for t in tiles if t.is_numbered}


def _winning_group(d: Decomposition) -> Optional[Group]:
    for g in d:
        if g.winning:
            return g
    return None


def _has_single_wait(ctx: GameContext) -> bool:
    return len(waiting_tiles(ctx.declared_melds, ctx.concealed_tiles)) == 1


def _is_open(d: Decomposition) -> bool:
    """Any group declared to the table other than a concealed kong"""
    return any(g.declared and not (g.kind == GroupKind.KONG and g.concealed) for g in d)


def _wind_pungs(d: Decomposition) -> List[Group]:
    return [g for g in _pungs(d) if g.tile.is_wind]


def _dragon_pungs(d: Decomposition) -> List[Group]:
    return [g for g in _pungs(d) if g.tile.is_dragon]


def _concealed_pungs(d: Decomposition) -> int:
    return sum(1 for g in _pungs(d) if g.concealed)


def _is_terminal_or_honor_pung(group: Group, ctx: GameContext) -> bool:
    """Pung or kong of 1s, 9s, or a wind that is neither seat nor prevalent wind"""
    if group.tile.is_wind:
        return group.tile not in (ctx.seat_wind, ctx.prevalent_wind)
    return group.tile.is_terminal


def has_non_wind_terminal_pung(d: Decomposition) -> bool:
    return any(g.tile.is_terminal for g in _pungs(d))


def _consecutive(values: Sequence[int]) -> bool:
    ordered = sorted(values)
    return all(b == a + 1 for a, b in zip(ordered, ordered[1:]))


def _numbered_pung_values(d: Decomposition) -> Dict[int, set]:
    """value -> suits holding a numbered pung or kong of that value"""
    by_value: Dict[int, set] = {}
    for g in _pungs(d):
        if g.tile.is_numbered:
            by_value.setdefault(g.tile.value, set()).add(g.suit)
    return by_value


# ========== Group-bound families ==========

def _instances(kinds: Tuple[GroupKind, ...], size: int,
               predicate: Callable[[List[Group]], bool]) -> GroupsUsedFunc:
    """Every combination of `size` groups of the given kinds that satisfies predicate"""
    def find(d: Decomposition, ctx: GameContext) -> List[FrozenSet[int]]:
        indices = [i for i, g in enumerate(d) if g.kind in kinds]
        return [frozenset(combo) for combo in itertools.combinations(indices, size)
                if predicate([d[i] for i in combo])]
    return find


def _count_of(find: GroupsUsedFunc) -> EvaluateFunc:
    return lambda d, ctx: len(find(d, ctx))


def _same_suit(groups: List[Group]) -> bool:
    return len({g.suit for g in groups}) == 1


def _distinct_suits(groups: List[Group]) -> bool:
    return len({g.suit for g in groups}) == len(groups)


def _values(groups: List[Group]) -> List[int]:
    return [g.tile.value for g in groups]


_CHOW = (GroupKind.CHOW,)
_PUNG = (GroupKind.PUNG, GroupKind.KONG)

_find_pure_triple_chow = _instances(
    _CHOW, 3, lambda gs: _same_suit(gs) and len(set(_values(gs))) == 1)
_find_pure_shifted_pungs = _instances(
    _PUNG, 3, lambda gs: gs[0].tile.is_numbered and _same_suit(gs) and _consecutive(_values(gs)))
_find_mixed_straight = _instances(
    _CHOW, 3, lambda gs: _distinct_suits(gs) and sorted(_values(gs)) == [1, 4, 7])
_find_mixed_triple_chow = _instances(
    _CHOW, 3, lambda gs: _distinct_suits(gs) and len(set(_values(gs))) == 1)
_find_mixed_shifted_pungs = _instances(
    _PUNG, 3, lambda gs: all(g.tile.is_numbered for g in gs) and _distinct_suits(gs)
    and _consecutive(_values(gs)))
_find_mixed_shifted_chows = _instances(
    _CHOW, 3, lambda gs: _distinct_suits(gs) and _consecutive(_values(gs)))
_find_pure_double_chow = _instances(
    _CHOW, 2, lambda gs: _same_suit(gs) and gs[0].tile.value == gs[1].tile.value)
_find_mixed_double_chow = _instances(
    _CHOW, 2, lambda gs: _distinct_suits(gs) and gs[0].tile.value == gs[1].tile.value)
_find_short_straight = _instances(
    _CHOW, 2, lambda gs: _same_suit(gs) and abs(gs[0].tile.value - gs[1].tile.value) == 3)
_find_two_terminal_chows = _instances(
    _CHOW, 2, lambda gs: _same_suit(gs) and sorted(_values(gs)) == [1, 7])


# ========== 88 Points ==========

def _check_big_four_winds(d, ctx):
    return int(len(_wind_pungs(d)) == 4)


def _check_big_three_dragons(d, ctx):
    return int(len(_dragon_pungs(d)) == 3)


def _check_all_green(d, ctx):
    return int(all(t.is_green for t in _tiles(d)))


def _check_nine_gates(d, ctx):
    """1112345678999 plus any tile of the same suit, fully concealed"""
    if any(g.declared for g in d):
        return 0
    tiles = _tiles(d)
    if len(tiles) != 14 or not all(t.is_numbered for t in tiles):
        return 0
    if len({t.suit for t in tiles}) != 1:
        return 0
    counts = [0] * 10
    for t in tiles:
        counts[t.value] += 1
    if counts[1] < 3 or counts[9] < 3:
        return 0
    return int(all(counts[v] >= 1 for v in range(2, 9)))


def _check_four_kongs(d, ctx):
    return int(len(_kongs(d)) == 4)


def _check_seven_shifted_pairs(d, ctx):
    pairs = _pairs(d)
    if len(pairs) != 7 or not pairs[0].tile.is_numbered or not _same_suit(pairs):
        return 0
    return int(_consecutive(_values(pairs)) and len(set(_values(pairs))) == 7)


def _check_thirteen_orphans(d, ctx):
    return int(_special(d, GroupKind.THIRTEEN_ORPHANS))


# ========== 64 Points ==========

def _check_all_terminals(d, ctx):
    return int(all(t.is_terminal for t in _tiles(d)))


def _check_all_honors(d, ctx):
    return int(all(t.is_honor for t in _tiles(d)))


def _check_little_four_winds(d, ctx):
    pairs = _pairs(d)
    return int(len(_wind_pungs(d)) == 3 and len(pairs) == 1 and pairs[0].tile.is_wind)


def _check_little_three_dragons(d, ctx):
    pairs = _pairs(d)
    return int(len(_dragon_pungs(d)) == 2 and len(pairs) == 1 and pairs[0].tile.is_dragon)


def _check_four_concealed_pungs(d, ctx):
    return int(_concealed_pungs(d) >= 4)


def _check_pure_terminal_chows(d, ctx):
    tiles = _tiles(d)
    if not all(t.is_numbered for t in tiles) or len({t.suit for t in tiles}) != 1:
        return 0
    chows, pairs = _chows(d), _pairs(d)
    if len(chows) != 4 or len(pairs) != 1 or pairs[0].tile.value != 5:
        return 0
    return int(sorted(_values(chows)) == [1, 1, 7, 7])


# ========== 48 Points ==========

def _check_quadruple_chow(d, ctx):
    chows = _chows(d)
    return int(len(chows) == 4 and len({(g.suit, g.tile.value) for g in chows}) == 1)


def _check_four_pure_shifted_pungs(d, ctx):
    pungs = _pungs(d)
    if len(pungs) != 4 or not pungs[0].tile.is_numbered or not _same_suit(pungs):
        return 0
    return int(_consecutive(_values(pungs)))


# ========== 32 Points ==========

def _check_four_shifted_chows(d, ctx):
    """Four chows in one suit, each shifted up by one, or each by two"""
    chows = _chows(d)
    if len(chows) != 4 or not _same_suit(chows):
        return 0
    values = sorted(_values(chows))
    diffs = {b - a for a, b in zip(values, values[1:])}
    return int(diffs in ({1}, {2}))


def _check_three_kongs(d, ctx):
    return int(len(_kongs(d)) == 3)


def _check_all_terminals_and_honors(d, ctx):
    return int(all(t.is_terminal_or_honor for t in _tiles(d)))


# ========== 24 Points ==========

def _check_seven_pairs(d, ctx):
    return int(len(d) == 7 and len(_pairs(d)) == 7)


def _check_greater_honors_knitted(d, ctx):
    if not _special(d, GroupKind.KNITTED_AND_HONORS):
        return 0
    return int(sum(1 for t in d[0].tiles() if t.is_honor) == 7)


def _check_all_even_pungs(d, ctx):
    even = [g for g in d if g.tile.is_numbered and g.tile.value % 2 == 0]
    return int(_is_standard(d) and len(_pungs(d)) == 4 and len(even) == 5)


def _check_full_flush(d, ctx):
    tiles = _tiles(d)
    return int(all(t.is_numbered for t in tiles) and len({t.suit for t in tiles}) == 1)


def _check_upper_tiles(d, ctx):
    return int(all(t.is_numbered and t.value >= 7 for t in _tiles(d)))


def _check_middle_tiles(d, ctx):
    return int(all(t.is_numbered and 4 <= t.value <= 6 for t in _tiles(d)))


def _check_lower_tiles(d, ctx):
    return int(all(t.is_numbered and t.value <= 3 for t in _tiles(d)))


# ========== 16 Points ==========

def _check_pure_straight(d, ctx):
    chows = _chows(d)
    for suit in NUMBERED_SUITS:
        values = {g.tile.value for g in chows if g.suit == suit}
        if {1, 4, 7} <= values:
            return 1
    return 0


def _check_three_suited_terminal_chows(d, ctx):
    """123 and 789 chows in two suits, pair of 5s in the third"""
    pairs = _pairs(d)
    if len(pairs) != 1 or not pairs[0].tile.is_numbered or pairs[0].tile.value != 5:
        return 0
    chows = {(g.suit, g.tile.value) for g in _chows(d)}
    others = [s for s in NUMBERED_SUITS if s != pairs[0].suit]
    return int(all((s, 1) in chows and (s, 7) in chows for s in others))


def _check_pure_shifted_chows(d, ctx):
    """Three chows in one suit, each shifted up by one, or each by two"""
    for combo in itertools.combinations(_chows(d), 3):
        if not _same_suit(list(combo)):
            continue
        a, b, c = sorted(_values(list(combo)))
        if b - a == c - b and b - a in (1, 2):
            return 1
    return 0


def _check_all_fives(d, ctx):
    if not _is_standard(d):
        return 0
    return int(all(any(t.is_numbered and t.value == 5 for t in g.tiles()) for g in d))


def _check_triple_pung(d, ctx):
    return int(any(len(suits) == 3 for suits in _numbered_pung_values(d).values()))


def _check_three_concealed_pungs(d, ctx):
    return int(_concealed_pungs(d) >= 3)


# ========== 12 Points ==========

def _check_lesser_honors_knitted(d, ctx):
    return int(_special(d, GroupKind.KNITTED_AND_HONORS))


def _check_knitted_straight(d, ctx):
    if _special(d, GroupKind.KNITTED_AND_HONORS):
        values = [t.value for t in d[0].tiles() if t.is_numbered]
        return int(len(values) == 9 and len(set(values)) == 9)
    return int(sum(1 for g in d if g.kind == GroupKind.KNITTED) == 3)


def _check_upper_four(d, ctx):
    return int(all(t.is_numbered and t.value >= 6 for t in _tiles(d)))


def _check_lower_four(d, ctx):
    return int(all(t.is_numbered and t.value <= 4 for t in _tiles(d)))


def _check_big_three_winds(d, ctx):
    return int(len(_wind_pungs(d)) == 3)


# ========== 8 Points ==========

def _check_reversible_tiles(d, ctx):
    return int(all(t.is_reversible for t in _tiles(d)))


def _check_two_concealed_kongs(d, ctx):
    return int(sum(1 for g in _kongs(d) if g.concealed) >= 2)


def _check_last_tile_draw(d, ctx):
    return int(ctx.last_tile_in_game and ctx.win_from_wall)


def _check_last_tile_claim(d, ctx):
    return int(ctx.last_tile_in_game and ctx.win_from_discard)


def _check_out_with_replacement_tile(d, ctx):
    return int(ctx.replacement_tile)


def _check_robbing_the_kong(d, ctx):
    return int(ctx.robbing_the_kong)


# ========== 6 Points ==========

def _check_all_pungs(d, ctx):
    return int(_is_standard(d) and len(_pungs(d)) == 4)


def _check_half_flush(d, ctx):
    tiles = _tiles(d)
    return int(len(_suits_present(tiles)) == 1 and any(t.is_honor for t in tiles))


def _check_all_types(d, ctx):
    tiles = _tiles(d)
    return int(len({t.suit for t in tiles}) == 5)


def _check_melded_hand(d, ctx):
    """Four melds declared to the table, won on a discard"""
    melded = [g for g in d if g.kind != GroupKind.PAIR and g.declared and not g.concealed]
    return int(len(melded) == 4 and ctx.win_from_discard)


def _check_two_dragon_pungs(d, ctx):
    return int(len(_dragon_pungs(d)) >= 2)


# ========== 4 Points ==========

def _check_outside_hand(d, ctx):
    """Every group holds a terminal or honor"""
    if any(g.kind == GroupKind.KNITTED or g.is_special for g in d):
        return 0
    return int(all(any(t.is_terminal_or_honor for t in g.tiles()) for g in d))


def _check_fully_concealed_hand(d, ctx):
    return int(not _is_open(d) and ctx.win_from_wall)


def _check_two_melded_kongs(d, ctx):
    kongs = _kongs(d)
    exposed = sum(1 for g in kongs if not g.concealed)
    concealed = len(kongs) - exposed
    return int(exposed >= 2 or (exposed == 1 and concealed == 1))


def _check_last_tile(d, ctx):
    return int(ctx.last_tile_of_kind)


# ========== 2 Points ==========

def _check_dragon_pung(d, ctx):
    return len(_dragon_pungs(d))


def _check_prevalent_wind(d, ctx):
    if ctx.prevalent_wind is None:
        return 0
    return int(any(g.tile == ctx.prevalent_wind for g in _pungs(d)))


def _check_seat_wind(d, ctx):
    if ctx.seat_wind is None:
        return 0
    return int(any(g.tile == ctx.seat_wind for g in _pungs(d)))


def _check_concealed_hand(d, ctx):
    return int(not _is_open(d) and ctx.win_from_discard)


def _check_all_chows(d, ctx):
    pairs = _pairs(d)
    return int(len(_chows(d)) == 4 and len(pairs) == 1 and not pairs[0].tile.is_honor)


def _check_tile_hog(d, ctx):
    """All four copies of a tile used outside a kong"""
    counts: Dict[Tile, int] = {}
    for g in d:
        if g.kind in (GroupKind.CHOW, GroupKind.PUNG, GroupKind.PAIR):
            for t in g.tiles():
                counts[t] = counts.get(t, 0) + 1
    return sum(1 for n in counts.values() if n == 4)


def _check_double_pung(d, ctx):
    return sum(1 for suits in _numbered_pung_values(d).values() if len(suits) >= 2)


def _check_two_concealed_pungs(d, ctx):
    return int(_concealed_pungs(d) >= 2)


def _check_concealed_kong(d, ctx):
    return int(any(g.concealed for g in _kongs(d)))


def _check_all_simples(d, ctx):
    return int(all(t.is_simple for t in _tiles(d)))


# ========== 1 Point ==========

def _check_pung_of_terminals_or_honors(d, ctx):
    return sum(1 for g in _pungs(d) if _is_terminal_or_honor_pung(g, ctx))


def _check_melded_kong(d, ctx):
    return sum(1 for g in _kongs(d) if not g.concealed)


def _check_one_voided_suit(d, ctx):
    return int(len(_suits_present(_tiles(d))) == 2)


def _check_no_honors(d, ctx):
    return int(not any(t.is_honor for t in _tiles(d)))


def _check_edge_wait(d, ctx):
    """Won on the 3 of 1-2-3 or the 7 of 7-8-9"""
    group = _winning_group(d)
    if group is None or group.kind != GroupKind.CHOW or not _has_single_wait(ctx):
        return 0
    win = ctx.winning_tile.value
    return int((group.tile.value == 1 and win == 3) or (group.tile.value == 7 and win == 7))


def _check_closed_wait(d, ctx):
    """Won on the middle tile of a chow"""
    group = _winning_group(d)
    if group is None or group.kind != GroupKind.CHOW or not _has_single_wait(ctx):
        return 0
    return int(ctx.winning_tile.value == group.tile.value + 1)


def _check_single_wait(d, ctx):
    """Won on the tile completing the pair"""
    group = _winning_group(d)
    if group is None or group.kind != GroupKind.PAIR or not _has_single_wait(ctx):
        return 0
    return 1


def _check_self_drawn(d, ctx):
    return int(ctx.win_from_wall)


def _create_patterns() -> Tuple[ScoringPattern, ...]:
    """Create the scoring patterns, highest value first"""
    patterns = []

    def add(name, chinese_name, points, check, excludes=()):
        patterns.append(ScoringPattern(name, chinese_name, points, check, tuple(excludes)))

    def add_bound(name, chinese_name, points, find, excludes=()):
        patterns.append(ScoringPattern(name, chinese_name, points, _count_of(find),
                                       tuple(excludes), find))

    # ========== 88 Points ==========
    add("Big Four Winds", "大四喜", 88, _check_big_four_winds,
        ["Pung of Terminals or Honors", "Prevalent Wind", "Seat Wind", "All Pungs",
         "Big Three Winds", "Little Four Winds"])
    add("Big Three Dragons", "大三元", 88, _check_big_three_dragons,
        ["Dragon Pung", "Two Dragon Pungs", "Little Three Dragons"])
    add("All Green", "绿一色", 88, _check_all_green,
        ["Half Flush", "One Voided Suit"])
    add("Nine Gates", "九莲宝灯", 88, _check_nine_gates,
        ["Pung of Terminals or Honors", "One Voided Suit", "Concealed Hand",
         "Half Flush", "Full Flush", "No Honors"])
    add("Four Kongs", "四杠", 88, _check_four_kongs,
        ["Melded Kong", "Single Wait", "Two Melded Kongs", "All Pungs", "Three Kongs"])
    add("Seven Shifted Pairs", "连七对", 88, _check_seven_shifted_pairs,
        ["One Voided Suit", "No Honors", "Single Wait", "Concealed Hand",
         "Half Flush", "Seven Pairs", "Full Flush"])
    add("Thirteen Orphans", "十三幺", 88, _check_thirteen_orphans,
        ["Concealed Hand", "Outside Hand", "All Types", "All Terminals and Honors",
         "Single Wait"])

    # ========== 64 Points ==========
    add("All Terminals", "清幺九", 64, _check_all_terminals,
        ["Pung of Terminals or Honors", "No Honors", "Outside Hand", "All Pungs",
         "All Terminals and Honors"])
    add("All Honors", "字一色", 64, _check_all_honors,
        ["Pung of Terminals or Honors", "One Voided Suit", "Outside Hand", "All Pungs",
         "All Terminals and Honors"])
    add("Little Four Winds", "小四喜", 64, _check_little_four_winds,
        ["Pung of Terminals or Honors", "Big Three Winds"])
    add("Little Three Dragons", "小三元", 64, _check_little_three_dragons,
        ["Dragon Pung", "Two Dragon Pungs"])
    add("Four Concealed Pungs", "四暗刻", 64, _check_four_concealed_pungs,
        ["Concealed Hand", "Two Concealed Pungs", "All Pungs", "Three Concealed Pungs"])
    add("Pure Terminal Chows", "一色双龙会", 64, _check_pure_terminal_chows,
        ["Pure Double Chow", "Two Terminal Chows", "One Voided Suit", "All Chows",
         "Half Flush", "Full Flush"])

    # ========== 48 Points ==========
    add("Quadruple Chow", "一色四同顺", 48, _check_quadruple_chow,
        ["Pure Double Chow", "Tile Hog", "Pure Triple Chow"])
    add("Four Pure Shifted Pungs", "一色四节高", 48, _check_four_pure_shifted_pungs,
        ["All Pungs", "Pure Shifted Pungs"])

    # ========== 32 Points ==========
    add("Four Shifted Chows", "一色四步高", 32, _check_four_shifted_chows,
        ["Short Straight", "Pure Shifted Chows"])
    add("Three Kongs", "三杠", 32, _check_three_kongs,
        ["Melded Kong", "Two Melded Kongs"])
    add("All Terminals and Honors", "混幺九", 32, _check_all_terminals_and_honors,
        ["Pung of Terminals or Honors", "Outside Hand", "All Pungs"])

    # ========== 24 Points ==========
    add("Seven Pairs", "七对", 24, _check_seven_pairs,
        ["Single Wait", "Concealed Hand"])
    add("Greater Honors and Knitted Tiles", "七星不靠", 24, _check_greater_honors_knitted,
        ["Concealed Hand", "All Types", "Lesser Honors and Knitted Tiles"])
    add("All Even Pungs", "全双刻", 24, _check_all_even_pungs,
        ["No Honors", "All Simples", "All Pungs"])
    add("Full Flush", "清一色", 24, _check_full_flush,
        ["One Voided Suit", "No Honors", "Half Flush"])
    add_bound("Pure Triple Chow", "一色三同顺", 24, _find_pure_triple_chow,
              ["Pure Double Chow"])
    add_bound("Pure Shifted Pungs", "一色三节高", 24, _find_pure_shifted_pungs)
    add("Upper Tiles", "全大", 24, _check_upper_tiles,
        ["No Honors", "Upper Four"])
    add("Middle Tiles", "全中", 24, _check_middle_tiles,
        ["No Honors", "All Simples"])
    add("Lower Tiles", "全小", 24, _check_lower_tiles,
        ["No Honors", "Lower Four"])

    # ========== 16 Points ==========
    add("Pure Straight", "清龙", 16, _check_pure_straight,
        ["Short Straight", "Two Terminal Chows"])
    add("Three-Suited Terminal Chows", "三色双龙会", 16, _check_three_suited_terminal_chows,
        ["Mixed Double Chow", "Two Terminal Chows", "No Honors", "All Chows"])
    add("Pure Shifted Chows", "一色三步高", 16, _check_pure_shifted_chows)
    add("All Fives", "全带五", 16, _check_all_fives,
        ["No Honors", "All Simples"])
    add("Triple Pung", "三同刻", 16, _check_triple_pung,
        ["Double Pung"])
    add("Three Concealed Pungs", "三暗刻", 16, _check_three_concealed_pungs,
        ["Two Concealed Pungs"])

    # ========== 12 Points ==========
    add("Lesser Honors and Knitted Tiles", "全不靠", 12, _check_lesser_honors_knitted,
        ["Concealed Hand", "All Types"])
    add("Knitted Straight", "组合龙", 12, _check_knitted_straight)
    add("Upper Four", "大于五", 12, _check_upper_four,
        ["No Honors"])
    add("Lower Four", "小于五", 12, _check_lower_four,
        ["No Honors"])
    add("Big Three Winds", "大三风", 12, _check_big_three_winds,
        ["Pung of Terminals or Honors"])

    # ========== 8 Points ==========
    add_bound("Mixed Straight", "花龙", 8, _find_mixed_straight)
    add("Reversible Tiles", "推不倒", 8, _check_reversible_tiles,
        ["One Voided Suit"])
    add_bound("Mixed Triple Chow", "三色三同顺", 8, _find_mixed_triple_chow,
              ["Mixed Double Chow"])
    add_bound("Mixed Shifted Pungs", "三色三节高", 8, _find_mixed_shifted_pungs)
    add("Two Concealed Kongs", "双暗杠", 8, _check_two_concealed_kongs,
        ["Two Concealed Pungs", "Concealed Kong"])
    add("Last Tile Draw", "妙手回春", 8, _check_last_tile_draw,
        ["Self-Drawn"])
    add("Last Tile Claim", "海底捞月", 8, _check_last_tile_claim)
    add("Out with Replacement Tile", "杠上开花", 8, _check_out_with_replacement_tile,
        ["Self-Drawn"])
    add("Robbing the Kong", "抢杠和", 8, _check_robbing_the_kong,
        ["Last Tile"])

    # ========== 6 Points ==========
    add("All Pungs", "碰碰和", 6, _check_all_pungs)
    add("Half Flush", "混一色", 6, _check_half_flush,
        ["One Voided Suit"])
    add_bound("Mixed Shifted Chows", "三色三步高", 6, _find_mixed_shifted_chows)
    add("All Types", "五门齐", 6, _check_all_types)
    add("Melded Hand", "全求人", 6, _check_melded_hand,
        ["Single Wait"])
    add("Two Dragon Pungs", "双箭刻", 6, _check_two_dragon_pungs,
        ["Dragon Pung"])

    # ========== 4 Points ==========
    add("Outside Hand", "全带幺", 4, _check_outside_hand)
    add("Fully Concealed Hand", "不求人", 4, _check_fully_concealed_hand,
        ["Self-Drawn"])
    add("Two Melded Kongs", "双明杠", 4, _check_two_melded_kongs,
        ["Melded Kong"])
    add("Last Tile", "和绝张", 4, _check_last_tile)

    # ========== 2 Points ==========
    add("Dragon Pung", "箭刻", 2, _check_dragon_pung)
    add("Prevalent Wind", "圈风刻", 2, _check_prevalent_wind)
    add("Seat Wind", "门风刻", 2, _check_seat_wind)
    add("Concealed Hand", "门前清", 2, _check_concealed_hand)
    add("All Chows", "平和", 2, _check_all_chows,
        ["No Honors"])
    add("Tile Hog", "四归一", 2, _check_tile_hog)
    add("Double Pung", "双同刻", 2, _check_double_pung)
    add("Two Concealed Pungs", "双暗刻", 2, _check_two_concealed_pungs)
    add("Concealed Kong", "暗杠", 2, _check_concealed_kong)
    add("All Simples", "断幺九", 2, _check_all_simples,
        ["No Honors"])

    # ========== 1 Point ==========
    add_bound("Pure Double Chow", "一般高", 1, _find_pure_double_chow)
    add_bound("Mixed Double Chow", "喜相逢", 1, _find_mixed_double_chow)
    add_bound("Short Straight", "连六", 1, _find_short_straight)
    add_bound("Two Terminal Chows", "老少副", 1, _find_two_terminal_chows)
    add("Pung of Terminals or Honors", "幺九刻", 1, _check_pung_of_terminals_or_honors)
    add("Melded Kong", "明杠", 1, _check_melded_kong)
    add("One Voided Suit", "缺一门", 1, _check_one_voided_suit)
    add("No Honors", "无字", 1, _check_no_honors)
    add("Edge Wait", "边张", 1, _check_edge_wait)
    add("Closed Wait", "嵌张", 1, _check_closed_wait)
    add("Single Wait", "单钓将", 1, _check_single_wait,
        ["Edge Wait", "Closed Wait"])
    add("Self-Drawn", "自摸", 1, _check_self_drawn)

    return tuple(patterns)


def _check_registry(patterns: Sequence[ScoringPattern]) -> None:
    names = [p.name for p in patterns]
    if len(set(names)) != len(names):
        raise ValueError("Duplicate pattern names in registry")
    for pattern in patterns:
        unknown = set(pattern.excludes) - set(names)
        if unknown:
            raise ValueError(f"{pattern.name} excludes unknown patterns: {sorted(unknown)}")


PATTERNS: Tuple[ScoringPattern, ...] = _create_patterns()
_check_registry(PATTERNS)

PATTERNS_BY_NAME: Dict[str, ScoringPattern] = {p.name: p for p in PATTERNS}

# Registry position, used to break ties deterministically
PATTERN_ORDER: Dict[str, int] = {p.name: i for i, p in enumerate(PATTERNS)}

# Credited when nothing else is; never evaluated directly
CHICKEN_HAND = ScoringPattern("Chicken Hand", "无番和", 8, lambda d, ctx: 0)
