"""
MCR Scoring Groups

A hand is scored as a set of groups: melds (Chow, Pung, Kong, Knitted),
the pair, or one of the whole-hand special shapes.
"""

from enum import IntEnum
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple

from .tiles import Tile, TileSuit, is_sequential

# A declared meld as shown on the table. None marks a face-down tile of a concealed kong.
DeclaredMeld = Tuple[Optional[Tile], ...]


class GroupKind(IntEnum):
    """Kinds of groups a winning hand can be split into"""
    PAIR = 0               # 将 - 2 identical tiles
    PUNG = 1               # 刻子 - 3 identical tiles
    KONG = 2               # 杠 - 4 identical tiles
    CHOW = 3               # 顺子 - Sequence of 3 consecutive tiles in same suit
    KNITTED = 4            # 组合龙 part - 3 same-suit tiles 3 apart (1-4-7, 2-5-8, 3-6-9)
    KNITTED_AND_HONORS = 5  # 全不靠 - whole hand
    THIRTEEN_ORPHANS = 6    # 十三幺 - whole hand


SPECIAL_KINDS = (GroupKind.KNITTED_AND_HONORS, GroupKind.THIRTEEN_ORPHANS)


@dataclass(frozen=True)
class Group:
    """
    One group of a decomposed hand.

    Attributes:
        kind: Kind of group
        tile: Identical tile for pairs/pungs/kongs, lowest tile for chows and
            knitted triplets, lowest tile of the hand for whole-hand specials
        concealed: False when the group is exposed to the table
        declared: True when the group was declared before the winning tile arrived
        winning: True for the group that holds the winning tile
        hand_tiles: All 14 tiles, whole-hand specials only
    """
    kind: GroupKind
    tile: Tile
    concealed: bool = True
    declared: bool = False
    winning: bool = False
    hand_tiles: Tuple[Tile, ...] = ()

    def tiles(self) -> List[Tile]:
        """Physical tiles of the group (4 for a kong)"""
        if self.kind in SPECIAL_KINDS:
            return list(self.hand_tiles)
        if self.kind == GroupKind.CHOW:
            return [Tile(self.tile.suit, self.tile.value + i) for i in range(3)]
        if self.kind == GroupKind.KNITTED:
            return [Tile(self.tile.suit, self.tile.value + 3 * i) for i in range(3)]
        size = {GroupKind.PAIR: 2, GroupKind.PUNG: 3, GroupKind.KONG: 4}[self.kind]
        return [self.tile] * size

    @property
    def slot_size(self) -> int:
        """Tiles counted towards the 14 of a winning hand; a kong fills a pung's slot"""
        if self.kind in SPECIAL_KINDS:
            return len(self.hand_tiles)
        if self.kind == GroupKind.PAIR:
            return 2
        return 3

    @property
    def is_pung_or_kong(self) -> bool:
        return self.kind in (GroupKind.PUNG, GroupKind.KONG)

    @property
    def is_special(self) -> bool:
        return self.kind in SPECIAL_KINDS

    @property
    def suit(self) -> TileSuit:
        return self.tile.suit

    def contains(self, tile: Tile) -> bool:
        return tile in self.tiles()

    def sort_key(self) -> tuple:
        return (self.kind, self.tile.suit, self.tile.value, self.declared, self.winning)

    def as_winning(self, exposed: bool) -> 'Group':
        """Copy of this group flagged as completed by the winning tile"""
        return replace(self, winning=True, concealed=not exposed)

    def __str__(self) -> str:
        tiles = "".join(str(t) for t in self.tiles())
        flags = []
        if self.declared:
            flags.append("declared")
        if not self.concealed:
            flags.append("exposed")
        if self.winning:
            flags.append("winning")
        suffix = f" ({', '.join(flags)})" if flags else ""
        return f"{self.kind.name.lower()} {tiles}{suffix}"


def parse_declared_meld(meld: Sequence[Optional[Tile]]) -> Optional[Group]:
    """
    Turn a declared meld into a group.

    2 identical tiles make a pair, 3 identical a pung, 3 in sequence a chow.
    4 entries make a kong, concealed when any entry is face down (None).

    Returns:
        The declared group, or None when the tiles form no group
    """
    known = [t for t in meld if t is not None]
    if not known:
        return None

    if len(meld) == 4:
        if not all(t == known[0] for t in known):
            return None
        concealed = len(known) < 4
        return Group(GroupKind.KONG, known[0], concealed=concealed, declared=True)

    if len(known) != len(meld):
        return None
    if len(meld) == 2 and known[0] == known[1]:
        return Group(GroupKind.PAIR, known[0], concealed=False, declared=True)
    if len(meld) == 3:
        if all(t == known[0] for t in known):
            return Group(GroupKind.PUNG, known[0], concealed=False, declared=True)
        if is_sequential(known):
            return Group(GroupKind.CHOW, min(known), concealed=False, declared=True)
    return None
