"""
MCR Scoring Tiles

Tile types used when scoring a Chinese Official Mahjong hand:
- 9 Characters (万), identifiers wan-1 .. wan-9
- 9 Bamboos (条), identifiers bamboo-1 .. bamboo-9
- 9 Dots (筒), identifiers circle-1 .. circle-9
- 4 Winds (东南西北), identifiers wind-east .. wind-north
- 3 Dragons (中发白), identifiers dragon-red, dragon-green, dragon-white
Total: 34 tile types
"""

from enum import IntEnum
from dataclasses import dataclass
from typing import Iterable, List, Sequence
import numpy as np


NUM_TILE_TYPES = 34
COPIES_PER_TYPE = 4


class TileParseError(ValueError):
    """Raised when a tile identifier cannot be parsed"""


class TileSuit(IntEnum):
    """Tile suits in MCR Mahjong, in canonical sort order"""
    CHARACTERS = 0  # 万 (Wan) - Numbers 1-9
    BAMBOOS = 1     # 条 (Tiao) - Numbers 1-9
    DOTS = 2        # 筒 (Tong) - Numbers 1-9
    WINDS = 3       # 风 (Feng) - East, South, West, North
    DRAGONS = 4     # 箭 (Jian) - Red, Green, White


NUMBERED_SUITS = (TileSuit.CHARACTERS, TileSuit.BAMBOOS, TileSuit.DOTS)


class WindType(IntEnum):
    """Wind tile types"""
    EAST = 0   # 东
    SOUTH = 1  # 南
    WEST = 2   # 西
    NORTH = 3  # 北


class DragonType(IntEnum):
    """Dragon tile types"""
    RED = 0    # 中 (Zhong)
    GREEN = 1  # 发 (Fa)
    WHITE = 2  # 白 (Bai)


# Identifier prefixes, as sent by the game-state observer
SUIT_NAMES = {
    "wan": TileSuit.CHARACTERS,
    "bamboo": TileSuit.BAMBOOS,
    "circle": TileSuit.DOTS,
    "wind": TileSuit.WINDS,
    "dragon": TileSuit.DRAGONS,
}
_SUIT_PREFIX = {suit: name for name, suit in SUIT_NAMES.items()}

WIND_NAMES = {"east": WindType.EAST, "south": WindType.SOUTH,
              "west": WindType.WEST, "north": WindType.NORTH}
DRAGON_NAMES = {"red": DragonType.RED, "green": DragonType.GREEN,
                "white": DragonType.WHITE}
_WIND_SUFFIX = {value: name for name, value in WIND_NAMES.items()}
_DRAGON_SUFFIX = {value: name for name, value in DRAGON_NAMES.items()}

_REVERSIBLE = {
    TileSuit.DOTS: (1, 2, 3, 4, 5, 8, 9),
    TileSuit.BAMBOOS: (2, 4, 5, 6, 8, 9),
    TileSuit.DRAGONS: (DragonType.WHITE,),
}


@dataclass(frozen=True)
class Tile:
    """
    Represents a tile type.

    Attributes:
        suit: The suit of the tile (Characters, Bamboos, Dots, Winds, Dragons)
        value: The value within the suit (1-9 for numbered suits, 0-3/0-2 for honors)
    """
    suit: TileSuit
    value: int

    def __post_init__(self):
        """Validate tile values"""
        if self.suit in NUMBERED_SUITS:
            if not 1 <= self.value <= 9:
                raise ValueError(f"Numbered suits must have value 1-9, got {self.value}")
        elif self.suit == TileSuit.WINDS:
            if not 0 <= self.value <= 3:
                raise ValueError(f"Wind tiles must have value 0-3, got {self.value}")
        elif self.suit == TileSuit.DRAGONS:
            if not 0 <= self.value <= 2:
                raise ValueError(f"Dragon tiles must have value 0-2, got {self.value}")

    @property
    def is_numbered(self) -> bool:
        return self.suit in NUMBERED_SUITS

    @property
    def is_wind(self) -> bool:
        return self.suit == TileSuit.WINDS

    @property
    def is_dragon(self) -> bool:
        return self.suit == TileSuit.DRAGONS

    @property
    def is_honor(self) -> bool:
        """Check if tile is an honor tile (Wind or Dragon)"""
        return self.suit in (TileSuit.WINDS, TileSuit.DRAGONS)

    @property
    def is_terminal(self) -> bool:
        """Check if tile is a terminal (1 or 9 of numbered suits)"""
        return self.is_numbered and self.value in (1, 9)

    @property
    def is_terminal_or_honor(self) -> bool:
        return self.is_terminal or self.is_honor

    @property
    def is_simple(self) -> bool:
        """Check if tile is a simple (2-8 of numbered suits)"""
        return self.is_numbered and 2 <= self.value <= 8

    @property
    def is_green(self) -> bool:
        """Check if tile is a green tile (for All Green pattern)"""
        if self.suit == TileSuit.BAMBOOS:
            return self.value in (2, 3, 4, 6, 8)
        if self.suit == TileSuit.DRAGONS:
            return self.value == DragonType.GREEN
        return False

    @property
    def is_reversible(self) -> bool:
        """Check if tile looks the same upside down (for Reversible Tiles pattern)"""
        return self.value in _REVERSIBLE.get(self.suit, ())

    @property
    def tile_index(self) -> int:
        """
        Get unique index for this tile type (0-33).
        Used as the position in count arrays.
        """
        if self.is_numbered:
            return self.suit * 9 + self.value - 1  # 0-26
        elif self.suit == TileSuit.WINDS:
            return 27 + self.value  # 27-30
        return 31 + self.value  # 31-33

    def __lt__(self, other) -> bool:
        """Comparison for sorting: suit precedence, then value"""
        if not isinstance(other, Tile):
            return NotImplemented
        if self.suit != other.suit:
            return self.suit < other.suit
        return self.value < other.value

    def __repr__(self) -> str:
        return f"Tile({self.suit.name}, {self.value})"

    def __str__(self) -> str:
        """Human-readable string representation"""
        if self.suit == TileSuit.CHARACTERS:
            return f"{self.value}万"
        elif self.suit == TileSuit.BAMBOOS:
            return f"{self.value}条"
        elif self.suit == TileSuit.DOTS:
            return f"{self.value}筒"
        elif self.suit == TileSuit.WINDS:
            return "东南西北"[self.value]
        return "中发白"[self.value]

    def to_string(self) -> str:
        """Identifier form, the inverse of parse_tile"""
        if self.suit == TileSuit.WINDS:
            suffix = _WIND_SUFFIX[self.value]
        elif self.suit == TileSuit.DRAGONS:
            suffix = _DRAGON_SUFFIX[self.value]
        else:
            suffix = str(self.value)
        return f"{_SUIT_PREFIX[self.suit]}-{suffix}"

    @classmethod
    def from_index(cls, tile_index: int) -> 'Tile':
        """
        Create a tile from its type index (0-33).

        Args:
            tile_index: Tile type index (0-33)
        """
        if not 0 <= tile_index < NUM_TILE_TYPES:
            raise ValueError(f"Tile index must be 0-33, got {tile_index}")
        if tile_index < 27:
            return cls(TileSuit(tile_index // 9), tile_index % 9 + 1)
        elif tile_index < 31:
            return cls(TileSuit.WINDS, tile_index - 27)
        return cls(TileSuit.DRAGONS, tile_index - 31)


def parse_tile(raw: str) -> Tile:
    """
    Parse a tile identifier such as "wan-3", "wind-east" or "dragon-white".

    Args:
        raw: Identifier of the form <suit>-<value>

    Raises:
        TileParseError: if the identifier is malformed
    """
    if not isinstance(raw, str):
        raise TileParseError(f"Tile identifier must be a string, got {raw!r}")
    prefix, sep, suffix = raw.strip().partition("-")
    suit = SUIT_NAMES.get(prefix)
    if not sep or suit is None:
        raise TileParseError(f"Cannot parse tile identifier: {raw!r}")

    if suit == TileSuit.WINDS:
        value = WIND_NAMES.get(suffix)
    elif suit == TileSuit.DRAGONS:
        value = DRAGON_NAMES.get(suffix)
    else:
        value = int(suffix) if len(suffix) == 1 and suffix in "123456789" else None
    if value is None:
        raise TileParseError(f"Cannot parse tile identifier: {raw!r}")
    return Tile(suit, int(value))


def parse_tiles(raw_tiles: Iterable[str]) -> List[Tile]:
    return [parse_tile(raw) for raw in raw_tiles]


def is_sequential(tiles: Sequence[Tile]) -> bool:
    """Three same-suit numbered tiles with consecutive values"""
    if len(tiles) != 3 or not all(t.is_numbered for t in tiles):
        return False
    if len({t.suit for t in tiles}) != 1:
        return False
    a, b, c = sorted(t.value for t in tiles)
    return b == a + 1 and c == b + 1


def is_knitted(tiles: Sequence[Tile]) -> bool:
    """Three same-suit numbered tiles whose values are exactly 3 apart (e.g. 1-4-7)"""
    if len(tiles) != 3 or not all(t.is_numbered for t in tiles):
        return False
    if len({t.suit for t in tiles}) != 1:
        return False
    a, b, c = sorted(t.value for t in tiles)
    return b == a + 3 and c == b + 3


def to_count_array(tiles: Iterable[Tile]) -> np.ndarray:
    """
    Convert tiles to a 34-element array counting each tile type.
    Useful for hand analysis.
    """
    counts = np.zeros(NUM_TILE_TYPES, dtype=np.int8)
    for tile in tiles:
        counts[tile.tile_index] += 1
    return counts


# Convenience functions for creating specific tiles
def char(value: int) -> Tile:
    """Create a Characters tile (1-9万)"""
    return Tile(TileSuit.CHARACTERS, value)

def bam(value: int) -> Tile:
    """Create a Bamboos tile (1-9条)"""
    return Tile(TileSuit.BAMBOOS, value)

def dot(value: int) -> Tile:
    """Create a Dots tile (1-9筒)"""
    return Tile(TileSuit.DOTS, value)

def wind(wind_type: WindType) -> Tile:
    """Create a Wind tile (东南西北)"""
    return Tile(TileSuit.WINDS, wind_type)

def dragon(dragon_type: DragonType) -> Tile:
    """Create a Dragon tile (中发白)"""
    return Tile(TileSuit.DRAGONS, dragon_type)


ALL_TILES: List[Tile] = [Tile.from_index(i) for i in range(NUM_TILE_TYPES)]

# Named wind tiles
EAST = Tile(TileSuit.WINDS, WindType.EAST)
SOUTH = Tile(TileSuit.WINDS, WindType.SOUTH)
WEST = Tile(TileSuit.WINDS, WindType.WEST)
NORTH = Tile(TileSuit.WINDS, WindType.NORTH)

# Named dragon tiles
RED_DRAGON = Tile(TileSuit.DRAGONS, DragonType.RED)
GREEN_DRAGON = Tile(TileSuit.DRAGONS, DragonType.GREEN)
WHITE_DRAGON = Tile(TileSuit.DRAGONS, DragonType.WHITE)

# The 13 distinct tiles of Thirteen Orphans
ORPHANS: List[Tile] = [t for t in ALL_TILES if t.is_terminal_or_honor]
