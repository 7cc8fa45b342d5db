"""
Tests for MCR scoring tiles and groups
"""

import pytest
import numpy as np

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from mcr_scoring.tiles import (
    Tile, TileSuit, WindType, DragonType, TileParseError,
    parse_tile, parse_tiles, is_sequential, is_knitted, to_count_array,
    char, bam, dot, wind, dragon, ALL_TILES, ORPHANS,
    EAST, SOUTH, WEST, NORTH, RED_DRAGON, GREEN_DRAGON, WHITE_DRAGON,
)
from mcr_scoring.groups import Group, GroupKind, parse_declared_meld


class TestTileParsing:
    """Test tile identifier parsing"""

    def test_numbered_tiles(self):
        """Test parsing numbered suit identifiers"""
        assert parse_tile("wan-3") == char(3)
        assert parse_tile("bamboo-9") == bam(9)
        assert parse_tile("circle-1") == dot(1)

    def test_honor_tiles(self):
        """Test parsing wind and dragon identifiers"""
        assert parse_tile("wind-east") == EAST
        assert parse_tile("wind-north") == NORTH
        assert parse_tile("dragon-red") == RED_DRAGON
        assert parse_tile("dragon-green") == GREEN_DRAGON
        assert parse_tile("dragon-white") == WHITE_DRAGON

    @pytest.mark.parametrize("raw", [
        "", "wan", "wan-0", "wan-10", "wan-x", "wind-up", "dragon-blue",
        "tiger-1", "west-east", "flipped",
    ])
    def test_malformed_identifiers(self, raw):
        """Test malformed identifiers raise TileParseError"""
        with pytest.raises(TileParseError):
            parse_tile(raw)

    def test_non_string_identifier(self):
        """Test a non-string identifier is rejected"""
        with pytest.raises(TileParseError):
            parse_tile(None)

    def test_parse_error_is_value_error(self):
        """Test callers catching ValueError also catch parse errors"""
        with pytest.raises(ValueError):
            parse_tile("circle-")

    def test_identifier_round_trip(self):
        """Test to_string is the inverse of parse_tile for every tile"""
        for tile in ALL_TILES:
            assert parse_tile(tile.to_string()) == tile

    def test_parse_tiles(self):
        """Test parsing a list of identifiers"""
        tiles = parse_tiles(["wan-1", "wan-2", "wind-south"])
        assert tiles == [char(1), char(2), SOUTH]


class TestTileProperties:
    """Test tile predicates"""

    def test_invalid_values(self):
        """Test out-of-range values are rejected"""
        with pytest.raises(ValueError):
            Tile(TileSuit.CHARACTERS, 0)
        with pytest.raises(ValueError):
            Tile(TileSuit.WINDS, 4)
        with pytest.raises(ValueError):
            Tile(TileSuit.DRAGONS, 3)

    def test_terminals_and_honors(self):
        """Test terminal, honor and simple classification"""
        assert char(1).is_terminal
        assert dot(9).is_terminal
        assert not bam(5).is_terminal
        assert EAST.is_honor and EAST.is_wind
        assert RED_DRAGON.is_honor and RED_DRAGON.is_dragon
        assert not EAST.is_terminal
        assert EAST.is_terminal_or_honor
        assert bam(2).is_simple
        assert not bam(1).is_simple
        assert not WEST.is_simple

    def test_green_tiles(self):
        """Test green tile identification"""
        for t in [bam(2), bam(3), bam(4), bam(6), bam(8), GREEN_DRAGON]:
            assert t.is_green, f"{t} should be green"
        for t in [bam(1), bam(5), bam(7), RED_DRAGON, char(3)]:
            assert not t.is_green, f"{t} should not be green"

    def test_reversible_tiles(self):
        """Test tiles that look the same upside down"""
        assert dot(8).is_reversible
        assert bam(5).is_reversible
        assert WHITE_DRAGON.is_reversible
        assert not dot(6).is_reversible
        assert not bam(3).is_reversible
        assert not char(8).is_reversible

    def test_tile_index(self):
        """Test tile index calculation"""
        assert char(1).tile_index == 0
        assert bam(1).tile_index == 9
        assert dot(9).tile_index == 26
        assert wind(WindType.EAST).tile_index == 27
        assert dragon(DragonType.WHITE).tile_index == 33
        assert [t.tile_index for t in ALL_TILES] == list(range(34))

    def test_from_index(self):
        """Test creating tiles from their index"""
        assert Tile.from_index(4) == char(5)
        assert Tile.from_index(30) == NORTH
        with pytest.raises(ValueError):
            Tile.from_index(34)

    def test_sorting(self):
        """Test tiles sort by suit, then value"""
        tiles = [RED_DRAGON, dot(1), EAST, char(9), bam(2)]
        assert sorted(tiles) == [char(9), bam(2), dot(1), EAST, RED_DRAGON]

    def test_orphans(self):
        """Test the thirteen terminal and honor tiles"""
        assert len(ORPHANS) == 13
        assert all(t.is_terminal_or_honor for t in ORPHANS)

    def test_count_array(self):
        """Test counting tiles into a 34-element array"""
        counts = to_count_array([char(1), char(1), EAST])
        assert counts.shape == (34,)
        assert counts.dtype == np.int8
        assert counts[0] == 2
        assert counts[27] == 1
        assert counts.sum() == 3


class TestTileShapes:
    """Test sequence and knitted checks"""

    def test_sequential(self):
        assert is_sequential([char(3), char(1), char(2)])
        assert not is_sequential([char(1), char(2), bam(3)])
        assert not is_sequential([char(1), char(2), char(4)])

    def test_knitted(self):
        assert is_knitted([bam(1), bam(4), bam(7)])
        assert not is_knitted([bam(1), bam(4), dot(7)])
        assert not is_knitted([bam(1), bam(2), bam(3)])


class TestDeclaredMelds:
    """Test turning declared melds into groups"""

    def test_pung(self):
        """Test three identical tiles make an exposed pung"""
        group = parse_declared_meld((char(6), char(6), char(6)))
        assert group.kind == GroupKind.PUNG
        assert group.declared
        assert not group.concealed

    def test_chow(self):
        """Test a sequence makes a chow starting at its lowest tile"""
        group = parse_declared_meld((dot(5), dot(3), dot(4)))
        assert group.kind == GroupKind.CHOW
        assert group.tile == dot(3)
        assert group.tiles() == [dot(3), dot(4), dot(5)]

    def test_melded_kong(self):
        """Test four face-up tiles make an exposed kong"""
        group = parse_declared_meld((EAST, EAST, EAST, EAST))
        assert group.kind == GroupKind.KONG
        assert not group.concealed
        assert len(group.tiles()) == 4
        assert group.slot_size == 3

    def test_concealed_kong(self):
        """Test a kong with face-down tiles is concealed"""
        group = parse_declared_meld((None, bam(3), bam(3), None))
        assert group.kind == GroupKind.KONG
        assert group.tile == bam(3)
        assert group.concealed
        assert group.declared

    def test_invalid_melds(self):
        """Test tiles forming no group are rejected"""
        assert parse_declared_meld((char(1), char(2), char(4))) is None
        assert parse_declared_meld((char(1), bam(1), dot(1))) is None
        assert parse_declared_meld((None, None, None, None)) is None
        assert parse_declared_meld((char(1), char(1), char(1), char(2))) is None

    def test_winning_copy(self):
        """Test flagging a group as completed by the winning tile"""
        group = Group(GroupKind.CHOW, char(1))
        won = group.as_winning(exposed=True)
        assert won.winning
        assert not won.concealed
        assert group.concealed and not group.winning


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
