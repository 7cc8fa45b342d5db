"""
Tests for MCR hand decomposition and wait sets
"""

import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from mcr_scoring.tiles import parse_tile, parse_tiles, char, bam, dot, EAST, NORTH
from mcr_scoring.groups import GroupKind
from mcr_scoring.decomposition import (
    decompose, is_valid_decomposition, waiting_tiles,
    match_knitted_and_honors, match_thirteen_orphans,
    clear_wait_cache, wait_cache_info, HAND_SIZE,
)


def melds(*raw_melds):
    """Declared melds from identifier lists ('flipped' marks a face-down tile)"""
    return [tuple(None if r == "flipped" else parse_tile(r) for r in m) for m in raw_melds]


def find(concealed, winning, declared=(), discard=False):
    return decompose(declared, parse_tiles(concealed), parse_tile(winning), discard)


STANDARD = ["wan-1", "wan-2", "wan-3", "wan-4", "wan-5", "wan-6",
            "bamboo-2", "bamboo-3", "bamboo-4",
            "circle-7", "circle-7", "circle-7", "wind-east"]


class TestStandardHands:
    """Test four melds and a pair"""

    def test_single_decomposition(self):
        """Test a hand with one way to split"""
        results = find(STANDARD, "wind-east")
        assert len(results) == 1
        kinds = sorted(g.kind for g in results[0])
        assert kinds == [GroupKind.PAIR, GroupKind.PUNG, GroupKind.CHOW,
                         GroupKind.CHOW, GroupKind.CHOW]

    def test_structural_invariants(self):
        """Test every decomposition fills 14 slots with one pair or seven"""
        hand = ["wan-1", "wan-1", "wan-2", "wan-2", "wan-3", "wan-3",
                "bamboo-5", "bamboo-5", "bamboo-6", "bamboo-6", "bamboo-7", "bamboo-7",
                "circle-9"]
        results = find(hand, "circle-9")
        assert len(results) >= 2
        for d in results:
            assert sum(g.slot_size for g in d) == HAND_SIZE
            assert sum(1 for g in d if g.kind == GroupKind.PAIR) in (1, 7)
            assert is_valid_decomposition(d)

    def test_seven_pairs_and_chows(self):
        """Test a hand read both as seven pairs and as four chows"""
        hand = ["wan-1", "wan-1", "wan-2", "wan-2", "wan-3", "wan-3",
                "bamboo-5", "bamboo-5", "bamboo-6", "bamboo-6", "bamboo-7", "bamboo-7",
                "circle-9"]
        results = find(hand, "circle-9")
        shapes = {len(d) for d in results}
        assert 7 in shapes
        assert 5 in shapes

    def test_winning_group_variants(self):
        """Test one decomposition per group the winning tile could complete"""
        hand = ["wan-1", "wan-2", "wan-3", "wan-4", "wan-5",
                "bamboo-2", "bamboo-3", "bamboo-4",
                "circle-5", "circle-6", "circle-7", "wind-east", "wind-east"]
        results = find(hand, "wan-3")
        assert len(results) == 2
        winning = {next(g.tile for g in d if g.winning) for d in results}
        assert winning == {char(1), char(3)}
        for d in results:
            assert sum(1 for g in d if g.winning) == 1

    def test_discard_exposes_winning_group(self):
        """Test the group completed by a discard is not concealed"""
        discard = find(STANDARD, "wind-east", discard=True)[0]
        drawn = find(STANDARD, "wind-east", discard=False)[0]
        assert not next(g for g in discard if g.winning).concealed
        assert next(g for g in drawn if g.winning).concealed

    def test_not_a_winning_hand(self):
        """Test tiles forming no hand give no decompositions"""
        hand = ["wan-1", "wan-2", "wan-4", "wan-5", "wan-7",
                "bamboo-2", "bamboo-3", "bamboo-4",
                "circle-5", "circle-6", "circle-7", "wind-east", "wind-east"]
        assert find(hand, "wan-9") == []


class TestDeclaredMelds:
    """Test hands with melds on the table"""

    def test_declared_groups_kept(self):
        """Test declared melds appear as declared groups"""
        declared = melds(["circle-2", "circle-3", "circle-4"],
                         ["circle-6", "circle-6", "circle-6"],
                         ["bamboo-7", "bamboo-7", "bamboo-7"])
        results = find(["dragon-red", "dragon-red", "wan-3", "wan-4"], "wan-5",
                       declared, discard=True)
        assert len(results) == 1
        assert sum(1 for g in results[0] if g.declared) == 3

    def test_concealed_kong(self):
        """Test a face-down kong counts as one meld"""
        declared = melds(["flipped", "bamboo-3", "bamboo-3", "flipped"])
        hand = ["wind-east", "wind-east", "wind-east", "dragon-white", "dragon-white",
                "wan-2", "wan-3", "wan-4", "wan-8", "wan-8"]
        results = find(hand, "dragon-white", declared, discard=True)
        assert len(results) == 1
        kong = next(g for g in results[0] if g.kind == GroupKind.KONG)
        assert kong.concealed and kong.declared

    def test_invalid_declared_meld(self):
        """Test a declared meld forming no group gives no decompositions"""
        declared = melds(["wan-1", "wan-2", "wan-4"])
        assert find(["wan-5", "wan-5", "wan-5", "bamboo-1"], "bamboo-1", declared) == []


class TestSpecialHands:
    """Test knitted and whole-hand shapes"""

    def test_knitted_straight(self):
        """Test a knitted straight with a pung and a pair"""
        declared = melds(["wind-west", "wind-west", "wind-west"])
        hand = ["bamboo-1", "bamboo-4", "bamboo-7", "wan-2", "wan-5", "wan-8",
                "circle-3", "circle-6", "circle-9", "wind-north"]
        results = find(hand, "wind-north", declared, discard=True)
        assert len(results) == 1
        knitted = [g for g in results[0] if g.kind == GroupKind.KNITTED]
        assert len(knitted) == 3
        assert {g.suit for g in knitted} == {bam(1).suit, char(2).suit, dot(3).suit}

    def test_honors_and_knitted(self):
        """Test 14 unrelated knitted and honor tiles"""
        hand = ["bamboo-1", "bamboo-4", "bamboo-7", "wan-2", "wan-5", "wan-8",
                "circle-3", "circle-9", "wind-west", "wind-north",
                "dragon-red", "dragon-white", "dragon-green"]
        results = find(hand, "wind-south", discard=True)
        assert len(results) == 1
        (group,) = results[0]
        assert group.kind == GroupKind.KNITTED_AND_HONORS
        assert group.winning
        assert len(group.tiles()) == HAND_SIZE

    def test_honors_and_knitted_requires_distinct_classes(self):
        """Test two suits on the same knitted values are rejected"""
        tiles = parse_tiles(["bamboo-1", "bamboo-4", "bamboo-7", "wan-1", "wan-4", "wan-7",
                             "circle-3", "circle-9", "wind-west", "wind-north", "wind-south",
                             "dragon-red", "dragon-white", "dragon-green"])
        assert match_knitted_and_honors(tiles) is None

    def test_thirteen_orphans(self):
        """Test every terminal and honor plus a duplicate"""
        hand = ["wan-1", "wan-9", "bamboo-1", "bamboo-9", "circle-1", "circle-9",
                "wind-east", "wind-south", "wind-west", "wind-north",
                "dragon-red", "dragon-green", "dragon-white"]
        results = find(hand, "wan-1")
        assert len(results) == 1
        assert results[0][0].kind == GroupKind.THIRTEEN_ORPHANS

    def test_thirteen_orphans_needs_every_orphan(self):
        tiles = parse_tiles(["wan-1", "wan-1", "wan-9", "bamboo-1", "bamboo-9", "circle-1",
                             "circle-9", "wind-east", "wind-south", "wind-west", "wind-north",
                             "dragon-red", "dragon-green", "wan-9"])
        assert match_thirteen_orphans(tiles) is None


class TestWaitingTiles:
    """Test the wait set and its cache"""

    def test_edge_wait(self):
        hand = parse_tiles(["wan-1", "wan-2", "bamboo-4", "bamboo-5", "bamboo-6",
                            "circle-7", "circle-8", "circle-9", "dragon-red", "dragon-red",
                            "dragon-red", "wind-east", "wind-east"])
        assert waiting_tiles([], hand) == frozenset({char(3)})

    def test_two_sided_wait(self):
        hand = parse_tiles(["wan-2", "wan-3", "bamboo-4", "bamboo-5", "bamboo-6",
                            "circle-7", "circle-8", "circle-9", "dragon-red", "dragon-red",
                            "dragon-red", "wind-east", "wind-east"])
        assert waiting_tiles([], hand) == frozenset({char(1), char(4)})

    def test_nine_gates_waits(self):
        """Test 1112345678999 waits on all nine tiles of its suit"""
        hand = parse_tiles(["wan-1", "wan-1", "wan-1", "wan-2", "wan-3", "wan-4", "wan-5",
                            "wan-6", "wan-7", "wan-8", "wan-9", "wan-9", "wan-9"])
        assert waiting_tiles([], hand) == frozenset(char(v) for v in range(1, 10))

    def test_thirteen_orphans_waits(self):
        """Test thirteen different orphans wait on all thirteen"""
        hand = parse_tiles(["wan-1", "wan-9", "bamboo-1", "bamboo-9", "circle-1", "circle-9",
                            "wind-east", "wind-south", "wind-west", "wind-north",
                            "dragon-red", "dragon-green", "dragon-white"])
        assert len(waiting_tiles([], hand)) == 13

    def test_fifth_copy_excluded(self):
        """Test a wait on a tile whose four copies are all held is dropped"""
        declared = melds(["wind-east", "wind-east", "wind-east"])
        hand = parse_tiles(["bamboo-2", "bamboo-3", "bamboo-4", "circle-5", "circle-6",
                            "circle-7", "wan-7", "wan-8", "wan-9", "wind-east"])
        assert decompose(declared, hand, EAST)
        assert waiting_tiles(declared, hand) == frozenset()

    def test_declared_melds_in_wait(self):
        declared = melds(["wind-north", "wind-north", "wind-north"])
        hand = parse_tiles(["bamboo-2", "bamboo-3", "bamboo-4", "circle-5", "circle-6",
                            "circle-7", "wan-7", "wan-8", "wan-9", "dragon-red"])
        assert waiting_tiles(declared, hand) == frozenset({parse_tile("dragon-red")})
        assert NORTH not in waiting_tiles(declared, hand)

    def test_cache_reuse(self):
        """Test the same hand in any tile order is answered from the cache"""
        clear_wait_cache()
        hand = parse_tiles(["wan-2", "wan-3", "bamboo-4", "bamboo-5", "bamboo-6",
                            "circle-7", "circle-8", "circle-9", "dragon-red", "dragon-red",
                            "dragon-red", "wind-east", "wind-east"])
        first = waiting_tiles([], hand)
        second = waiting_tiles([], list(reversed(hand)))
        assert first == second
        info = wait_cache_info()
        assert info.misses == 1
        assert info.hits == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
