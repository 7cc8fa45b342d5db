"""
MCR Scoring Game Context

Immutable snapshot of everything the scorer needs to know about a win:
the tiles, how the winning tile arrived, and the winds.
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from .groups import DeclaredMeld
from .rules import ScoringConfig, DEFAULT_CONFIG
from .tiles import Tile, TileParseError, TileSuit, WIND_NAMES, parse_tile


@dataclass(frozen=True)
class GameContext:
    """Context information needed for scoring"""
    winning_tile: Tile                          # The winning tile
    concealed_tiles: Tuple[Tile, ...] = ()      # Tiles in hand, without the winning tile
    declared_melds: Tuple[DeclaredMeld, ...] = ()  # Melds shown on the table
    win_from_wall: bool = False                 # Self-drawn win
    win_from_discard: bool = False              # Won on another player's discard
    seat_wind: Optional[Tile] = None            # Player's seat wind, if known
    prevalent_wind: Optional[Tile] = None       # Round wind, if known
    last_tile_in_game: bool = False             # Won on the last tile of the wall
    last_tile_of_kind: bool = False             # Winning tile was the last one unseen
    replacement_tile: bool = False              # Won on a kong replacement tile
    robbing_the_kong: bool = False              # Won by robbing another's added kong

    def __post_init__(self):
        if self.win_from_wall == self.win_from_discard:
            raise ValueError("Exactly one of win_from_wall and win_from_discard must be set")
        for name in ("seat_wind", "prevalent_wind"):
            value = getattr(self, name)
            if value is not None and not value.is_wind:
                raise ValueError(f"{name} must be a wind tile, got {value}")

    @classmethod
    def from_state(cls, state: Mapping[str, Any],
                   config: ScoringConfig = DEFAULT_CONFIG) -> 'GameContext':
        """
        Build a context from the game-state dictionary sent by the observer.

        Args:
            state: Dictionary with keys concealedTiles, declaredSets, winningTile,
                winFromWall, winFromDiscard, seatWind, prevalentWind,
                lastTileInGame, lastTileOfKind, replacementTile, robbingTheKong
            config: Supplies the concealed-kong and unknown-wind markers

        Raises:
            TileParseError: if any tile identifier is malformed
        """
        if "winningTile" not in state or state["winningTile"] is None:
            raise TileParseError("Game state has no winning tile")

        return cls(
            winning_tile=parse_tile(state["winningTile"]),
            concealed_tiles=tuple(parse_tile(t) for t in state.get("concealedTiles") or ()),
            declared_melds=tuple(
                _parse_meld(meld, config) for meld in state.get("declaredSets") or ()
            ),
            win_from_wall=bool(state.get("winFromWall", False)),
            win_from_discard=bool(state.get("winFromDiscard", False)),
            seat_wind=_parse_wind(state.get("seatWind"), config),
            prevalent_wind=_parse_wind(state.get("prevalentWind"), config),
            last_tile_in_game=bool(state.get("lastTileInGame", False)),
            last_tile_of_kind=bool(state.get("lastTileOfKind", False)),
            replacement_tile=bool(state.get("replacementTile", False)),
            robbing_the_kong=bool(state.get("robbingTheKong", False)),
        )

    @classmethod
    def create(cls, winning_tile: str, concealed_tiles: Sequence[str],
               declared_melds: Sequence[Sequence[str]] = (),
               self_drawn: bool = False, **flags) -> 'GameContext':
        """
        Shorthand constructor taking tile identifiers.

        Args:
            winning_tile: Identifier of the winning tile
            concealed_tiles: Identifiers of the tiles in hand
            declared_melds: Identifier lists of the declared melds
            self_drawn: True for a win from the wall, False for a win by discard
            **flags: Remaining state keys (seatWind, lastTileInGame, ...)
        """
        state: Dict[str, Any] = dict(flags)
        state.update(
            winningTile=winning_tile,
            concealedTiles=list(concealed_tiles),
            declaredSets=[list(m) for m in declared_melds],
            winFromWall=self_drawn,
            winFromDiscard=not self_drawn,
        )
        return cls.from_state(state)

    def to_state(self, config: ScoringConfig = DEFAULT_CONFIG) -> Dict[str, Any]:
        """Inverse of from_state"""
        marker = config.concealed_kong_marker
        return {
            "concealedTiles": [t.to_string() for t in self.concealed_tiles],
            "declaredSets": [
                [t.to_string() if t is not None else marker for t in meld]
                for meld in self.declared_melds
            ],
            "winningTile": self.winning_tile.to_string(),
            "winFromWall": self.win_from_wall,
            "winFromDiscard": self.win_from_discard,
            "seatWind": self.seat_wind.to_string() if self.seat_wind else None,
            "prevalentWind": self.prevalent_wind.to_string() if self.prevalent_wind else None,
            "lastTileInGame": self.last_tile_in_game,
            "lastTileOfKind": self.last_tile_of_kind,
            "replacementTile": self.replacement_tile,
            "robbingTheKong": self.robbing_the_kong,
        }


def _parse_meld(meld: Sequence[str], config: ScoringConfig) -> DeclaredMeld:
    return tuple(None if raw == config.concealed_kong_marker else parse_tile(raw)
                 for raw in meld)


def _parse_wind(raw: Optional[str], config: ScoringConfig) -> Optional[Tile]:
    """
    Read a seat or prevalent wind field by the value after its last dash,
    so "wind-east" and the observer's "west-east" both mean east.
    """
    if raw is None or (isinstance(raw, str) and raw.strip() in config.no_wind_markers):
        return None
    if not isinstance(raw, str):
        raise TileParseError(f"Wind must be a string, got {raw!r}")
    value = WIND_NAMES.get(raw.strip().rpartition("-")[2])
    if value is None:
        raise TileParseError(f"Not a wind tile: {raw!r}")
    return Tile(TileSuit.WINDS, int(value))
