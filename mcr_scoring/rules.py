"""
MCR Scoring Rule Configuration

Settings that control how the scorer reads game states and how hard it
searches when several pattern assignments tie.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass
class ScoringConfig:
    """
    Configuration for the MCR hand scorer.

    Presets below cover the live-observer use (never fail) and debugging
    (let internal faults propagate).
    """

    name: str = "Default"

    # Largest group of equal-valued, group-bound patterns whose orderings are
    # all tried; larger groups are taken in registry order
    max_tie_permutations: int = 6

    # Re-credit Pung of Terminals or Honors for a non-wind terminal pung
    # that Big Three Winds would otherwise suppress
    big_three_winds_correction: bool = True

    # Convert unexpected internal faults into a zero-score result
    suppress_errors: bool = True

    # Face-down entry of a declared concealed kong
    concealed_kong_marker: str = "flipped"

    # Wind field values that mean "no wind known"
    no_wind_markers: Tuple[str, ...] = ("flipped", "unknown", "blank", "empty", "")

    def __str__(self) -> str:
        return f"ScoringConfig({self.name})"


# Default configuration, used by the live observer
DEFAULT_CONFIG = ScoringConfig()

# Debugging: internal faults propagate instead of scoring zero
STRICT_CONFIG = ScoringConfig(
    name="Strict",
    suppress_errors=False,
)

# Cheapest search: every tie group is taken in registry order
FAST_CONFIG = ScoringConfig(
    name="Fast",
    max_tie_permutations=1,
)
