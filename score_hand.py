#!/usr/bin/env python3
"""
Score an MCR (Chinese Official) Mahjong winning hand.

Reads a game-state JSON object and prints the points and patterns.

Usage:
    python score_hand.py hand.json
    python score_hand.py --json < hand.json
    python score_hand.py --waits hand.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from mcr_scoring.context import GameContext
from mcr_scoring.rules import DEFAULT_CONFIG, STRICT_CONFIG, FAST_CONFIG
from mcr_scoring.scoring import HandScorer, wait_set
from mcr_scoring.tiles import TileParseError

CONFIGS = {
    "default": DEFAULT_CONFIG,
    "strict": STRICT_CONFIG,
    "fast": FAST_CONFIG,
}


def load_state(path: str) -> dict:
    if path == "-":
        return json.load(sys.stdin)
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Score an MCR Mahjong winning hand")
    parser.add_argument("state", nargs="?", default="-",
                        help="Game-state JSON file (default: stdin)")
    parser.add_argument("--rules", type=str, default="default", choices=list(CONFIGS),
                        help="Scoring configuration")
    parser.add_argument("--json", action="store_true",
                        help="Print the result as JSON")
    parser.add_argument("--waits", action="store_true",
                        help="Also list the tiles the hand was waiting on")
    parser.add_argument("--verbose", action="store_true",
                        help="Log decomposition and resolution details")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = CONFIGS[args.rules]
    try:
        context = GameContext.from_state(load_state(args.state), config)
    except (TileParseError, ValueError) as e:
        print(f"Invalid game state: {e}", file=sys.stderr)
        return 2

    result = HandScorer(config).score(context)

    if args.json:
        output = result.to_dict()
        if args.waits:
            output["waits"] = sorted(t.to_string() for t in wait_set(context))
        print(json.dumps(output, ensure_ascii=False))
        return 0

    print(f"Rules: {config}")
    print(result)
    if args.waits:
        waits = sorted(wait_set(context))
        print(f"Waits: {' '.join(str(t) for t in waits) or '-'}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
