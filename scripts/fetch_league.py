#!/usr/bin/env python3
"""
Dump one Sleeper league to a JSON file.

The file holds the league/rosters/users envelope, the draft board envelope
and the current NFL season state, for front-ends served without the API.
"""

import argparse
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

import requests

from fantasy_assistant import AggregateFetcher, SleeperAPI
from fantasy_assistant import settings

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fetch Sleeper league data and write JSON output.")
    parser.add_argument(
        "--league-id",
        default=settings.LEAGUE_ID,
        help="Sleeper league id (default: SLEEPER_LEAGUE_ID).",
    )
    parser.add_argument(
        "--output",
        default="public/data/league.json",
        help="Path to write the snapshot JSON (default: public/data/league.json).",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="Number of spaces for JSON indentation (default: 2).",
    )
    return parser.parse_args(argv)


def build_snapshot(client: SleeperAPI, league_id: str) -> Dict:
    fetcher = AggregateFetcher(client)
    try:
        state = client.get_nfl_state()
    except (requests.RequestException, ValueError) as exc:
        logger.warning("Season state unavailable: %s", exc)
        state = None

    return {
        "league": fetcher.get_league_data(league_id).as_dict(),
        "draft": fetcher.get_draft_data(league_id).as_dict(),
        "state": state,
        "generated_at": datetime.now(timezone.utc).isoformat(),
    }


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    if not args.league_id:
        logger.error("No league id given. Pass --league-id or set SLEEPER_LEAGUE_ID.")
        return 1

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    snapshot = build_snapshot(SleeperAPI.from_settings(), args.league_id)

    with output_path.open("w", encoding="utf-8") as handle:
        json.dump(snapshot, handle, indent=args.indent)
        handle.write("\n")

    logger.info("Snapshot written to %s (league %s)", output_path, args.league_id)
    return 0


if __name__ == "__main__":
    sys.exit(main())
