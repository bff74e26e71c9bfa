"""Run one draw sync against the live upstream and print the frequency summary.

Handy for checking upstream reachability (and whether it is currently serving
block pages) without starting the web server.

Usage:
  python scripts/warm_cache.py
  python scripts/warm_cache.py --seed 1150 --workers 4 --include-bonus
  python scripts/warm_cache.py --json draws.json
"""

from __future__ import annotations

import argparse
import json
import logging
import pathlib
import sys
from collections.abc import Sequence

from dotenv import load_dotenv
from tqdm import tqdm

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from lotto_mirror.state import build_coordinator  # noqa: E402
from lotto_mirror.services.frequency_service import build_ranking  # noqa: E402
from lotto_mirror.utils.timestamps import to_utc_datetime  # noqa: E402


logger = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None) -> int:
    """Sync the in-memory cache once and report what was mirrored."""

    load_dotenv()
    from lotto_mirror.config import get_config

    parser = argparse.ArgumentParser(description="Mirror lotto draws once and print number frequencies")
    parser.add_argument("--seed", type=int, default=None, help="First guess for the latest draw number")
    parser.add_argument("--workers", type=int, default=None, help="Concurrent upstream requests")
    parser.add_argument("--include-bonus", action="store_true", help="Count bonus numbers too")
    parser.add_argument("--json", dest="json_path", type=pathlib.Path, default=None, help="Dump mirrored draws here")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")

    cfg_cls = get_config()
    config = {name: getattr(cfg_cls, name) for name in dir(cfg_cls) if name.isupper()}
    if args.workers is not None:
        if args.workers < 1:
            raise SystemExit("--workers must be >= 1")
        config["FETCH_CONCURRENCY"] = args.workers
    if args.seed is not None:
        if args.seed < 1:
            raise SystemExit("--seed must be >= 1")
        config["DEFAULT_LATEST_GUESS"] = args.seed

    with tqdm(desc="Fetching draws", unit="draw") as bar:
        coordinator = build_coordinator(config, on_progress=lambda _draw_no: bar.update(1))
        snapshot = coordinator.ensure_fresh().snapshot()

    if snapshot.blocked_until is not None:
        logger.warning("Upstream is serving block pages; retry after %s", to_utc_datetime(snapshot.blocked_until))

    logger.info(
        "Latest draw %s, %s cached, %s missing",
        snapshot.latest,
        snapshot.total_draws,
        len(snapshot.missing),
    )
    if snapshot.missing:
        logger.info("Missing draws: %s", list(snapshot.missing))

    ranking = build_ranking(snapshot.draws.values(), include_bonus=args.include_bonus)
    print("top6: ", " ".join(str(n) for n in ranking.top6))
    print("next6:", " ".join(str(n) for n in ranking.next6))

    if args.json_path is not None:
        payload = [d.to_dict() for d in snapshot.ordered_draws()]
        args.json_path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
        logger.info("Wrote %s draws to %s", len(payload), args.json_path)

    return 0 if snapshot.blocked_until is None else 2


if __name__ == "__main__":
    raise SystemExit(main())
