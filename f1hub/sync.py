"""syncF1Data command.

Usage:
    python -m f1hub.sync                 # one cycle, for the daily 06:00 UTC cron
    python -m f1hub.sync --season 2026   # manual re-run for a season
    python -m f1hub.sync --loop          # stay up and run every day at SYNC_HOUR_UTC
"""
import argparse
import logging
import sys
import time
from datetime import datetime, timezone
from typing import Optional

from f1hub.core.config import Settings
from f1hub.core.context import AppContext, build_context
from f1hub.core.logging import configure_logging
from f1hub.services.sync import SyncJob, SyncReport, next_run_after

logger = logging.getLogger("f1hub.sync")


def run_once(ctx: AppContext, season: Optional[int] = None) -> SyncReport:
    job = SyncJob(
        ctx.provider,
        ctx.store,
        season or ctx.settings.season,
        timeout=ctx.settings.fetch_timeout,
    )
    return job.run()


def run_forever(ctx: AppContext, season: Optional[int] = None) -> None:
    hour = ctx.settings.sync_hour_utc
    while True:
        due = next_run_after(datetime.now(timezone.utc), hour)
        logger.info("Next sync at %s", due.isoformat())
        time.sleep(max(0.0, (due - datetime.now(timezone.utc)).total_seconds()))
        try:
            run_once(ctx, season)
        except Exception:
            # reported here, retried at the next slot
            logger.exception("syncF1Data failed")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Sync F1 results and standings")
    parser.add_argument("--season", type=int, help="Season to sync (default: SEASON setting)")
    parser.add_argument("--loop", action="store_true", help="Run daily at SYNC_HOUR_UTC instead of once")
    args = parser.parse_args(argv)

    settings = Settings()
    configure_logging(settings.log_level)
    ctx = build_context(settings)

    if args.loop:
        run_forever(ctx, args.season)
        return 0

    try:
        report = run_once(ctx, args.season)
    except Exception:
        logger.exception("syncF1Data failed")
        return 1
    logger.info("wrote %d document(s), skipped %d source(s)", len(report.written), len(report.skipped))
    return 0


if __name__ == "__main__":
    sys.exit(main())
