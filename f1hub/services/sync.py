"""syncF1Data: pull the latest results and standings into the document store.

One cycle fetches three provider resources in parallel, normalizes them and
commits whatever arrived in a single atomic batch. A source that fails is
skipped for this cycle; the cycle only fails when every source fails or the
commit is rejected.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Tuple

from f1hub.core.errors import SyncFailedError
from f1hub.db.store import DocumentStore
from f1hub.services import parsing
from f1hub.services.jolpica import ResultsProvider
from f1hub.services.keys import ResultKey

logger = logging.getLogger(__name__)


@dataclass
class SyncReport:
    season: int
    written: List[Tuple[str, str]] = field(default_factory=list)
    skipped: Dict[str, str] = field(default_factory=dict)   # source -> reason


class SyncJob:
    def __init__(self, provider: ResultsProvider, store: DocumentStore, season: int,
                 timeout: float = 10.0):
        self.provider = provider
        self.store = store
        self.season = season
        self.timeout = timeout

    def _sources(self) -> Dict[str, Tuple[Callable[[int], dict], Callable]]:
        return {
            parsing.RESULTS: (self.provider.last_results, parsing.parse_last_race),
            parsing.DRIVER_STANDINGS: (self.provider.driver_standings, parsing.parse_driver_standings),
            parsing.CONSTRUCTOR_STANDINGS: (self.provider.constructor_standings, parsing.parse_constructor_standings),
        }

    def fetch_all(self) -> Tuple[Dict[str, object], Dict[str, str]]:
        """Fetch and parse every source concurrently.

        Returns (parsed, failures). A parsed value of None means the source
        answered but had nothing to report yet.
        """
        sources = self._sources()
        parsed: Dict[str, object] = {}
        failures: Dict[str, str] = {}

        pool = ThreadPoolExecutor(max_workers=len(sources), thread_name_prefix="sync-fetch")
        try:
            futures = {
                pool.submit(lambda f=fetch, p=parse: p(f(self.season))): name
                for name, (fetch, parse) in sources.items()
            }
            # the HTTP timeout bounds each call; this bounds the whole phase
            done, pending = wait(futures, timeout=self.timeout * 2)
            for fut in pending:
                fut.cancel()
                failures[futures[fut]] = f"no answer within {self.timeout * 2:.0f}s"
            for fut in done:
                name = futures[fut]
                try:
                    parsed[name] = fut.result()
                except Exception as e:
                    failures[name] = str(e)
        finally:
            pool.shutdown(wait=False)
        return parsed, failures

    def run(self) -> SyncReport:
        logger.info("syncF1Data: syncing %s F1 data", self.season)
        report = SyncReport(season=self.season)

        parsed, failures = self.fetch_all()
        if len(failures) == len(self._sources()):
            logger.error("syncF1Data failed: %s", failures)
            raise SyncFailedError(failures)
        for name, reason in failures.items():
            logger.warning("Skipping %s this cycle: %s", name, reason)
        report.skipped.update(failures)

        batch = self.store.batch()

        race = parsed.get(parsing.RESULTS)
        if race is not None:
            key = ResultKey(self.season, race.round)
            batch.set("results", key.encode(), race.model_dump())
            logger.info("Staged results for round %s: %s (%d rows)",
                        race.round, race.race_name, len(race.results))
        elif parsing.RESULTS not in failures:
            logger.info("No race results available yet, season may not have started")

        drivers = parsed.get(parsing.DRIVER_STANDINGS)
        if drivers is not None:
            batch.set("standings", "drivers", drivers.model_dump())
            logger.info("Staged driver standings, round %s, %d drivers",
                        drivers.round, len(drivers.standings))

        constructors = parsed.get(parsing.CONSTRUCTOR_STANDINGS)
        if constructors is not None:
            batch.set("standings", "constructors", constructors.model_dump())
            logger.info("Staged constructor standings, %d constructors", len(constructors.standings))

        report.written = batch.commit()
        logger.info("syncF1Data complete, wrote %s", [f"{c}/{k}" for c, k in report.written])
        return report


def next_run_after(now: datetime, hour: int) -> datetime:
    """Next daily slot at ``hour``:00 UTC strictly after ``now``."""
    now = now.astimezone(timezone.utc) if now.tzinfo else now.replace(tzinfo=timezone.utc)
    slot = now.replace(hour=hour, minute=0, second=0, microsecond=0)
    if slot <= now:
        slot += timedelta(days=1)
    return slot
