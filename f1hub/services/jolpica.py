"""Client for the Jolpica F1 API (maintained mirror of the retired Ergast API).

Docs: https://github.com/jolpica/jolpica-f1 . Free, no auth.
"""
from __future__ import annotations

import logging
from typing import Optional

import requests

from f1hub.core.errors import MalformedPayloadError, ProviderError

logger = logging.getLogger(__name__)

BASE_URL = "https://api.jolpi.ca/ergast/f1"


class ResultsProvider:
    def __init__(self, base_url: str = BASE_URL, timeout: float = 10.0,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _get(self, path: str) -> dict:
        url = f"{self.base_url}/{path}"
        try:
            resp = self.session.get(url, timeout=self.timeout)
            resp.raise_for_status()
        except requests.Timeout:
            raise ProviderError(url, f"no answer within {self.timeout}s")
        except requests.RequestException as e:
            raise ProviderError(url, str(e))
        try:
            return resp.json()
        except ValueError:
            raise MalformedPayloadError(url, "response body is not JSON")

    def last_results(self, season: int) -> dict:
        return self._get(f"{season}/last/results/")

    def driver_standings(self, season: int) -> dict:
        return self._get(f"{season}/driverStandings/")

    def constructor_standings(self, season: int) -> dict:
        return self._get(f"{season}/constructorStandings/")
