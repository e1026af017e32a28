"""Bearer credential verification against the identity provider's REST API."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import requests

from f1hub.core.errors import AuthError

logger = logging.getLogger(__name__)

IDENTITY_URL = "https://identitytoolkit.googleapis.com/v1"


@dataclass(frozen=True)
class VerifiedUser:
    uid: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    photo_url: Optional[str] = None


def parse_bearer(header: Optional[str]) -> str:
    if not header:
        raise AuthError("missing Authorization header")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthError("Authorization header must be 'Bearer <token>'")
    return token.strip()


class IdentityVerifier:
    """Resolves an ID token to the account it was issued for.

    ``accounts:lookup`` only answers for tokens the provider itself signed
    and that have not expired, so a user record coming back is the proof.
    """

    def __init__(self, api_key: Optional[str], base_url: str = IDENTITY_URL, timeout: float = 10.0,
                 session: Optional[requests.Session] = None):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def verify(self, id_token: str) -> VerifiedUser:
        if not self.api_key:
            raise AuthError("identity provider is not configured")
        try:
            resp = self.session.post(
                f"{self.base_url}/accounts:lookup",
                params={"key": self.api_key},
                json={"idToken": id_token},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning("Identity lookup failed: %s", e)
            raise AuthError("could not verify credential")
        if resp.status_code != 200:
            raise AuthError("credential rejected")
        try:
            users = (resp.json() or {}).get("users") or []
        except ValueError:
            raise AuthError("could not verify credential")
        if not users or not users[0].get("localId"):
            raise AuthError("credential rejected")
        u = users[0]
        return VerifiedUser(
            uid=u["localId"],
            email=u.get("email"),
            display_name=u.get("displayName"),
            photo_url=u.get("photoUrl"),
        )
