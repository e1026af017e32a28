"""Exception types shared by the sync job and the HTTP layer."""


class HubError(Exception):
    pass


class InvalidKeyError(HubError, ValueError):
    pass


class MalformedPayloadError(HubError):
    """Upstream JSON is missing fields the normalized records require."""

    def __init__(self, source: str, detail: str):
        super().__init__(f"malformed upstream payload from {source}: {detail}")
        self.source = source
        self.detail = detail


class ProviderError(HubError):
    """Results provider timed out, was unreachable or answered non-2xx."""

    def __init__(self, url: str, detail: str):
        super().__init__(f"{url}: {detail}")
        self.url = url
        self.detail = detail


class SyncFailedError(HubError):
    def __init__(self, failures: dict):
        reasons = ", ".join(f"{k}: {v}" for k, v in failures.items())
        super().__init__(f"every data source failed ({reasons})")
        self.failures = failures


class AuthError(HubError):
    pass


class ModelServiceError(HubError):
    pass
