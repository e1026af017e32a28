import re
from dataclasses import dataclass

from f1hub.core.errors import InvalidKeyError

_KEY_RE = re.compile(r"^(\d{4})_(\d{2,})$")


@dataclass(frozen=True)
class ResultKey:
    """Document key of a race result: ``{season}_{round:02d}``."""

    season: int
    round: int

    def __post_init__(self):
        if not 1000 <= self.season <= 9999:
            raise InvalidKeyError(f"season out of range: {self.season}")
        if self.round < 1:
            raise InvalidKeyError(f"round must be >= 1, got {self.round}")

    def encode(self) -> str:
        return f"{self.season}_{self.round:02d}"

    @classmethod
    def decode(cls, text: str) -> "ResultKey":
        m = _KEY_RE.match(text or "")
        if not m:
            raise InvalidKeyError(f"not a result key: {text!r}")
        key = cls(int(m.group(1)), int(m.group(2)))
        # rejects "2026_005" and other non-canonical spellings of the same round
        if key.encode() != text:
            raise InvalidKeyError(f"non-canonical result key: {text!r}")
        return key

    def __str__(self) -> str:
        return self.encode()
