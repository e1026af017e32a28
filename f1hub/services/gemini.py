"""Gemini ``generateContent`` client with Google Search grounding."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import requests

from f1hub.core.errors import ModelServiceError

logger = logging.getLogger(__name__)

GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta"


@dataclass
class ModelReply:
    text: str
    sources: List[Dict[str, Optional[str]]] = field(default_factory=list)


class GeminiClient:
    def __init__(self, api_key: Optional[str], model: str, base_url: str = GEMINI_URL,
                 timeout: float = 60.0, session: Optional[requests.Session] = None):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def generate(self, system_instruction: str, turns: Sequence[Tuple[str, str]]) -> ModelReply:
        """Send ``turns`` ((role, text) with role "user" or "model") and return the reply."""
        if not self.api_key:
            raise ModelServiceError("model service is not configured")

        payload = {
            "systemInstruction": {"parts": [{"text": system_instruction}]},
            "contents": [{"role": role, "parts": [{"text": text}]} for role, text in turns],
            "tools": [{"google_search": {}}],
        }
        try:
            resp = self.session.post(
                f"{self.base_url}/models/{self.model}:generateContent",
                headers={"x-goog-api-key": self.api_key, "Content-Type": "application/json"},
                json=payload,
                timeout=self.timeout,
            )
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.error("Gemini call failed: %s", e)
            raise ModelServiceError("model call failed") from e

        if not isinstance(data, dict) or not isinstance(data.get("candidates") or [], list):
            logger.error("Unexpected Gemini response: %r", data)
            raise ModelServiceError("malformed model response")
        candidates = data.get("candidates") or []
        if not candidates:
            raise ModelServiceError("model returned no candidates")
        candidate = candidates[0]
        content = (candidate.get("content") or {}) if isinstance(candidate, dict) else None
        if not isinstance(content, dict) or not isinstance(content.get("parts") or [], list):
            logger.error("Unexpected Gemini candidate: %r", candidate)
            raise ModelServiceError("malformed model response")

        parts = content.get("parts") or []
        text = "".join(
            p["text"] for p in parts if isinstance(p, dict) and isinstance(p.get("text"), str)
        ).strip()
        if not text:
            raise ModelServiceError("model returned an empty reply")

        grounding = candidate.get("groundingMetadata")
        chunks = grounding.get("groundingChunks") if isinstance(grounding, dict) else None
        sources = [
            {"uri": c["web"].get("uri"), "title": c["web"].get("title")}
            for c in (chunks if isinstance(chunks, list) else [])
            if isinstance(c, dict) and isinstance(c.get("web"), dict) and c["web"].get("uri")
        ]
        return ModelReply(text=text, sources=sources)
