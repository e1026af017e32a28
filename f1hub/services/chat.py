"""askF1Expert: forward a conversation to the model and post-process the reply.

The model may end its reply with a memory marker::

    NEW_FACTS: ["Supports Ferrari", "Lives in Monza"]

optionally wrapped in a ```json fence. The marker is only recognised as the
very last thing in the reply. It is a best-effort side channel: when it does
not parse, the reply goes back untouched and no facts are surfaced.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Dict, List, Optional, Sequence, Tuple

from f1hub.db.store import DocumentStore
from f1hub.schemas.chat import ChatRequest, ChatResponse, Source, UserContext
from f1hub.services.gemini import GeminiClient

logger = logging.getLogger(__name__)

MARKER = "NEW_FACTS:"
MAX_FACT_LENGTH = 200

# matched from the last occurrence of MARKER onwards
_MARKER_TAIL_RE = re.compile(r"NEW_FACTS:\s*(?P<body>\[.*\])\s*(?:```)?\s*\Z", re.DOTALL)
_FENCE_OPEN_RE = re.compile(r"```(?:json)?\s*\Z")

_ROLE_TO_MODEL = {"user": "user", "assistant": "model", "model": "model"}


def extract_new_facts(text: str) -> Tuple[str, List[str]]:
    """Split ``text`` into (reply without marker, facts).

    Only the last ``NEW_FACTS:`` counts, and it must close the reply.
    """
    start = text.rfind(MARKER)
    if start < 0:
        return text, []
    m = _MARKER_TAIL_RE.match(text, start)
    if not m:
        logger.warning("Memory marker present but not at the end of the reply, ignoring it")
        return text, []

    try:
        facts = json.loads(m.group("body"))
    except ValueError as e:
        logger.warning("Memory marker is not valid JSON (%s), ignoring it", e)
        return text, []
    if not isinstance(facts, list) or not all(isinstance(f, str) for f in facts):
        logger.warning("Memory marker is not a list of strings, ignoring it")
        return text, []

    cleaned = [f.strip() for f in facts if f.strip()]
    cleaned = [f for f in cleaned if len(f) <= MAX_FACT_LENGTH]
    head = _FENCE_OPEN_RE.sub("", text[:start])
    return head.rstrip(), cleaned


def dedupe_sources(sources: Sequence[Dict[str, Optional[str]]], cap: int) -> List[Dict[str, Optional[str]]]:
    seen = set()
    out = []
    for s in sources:
        uri = s.get("uri")
        if not uri or uri in seen:
            continue
        seen.add(uri)
        out.append({"uri": uri, "title": s.get("title") or uri})
        if len(out) >= cap:
            break
    return out


def _standings_summary(store: DocumentStore) -> List[str]:
    lines = []
    drivers = store.get("standings", "drivers")
    if drivers and drivers["standings"]:
        top = ", ".join(
            f"{e['position']}. {e['driver_name']} ({e['constructor']}, {e['points']:g} pts)"
            for e in drivers["standings"][:3]
        )
        lines.append(f"Drivers' championship after round {drivers['round']}: {top}.")
    constructors = store.get("standings", "constructors")
    if constructors and constructors["standings"]:
        top = ", ".join(
            f"{e['position']}. {e['name']} ({e['points']:g} pts)"
            for e in constructors["standings"][:3]
        )
        lines.append(f"Constructors' championship after round {constructors['round']}: {top}.")
    return lines


def build_system_instruction(season: int, season_facts: Sequence[str], context: UserContext) -> str:
    parts = [
        f"You are the F1 Expert of a fan site about the {season} Formula 1 season.",
        "Answer questions about drivers, teams, races, results, standings and regulations. "
        "Use Google Search for anything recent and prefer current information over memory. "
        "Keep answers short and friendly; use markdown lists for tables of data.",
        f"The {season} grid has 11 teams and 22 drivers, including newcomers Audi and Cadillac, "
        "and runs under the new 2026 chassis and power unit regulations.",
    ]
    parts.extend(season_facts)

    if context.facts or context.favourite_driver:
        parts.append("What you already know about this user:")
        if context.favourite_driver:
            parts.append(f"- Favourite driver: {context.favourite_driver}")
        parts.extend(f"- {fact}" for fact in context.facts)

    parts.append(
        "If the user reveals a lasting preference or personal detail that you did not already know "
        "(favourite team, home race, how long they have followed F1, ...), end your reply with one "
        f'final line of the form {MARKER} ["short fact", ...]. Do not add that line otherwise.'
    )
    return "\n".join(parts)


class ChatService:
    def __init__(self, model: GeminiClient, store: DocumentStore, season: int, max_sources: int = 5):
        self.model = model
        self.store = store
        self.season = season
        self.max_sources = max_sources

    def ask(self, request: ChatRequest) -> ChatResponse:
        instruction = build_system_instruction(
            self.season, _standings_summary(self.store), request.user_context
        )
        turns = [(_ROLE_TO_MODEL[m.role], m.text) for m in request.messages]

        reply = self.model.generate(instruction, turns)

        text, facts = extract_new_facts(reply.text)
        sources = dedupe_sources(reply.sources, self.max_sources)
        if facts:
            logger.info("Extracted %d new user fact(s)", len(facts))
        return ChatResponse(
            reply=text,
            sources=[Source(**s) for s in sources],
            new_facts=facts,
        )
