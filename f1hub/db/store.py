"""Document-style access to the synced collections.

``results`` and ``standings`` documents are only ever written whole, through
a WriteBatch, so a reader never sees half of a sync cycle.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session, sessionmaker

from f1hub.models.f1 import RaceResultDocument, StandingsDocument

logger = logging.getLogger(__name__)

COLLECTIONS = {
    "results": RaceResultDocument,
    "standings": StandingsDocument,
}

STANDINGS_KEYS = ("drivers", "constructors")


def _model_for(collection: str):
    try:
        return COLLECTIONS[collection]
    except KeyError:
        raise ValueError(f"unknown collection: {collection!r}")


def _document_fields(model) -> List[str]:
    return [c.name for c in model.__table__.columns if c.name not in ("id", "updated_at")]


def to_document(row) -> Dict[str, Any]:
    doc = {"id": row.id}
    for name in _document_fields(type(row)):
        doc[name] = getattr(row, name)
    doc["updated_at"] = row.updated_at
    return doc


class WriteBatch:
    """Full-overwrite writes staged in memory and applied in one transaction."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory
        self._writes: List[Tuple[str, str, Dict[str, Any]]] = []

    def __len__(self) -> int:
        return len(self._writes)

    def set(self, collection: str, key: str, fields: Dict[str, Any]) -> "WriteBatch":
        model = _model_for(collection)
        if collection == "standings" and key not in STANDINGS_KEYS:
            raise ValueError(f"unknown standings document: {key!r}")
        expected = set(_document_fields(model))
        missing = expected - set(fields)
        extra = set(fields) - expected
        if missing or extra:
            raise ValueError(
                f"{collection}/{key}: fields must be exactly {sorted(expected)} "
                f"(missing {sorted(missing)}, unexpected {sorted(extra)})"
            )
        self._writes.append((collection, key, dict(fields)))
        return self

    def _apply(self, session: Session, collection: str, key: str, fields: Dict[str, Any]) -> None:
        model = _model_for(collection)
        row = session.get(model, key)
        if row is None:
            row = model(id=key)
            session.add(row)
        for name, value in fields.items():
            setattr(row, name, value)
        # stamped by the database so every writer shares one clock
        row.updated_at = func.now()

    def commit(self) -> List[Tuple[str, str]]:
        if not self._writes:
            return []
        written = []
        with self._session_factory() as session:
            with session.begin():
                for collection, key, fields in self._writes:
                    self._apply(session, collection, key, fields)
                    written.append((collection, key))
        for collection, key in written:
            logger.debug("committed %s/%s", collection, key)
        self._writes = []
        return written


class DocumentStore:
    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def batch(self) -> WriteBatch:
        return WriteBatch(self.session_factory)

    def get(self, collection: str, key: str) -> Optional[Dict[str, Any]]:
        model = _model_for(collection)
        with self.session_factory() as session:
            row = session.get(model, key)
            return to_document(row) if row is not None else None

    def list(self, collection: str) -> List[Dict[str, Any]]:
        model = _model_for(collection)
        order = model.round if collection == "results" else model.id
        with self.session_factory() as session:
            return [to_document(r) for r in session.query(model).order_by(order).all()]
