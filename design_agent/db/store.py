"""Collection-oriented access to the relational tables.

Handlers talk to the database through :class:`DocumentStore`, which exposes
each table as a named collection of plain ``dict`` documents. Every call uses
its own short-lived session.
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.orm import sessionmaker

from design_agent.models.user import User
from design_agent.models.project import Project
from design_agent.models.design import Design
from design_agent.models.training_data import TrainingData

COLLECTIONS = {
    "users": User,
    "projects": Project,
    "designs": Design,
    "trainingData": TrainingData,
}


def new_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _model(collection: str):
    try:
        return COLLECTIONS[collection]
    except KeyError:
        raise KeyError(f"unknown collection: {collection}") from None


def _to_doc(row) -> dict[str, Any]:
    return {attr.key: getattr(row, attr.key) for attr in row.__mapper__.column_attrs}


class DocumentStore:
    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def insert(self, collection: str, doc: dict[str, Any]) -> str:
        model = _model(collection)
        now = utcnow()
        values = dict(doc)
        values.setdefault("id", new_id())
        values.setdefault("created_at", now)
        values.setdefault("updated_at", now)
        with self._session_factory() as db:
            db.add(model(**values))
            db.commit()
        return values["id"]

    def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        model = _model(collection)
        with self._session_factory() as db:
            row = db.get(model, doc_id)
            return _to_doc(row) if row is not None else None

    def query(
        self,
        collection: str,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = True,
    ) -> list[dict[str, Any]]:
        """Return documents whose fields equal every value in ``filters``."""
        model = _model(collection)
        stmt = select(model)
        for field, value in (filters or {}).items():
            stmt = stmt.where(getattr(model, field) == value)
        if order_by:
            column = getattr(model, order_by)
            stmt = stmt.order_by(column.desc() if descending else column.asc())
        with self._session_factory() as db:
            return [_to_doc(row) for row in db.scalars(stmt).all()]

    def update(
        self,
        collection: str,
        doc_id: str,
        partial: dict[str, Any],
        expected: dict[str, Any] | None = None,
    ) -> bool:
        """Merge ``partial`` into a document.

        When ``expected`` is given the write only happens if those fields still
        hold the expected values. Returns whether a document was updated.
        """
        model = _model(collection)
        values = dict(partial)
        values.setdefault("updated_at", utcnow())
        stmt = update(model).where(model.id == doc_id)
        for field, value in (expected or {}).items():
            stmt = stmt.where(getattr(model, field) == value)
        stmt = stmt.values(**values).execution_options(synchronize_session=False)
        with self._session_factory() as db:
            result = db.execute(stmt)
            db.commit()
            return result.rowcount > 0
