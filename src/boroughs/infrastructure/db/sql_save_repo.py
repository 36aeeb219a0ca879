import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from boroughs.domain.errors import SaveCorruptedError, SaveStorageError
from boroughs.domain.repositories import SaveRepository


logger = logging.getLogger(__name__)

_CREATE_TABLE = """
CREATE TABLE IF NOT EXISTS save_slot (
    slot VARCHAR(64) NOT NULL PRIMARY KEY,
    payload_json TEXT NOT NULL,
    saved_at VARCHAR(40) NOT NULL
)
"""


def create_save_engine(database_url: str) -> Engine:
    """Build an engine; in-memory SQLite shares one connection so the schema survives."""

    if database_url in ("sqlite://", "sqlite:///:memory:"):
        return create_engine(
            database_url,
            future=True,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(database_url, future=True, pool_pre_ping=True)


class SqlSaveRepository(SaveRepository):
    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self.SessionLocal = sessionmaker(bind=engine, future=True)
        self._ensure_schema()

    @classmethod
    def from_url(cls, database_url: str) -> "SqlSaveRepository":
        return cls(create_save_engine(database_url))

    def _ensure_schema(self) -> None:
        try:
            with self.SessionLocal.begin() as session:
                session.execute(text(_CREATE_TABLE))
        except SQLAlchemyError as exc:
            raise SaveStorageError(f"Could not prepare save storage: {exc}") from exc

    def save(self, slot: str, payload: Dict[str, Any]) -> None:
        params = {
            "slot": str(slot),
            "payload": json.dumps(payload),
            "saved_at": datetime.now(timezone.utc).isoformat(),
        }
        try:
            with self.SessionLocal.begin() as session:
                dialect = session.bind.dialect.name if session.bind is not None else "sqlite"
                if dialect == "mysql":
                    statement = text(
                        """
                        INSERT INTO save_slot (slot, payload_json, saved_at)
                        VALUES (:slot, :payload, :saved_at)
                        ON DUPLICATE KEY UPDATE
                            payload_json = VALUES(payload_json),
                            saved_at = VALUES(saved_at)
                        """
                    )
                else:
                    statement = text(
                        """
                        INSERT INTO save_slot (slot, payload_json, saved_at)
                        VALUES (:slot, :payload, :saved_at)
                        ON CONFLICT(slot) DO UPDATE SET
                            payload_json = excluded.payload_json,
                            saved_at = excluded.saved_at
                        """
                    )
                session.execute(statement, params)
        except SQLAlchemyError as exc:
            raise SaveStorageError(f"Could not write save slot {slot!r}: {exc}") from exc
        logger.info("Saved slot %s", slot)

    def load(self, slot: str) -> Optional[Dict[str, Any]]:
        try:
            with self.SessionLocal() as session:
                row = session.execute(
                    text("SELECT payload_json FROM save_slot WHERE slot = :slot"),
                    {"slot": str(slot)},
                ).first()
        except SQLAlchemyError as exc:
            raise SaveStorageError(f"Could not read save slot {slot!r}: {exc}") from exc
        if row is None:
            return None
        try:
            payload = json.loads(row.payload_json)
        except json.JSONDecodeError as exc:
            raise SaveCorruptedError(f"Save slot {slot!r} holds invalid JSON") from exc
        if not isinstance(payload, dict):
            raise SaveCorruptedError(f"Save slot {slot!r} does not hold a save object")
        logger.info("Loaded slot %s", slot)
        return payload

    def list_slots(self) -> List[str]:
        try:
            with self.SessionLocal() as session:
                rows = session.execute(text("SELECT slot FROM save_slot ORDER BY slot")).all()
        except SQLAlchemyError as exc:
            raise SaveStorageError(f"Could not list save slots: {exc}") from exc
        return [row.slot for row in rows]

    def delete(self, slot: str) -> bool:
        try:
            with self.SessionLocal.begin() as session:
                result = session.execute(text("DELETE FROM save_slot WHERE slot = :slot"), {"slot": str(slot)})
        except SQLAlchemyError as exc:
            raise SaveStorageError(f"Could not delete save slot {slot!r}: {exc}") from exc
        return bool(result.rowcount)
