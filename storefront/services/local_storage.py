import json
import logging
from typing import Any, Optional

from sqlmodel import Session, select

from storefront.database import create_db_and_tables
from storefront.models.stored_value import StoredValue, utcnow

logger = logging.getLogger(__name__)


class LocalStorage:
    """Durable key/value store for state that must survive a restart."""

    def __init__(self, engine):
        self.engine = engine
        create_db_and_tables(engine)

    def get_item(self, key: str) -> Optional[str]:
        with Session(self.engine) as session:
            item = session.get(StoredValue, key)
            return item.value if item else None

    def set_item(self, key: str, value: str) -> None:
        with Session(self.engine) as session:
            item = session.get(StoredValue, key)
            if item:
                item.value = value
                item.updated_at = utcnow()
            else:
                item = StoredValue(key=key, value=value)
            session.add(item)
            session.commit()

    def remove_item(self, key: str) -> None:
        with Session(self.engine) as session:
            item = session.get(StoredValue, key)
            if item:
                session.delete(item)
                session.commit()

    def get_json(self, key: str, default: Any = None) -> Any:
        raw = self.get_item(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning(f"Discarding unreadable value stored under '{key}'")
            return default

    def set_json(self, key: str, value: Any) -> None:
        self.set_item(key, json.dumps(value, default=str))

    def keys(self):
        with Session(self.engine) as session:
            return [item.key for item in session.exec(select(StoredValue)).all()]

    def clear(self) -> None:
        with Session(self.engine) as session:
            for item in session.exec(select(StoredValue)).all():
                session.delete(item)
            session.commit()
