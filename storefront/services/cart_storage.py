from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional
from urllib.parse import quote

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.core.exceptions import CartStorageError
from storefront.models.storage_slot import StorageSlot


class CartStorage(ABC):
    """A single durable key-value slot holding the serialized cart."""

    def __init__(self, key: str):
        self.key = key

    @abstractmethod
    def load(self) -> Optional[bytes]:
        """Return the stored payload, or None when the slot is absent."""

    @abstractmethod
    def save(self, payload: bytes) -> None:
        ...

    @abstractmethod
    def clear(self) -> None:
        """Remove the slot entirely. Clearing an absent slot is not an error."""


class InMemoryCartStorage(CartStorage):
    """
    Dictionary-backed slot.

    Pass the same ``backend`` dict to several instances to simulate a reload
    of the same browser profile.
    """

    def __init__(self, key: str = "cart", backend: Optional[Dict[str, bytes]] = None):
        super().__init__(key)
        self.backend = backend if backend is not None else {}

    def load(self) -> Optional[bytes]:
        return self.backend.get(self.key)

    def save(self, payload: bytes) -> None:
        self.backend[self.key] = bytes(payload)

    def clear(self) -> None:
        self.backend.pop(self.key, None)


class FileCartStorage(CartStorage):
    """One JSON file per key inside ``directory``."""

    def __init__(self, directory, key: str = "cart"):
        super().__init__(key)
        self.directory = Path(directory)

    @property
    def path(self) -> Path:
        # distinct keys map to distinct files
        safe_name = quote(self.key, safe="")
        return self.directory / f"{safe_name}.json"

    def load(self) -> Optional[bytes]:
        try:
            return self.path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise CartStorageError(self.key, "load", str(exc)) from exc

    def save(self, payload: bytes) -> None:
        tmp_path = self.path.with_suffix(".tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp_path.write_bytes(payload)
            tmp_path.replace(self.path)
        except OSError as exc:
            raise CartStorageError(self.key, "save", str(exc)) from exc

    def clear(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as exc:
            raise CartStorageError(self.key, "clear", str(exc)) from exc


class SqlCartStorage(CartStorage):
    """Slot stored as a row of the ``storage_slots`` table."""

    def __init__(self, db: Session, key: str):
        super().__init__(key)
        self.db = db

    def load(self) -> Optional[bytes]:
        try:
            slot = self.db.get(StorageSlot, self.key)
        except SQLAlchemyError as exc:
            raise CartStorageError(self.key, "load", str(exc)) from exc
        return slot.value if slot else None

    def save(self, payload: bytes) -> None:
        try:
            slot = self.db.get(StorageSlot, self.key)
            if slot:
                slot.value = payload
            else:
                self.db.add(StorageSlot(key=self.key, value=payload))
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise CartStorageError(self.key, "save", str(exc)) from exc

    def clear(self) -> None:
        try:
            self.db.query(StorageSlot).filter(StorageSlot.key == self.key).delete()
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise CartStorageError(self.key, "clear", str(exc)) from exc
