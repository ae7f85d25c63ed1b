import asyncio
import json
import logging
import shutil
from pathlib import Path
from typing import Dict, Generic, List, Optional, Type, TypeVar

from pydantic import ValidationError

from curio.config import settings as config
from curio.core.errors import PersistenceError, RecordNotFoundError
from curio.storage.schemas import (
    BaseRecord,
    ContentItem,
    LearningRequest,
    LessonPlan,
    utc_now,
)

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseRecord)

VERSION_FILE = "db-version.json"


class DocumentCollection(Generic[RecordT]):
    """
    One JSON file per record under ``<data_dir>/<collection>/``.

    There are no transactions; ``update`` is last-writer-wins keyed by id.
    File I/O runs in a worker thread so the event loop is never blocked.
    All I/O errors surface as PersistenceError.
    """

    def __init__(self, store_path: Path, name: str, model: Type[RecordT]):
        self.name = name
        self.model = model
        self.__store_path = Path(store_path) / name
        self.__store_path.mkdir(parents=True, exist_ok=True)

    def _path(self, record_id: str) -> Path:
        if not record_id or "/" in record_id or "\\" in record_id or record_id.startswith("."):
            raise PersistenceError(f"{self.name}: invalid record id {record_id!r}")
        return self.__store_path / f"{record_id}.json"

    def _write(self, record: RecordT) -> None:
        try:
            self._path(record.id).write_text(
                json.dumps(record.model_dump(mode="json"), ensure_ascii=False, indent=2),
                encoding="utf-8"
            )
        except OSError as e:
            raise PersistenceError(f"{self.name}: failed to write {record.id}: {e}") from e

    def _read(self, file_path: Path) -> RecordT:
        try:
            return self.model.model_validate(json.loads(file_path.read_text(encoding="utf-8")))
        except (OSError, ValueError, ValidationError) as e:
            raise PersistenceError(f"{self.name}: failed to read {file_path.name}: {e}") from e

    def _create(self, record: RecordT) -> RecordT:
        if self._path(record.id).exists():
            raise PersistenceError(f"{self.name}: record '{record.id}' already exists")
        now = utc_now()
        stored = record.model_copy(update={
            "created_at": record.created_at or now,
            "updated_at": now,
        })
        self._write(stored)
        return stored

    def _get(self, record_id: str) -> Optional[RecordT]:
        file_path = self._path(record_id)
        if not file_path.exists():
            return None
        return self._read(file_path)

    def _get_all(self) -> List[RecordT]:
        records = [self._read(p) for p in sorted(self.__store_path.glob("*.json"))]
        return sorted(records, key=lambda r: r.created_at)

    def _update(self, record: RecordT) -> RecordT:
        if not self._path(record.id).exists():
            raise RecordNotFoundError(self.name, record.id)
        stored = record.model_copy(update={"updated_at": utc_now()})
        self._write(stored)
        return stored

    def _delete(self, record_id: str) -> None:
        file_path = self._path(record_id)
        if not file_path.exists():
            raise RecordNotFoundError(self.name, record_id)
        try:
            file_path.unlink()
        except OSError as e:
            raise PersistenceError(f"{self.name}: failed to delete {record_id}: {e}") from e

    async def create(self, record: RecordT) -> RecordT:
        stored = await asyncio.to_thread(self._create, record)
        logger.debug(f"{self.name}: created {stored.id}")
        return stored

    async def get(self, record_id: str) -> Optional[RecordT]:
        return await asyncio.to_thread(self._get, record_id)

    async def get_all(self) -> List[RecordT]:
        return await asyncio.to_thread(self._get_all)

    async def update(self, record: RecordT) -> RecordT:
        stored = await asyncio.to_thread(self._update, record)
        logger.debug(f"{self.name}: updated {stored.id}")
        return stored

    async def delete(self, record_id: str) -> None:
        await asyncio.to_thread(self._delete, record_id)
        logger.debug(f"{self.name}: deleted {record_id}")

    def clear(self) -> None:
        if self.__store_path.exists():
            shutil.rmtree(self.__store_path)
        self.__store_path.mkdir(parents=True, exist_ok=True)


class DocumentStore:
    """Document store for the three record kinds Curio persists."""

    def __init__(self, data_dir=None):
        self.data_dir = Path(data_dir or config.DATA_DIR)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.learning_requests: DocumentCollection[LearningRequest] = DocumentCollection(
            self.data_dir, config.LEARNING_REQUESTS_COLLECTION, LearningRequest
        )
        self.lesson_plans: DocumentCollection[LessonPlan] = DocumentCollection(
            self.data_dir, config.LESSON_PLANS_COLLECTION, LessonPlan
        )
        self.content: DocumentCollection[ContentItem] = DocumentCollection(
            self.data_dir, config.CONTENT_COLLECTION, ContentItem
        )

    async def get_lesson_plans_for_request(self, learning_request_id: str) -> List[LessonPlan]:
        plans = await self.lesson_plans.get_all()
        return [p for p in plans if p.learning_request_id == learning_request_id]

    def get_version(self) -> int:
        version_path = self.data_dir / VERSION_FILE
        if not version_path.exists():
            return 0
        try:
            return int(json.loads(version_path.read_text(encoding="utf-8"))["version"])
        except (OSError, ValueError, KeyError, TypeError) as e:
            raise PersistenceError(f"Unreadable version record: {e}") from e

    def set_version(self, version: int) -> None:
        try:
            (self.data_dir / VERSION_FILE).write_text(
                json.dumps({"version": version, "migrated_at": utc_now()}, indent=2),
                encoding="utf-8"
            )
        except OSError as e:
            raise PersistenceError(f"Failed to write version record: {e}") from e

    def get_stats(self) -> Dict[str, int]:
        return {
            name: len(list((self.data_dir / name).glob("*.json")))
            for name in (
                config.LEARNING_REQUESTS_COLLECTION,
                config.LESSON_PLANS_COLLECTION,
                config.CONTENT_COLLECTION,
            )
        }


def initialize_store(data_dir=None) -> DocumentStore:
    """
    Open the document store and run schema migrations if needed.

    Version 1 is the first schema, so upgrading from an empty directory only
    records the version.
    """
    store = DocumentStore(data_dir)
    current = store.get_version()
    if current < config.DB_VERSION:
        print(f"Migrating document store from version {current} to {config.DB_VERSION}")
        store.set_version(config.DB_VERSION)
    else:
        logger.info(f"Document store is up to date (version {current})")
    print(f"✓ Document store ready at {store.data_dir}")
    return store
