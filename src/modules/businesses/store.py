"""JSON file store for business records."""

import asyncio
import json
from collections.abc import Sequence
from pathlib import Path

import structlog

from src.modules.businesses.exceptions import UnreadableStoreError
from src.modules.businesses.models import Business

logger = structlog.get_logger()


class JsonFileStore:
    """Business record store backed by a single pretty-printed JSON array.

    Every save rewrites the whole document. Writes go to a sibling
    temporary file that is renamed over the target, so readers never see
    a partially written document.
    """

    def __init__(self, path: str | Path) -> None:
        """Initialize the store.

        Args:
            path: Location of the JSON document. The parent directory is
                created on first access.
        """
        self._path = Path(path)

    @property
    def path(self) -> Path:
        """Location of the backing document."""
        return self._path

    async def load_all(self) -> list[Business]:
        """Load every record in insertion order.

        Returns:
            Stored records, or an empty list if the document is missing
            or unreadable.
        """
        try:
            return await asyncio.to_thread(self._read)
        except UnreadableStoreError as e:
            logger.error(
                "business_store_unreadable",
                path=e.path,
                reason=e.reason,
            )
            return []

    async def save_all(self, records: Sequence[Business]) -> bool:
        """Overwrite the document with the full collection.

        Args:
            records: Complete ordered collection to persist.

        Returns:
            True on success, False if the write could not complete.
        """
        try:
            await asyncio.to_thread(self._write, records)
        except OSError as e:
            logger.error(
                "business_store_write_failed",
                path=str(self._path),
                error=str(e),
                error_type=type(e).__name__,
            )
            return False

        logger.debug(
            "business_store_saved", path=str(self._path), count=len(records)
        )
        return True

    def _read(self) -> list[Business]:
        try:
            if not self._path.exists():
                self._path.parent.mkdir(parents=True, exist_ok=True)
                self._path.write_text("[]", encoding="utf-8")
                logger.info("business_store_initialized", path=str(self._path))
                return []
            raw = self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise UnreadableStoreError(str(self._path), str(e)) from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise UnreadableStoreError(
                str(self._path), f"invalid JSON: {e.msg}"
            ) from e

        if not isinstance(data, list):
            raise UnreadableStoreError(str(self._path), "expected a JSON array")

        try:
            return [Business.from_dict(item) for item in data]
        except (KeyError, TypeError, ValueError) as e:
            raise UnreadableStoreError(
                str(self._path), f"malformed record: {e!r}"
            ) from e

    def _write(self, records: Sequence[Business]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(
            [record.to_dict() for record in records],
            indent=2,
            ensure_ascii=False,
        )
        tmp_path = self._path.with_name(f"{self._path.name}.tmp")
        try:
            tmp_path.write_text(payload, encoding="utf-8")
            tmp_path.replace(self._path)
        finally:
            tmp_path.unlink(missing_ok=True)
