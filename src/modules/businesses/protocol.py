"""Protocol definition for business record stores."""

from collections.abc import Sequence
from typing import Protocol

from src.modules.businesses.models import Business


class RecordStore(Protocol):
    """Protocol for whole-collection business record storage.

    Implementations own the full ordered collection and replace it as a
    unit, so the backing mechanism can change without touching the
    service layer.
    """

    async def load_all(self) -> list[Business]:
        """Return every stored record in insertion order.

        An absent store is initialised empty. An unreadable store yields
        an empty list instead of raising.
        """
        ...

    async def save_all(self, records: Sequence[Business]) -> bool:
        """Replace the stored collection with ``records``.

        Returns:
            True when the write completed, False otherwise.
        """
        ...
