"""In-memory record store.

Records are created once (seed time) and live for the whole process. The store
owns the records; the order index and the selection set only touch the
``reordered_index`` overlay field or keep ids.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field


@dataclass(slots=True, eq=False)
class Record:
    id: int
    value: str
    default_index: int
    reordered_index: int | None = None
    # lower-cased value, computed once for case-insensitive search
    search_key: str = field(default="", repr=False)

    @property
    def effective_index(self) -> int:
        if self.reordered_index is not None:
            return self.reordered_index
        return self.default_index


class RecordStore:
    def __init__(self) -> None:
        self._records: list[Record] = []
        self._by_id: dict[int, Record] = {}
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self._records)

    def create(self, value: str) -> Record:
        """Append a record at the next default position."""
        record = Record(
            id=self._next_id,
            value=value,
            default_index=len(self._records),
            search_key=value.lower(),
        )
        self._records.append(record)
        self._by_id[record.id] = record
        self._next_id += 1
        return record

    def get_by_id(self, record_id: int) -> Record | None:
        return self._by_id.get(record_id)

    def all(self) -> Sequence[Record]:
        """Records in creation order (which is also default-index order)."""
        return self._records

    def bulk_seed(self, count: int, template: str = "Item {n}") -> None:
        # ids start at 1 like the rest of the API, default indices at 0
        for _ in range(count):
            self.create(template.format(n=self._next_id))
