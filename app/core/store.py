"""In-memory entity store backing the clinical repository."""

import threading
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel

# Ordered sequences held by the store, one per entity type
ENTITY_TYPES = (
    "patients",
    "allergies",
    "chronic_conditions",
    "clinical_notes",
    "workflows",
    "tasks",
    "appointments",
    "referrals",
    "audit_log",
)

# Sequences whose records reference a patient and are removed with it
PATIENT_DEPENDENTS = (
    "allergies",
    "chronic_conditions",
    "clinical_notes",
    "tasks",
    "appointments",
    "referrals",
)

Predicate = Callable[[Any], bool]


class EntityStore:
    """
    Ordered, process-local record sequences.

    Records go in and come out as copies, so callers can never mutate stored
    state. Integer identifiers come from a per-type counter that only moves
    forward. All access is serialized by ``lock``; callers that need several
    steps to be atomic hold it across them.
    """

    def __init__(self) -> None:
        """Initialize empty sequences and counters."""
        self._tables: dict[str, list[BaseModel]] = {name: [] for name in ENTITY_TYPES}
        self._sequences: dict[str, int] = {name: 0 for name in ENTITY_TYPES}
        self.lock = threading.RLock()

    def _table(self, entity: str) -> list[BaseModel]:
        try:
            return self._tables[entity]
        except KeyError:
            raise ValueError(f"Unknown entity type: {entity}") from None

    def next_id(self, entity: str) -> int:
        """Reserve the next sequential identifier for an entity type."""
        self._table(entity)
        with self.lock:
            self._sequences[entity] += 1
            return self._sequences[entity]

    def insert(self, entity: str, record: BaseModel) -> BaseModel:
        """
        Append a record.

        Args:
            entity: Entity type name
            record: Record with an ``id`` attribute

        Returns:
            Copy of the stored record
        """
        table = self._table(entity)
        with self.lock:
            record_id = getattr(record, "id")
            if isinstance(record_id, int) and record_id > self._sequences[entity]:
                # Keep the counter ahead of explicitly numbered records
                self._sequences[entity] = record_id
            table.append(record.model_copy())
        return record.model_copy()

    def get(self, entity: str, record_id: Any) -> BaseModel | None:
        """Return a copy of the record with ``record_id``, if any."""
        with self.lock:
            for record in self._table(entity):
                if getattr(record, "id") == record_id:
                    return record.model_copy()
        return None

    def exists(self, entity: str, record_id: Any) -> bool:
        """Check whether a record with ``record_id`` is stored."""
        with self.lock:
            return any(getattr(record, "id") == record_id for record in self._table(entity))

    def replace(self, entity: str, record: BaseModel) -> BaseModel:
        """
        Replace the stored record that has the same identifier, in place.

        Raises:
            KeyError: If no record with that identifier is stored
        """
        table = self._table(entity)
        record_id = getattr(record, "id")
        with self.lock:
            for index, existing in enumerate(table):
                if getattr(existing, "id") == record_id:
                    table[index] = record.model_copy()
                    return record.model_copy()
        raise KeyError(record_id)

    def remove(self, entity: str, record_id: Any) -> bool:
        """Remove the record with ``record_id``. Returns False when absent."""
        table = self._table(entity)
        with self.lock:
            for index, existing in enumerate(table):
                if getattr(existing, "id") == record_id:
                    del table[index]
                    return True
        return False

    def remove_where(self, entity: str, predicate: Predicate) -> int:
        """Remove every record matching ``predicate`` and return how many went."""
        table = self._table(entity)
        with self.lock:
            kept = [record for record in table if not predicate(record)]
            removed = len(table) - len(kept)
            table[:] = kept
        return removed

    def all(self, entity: str) -> list[Any]:
        """Return copies of all records in insertion order."""
        with self.lock:
            return [record.model_copy() for record in self._table(entity)]

    def find(self, entity: str, predicate: Predicate) -> list[Any]:
        """Return copies of matching records in insertion order."""
        with self.lock:
            return [record.model_copy() for record in self._table(entity) if predicate(record)]

    def by_patient(self, entity: str, patient_id: str) -> list[Any]:
        """Return records referencing ``patient_id`` in insertion order."""
        return self.find(entity, lambda record: getattr(record, "patient_id", None) == patient_id)

    def count(self, entity: str, predicate: Predicate | None = None) -> int:
        """Count records, optionally only those matching ``predicate``."""
        with self.lock:
            table = self._table(entity)
            if predicate is None:
                return len(table)
            return sum(1 for record in table if predicate(record))

    def last(self, entity: str) -> Any | None:
        """Return a copy of the most recently appended record."""
        with self.lock:
            table = self._table(entity)
            return table[-1].model_copy() if table else None
