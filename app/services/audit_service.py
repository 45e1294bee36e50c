"""Audit recorder for repository mutations."""

from collections.abc import Callable
from datetime import datetime

import structlog

from app.core.store import EntityStore
from app.core.time_utils import utcnow
from app.schemas.audit import AuditAction, AuditEntry, AuditLogFilters

logger = structlog.get_logger()


class AuditRecorder:
    """Append-only audit trail kept in the entity store."""

    def __init__(
        self,
        store: EntityStore,
        clock: Callable[[], datetime] = utcnow,
    ):
        """Initialize recorder with the store it writes to and a clock."""
        self.store = store
        self._clock = clock

    def record(
        self,
        entity_type: str,
        entity_id: str | int,
        action: AuditAction,
        user_id: str,
    ) -> AuditEntry | None:
        """
        Append an audit entry.

        Recording is best effort: any failure is logged and swallowed so the
        mutation that triggered it still succeeds.

        Args:
            entity_type: Name of the changed entity type (e.g. "Patient")
            entity_id: Identifier of the changed record
            action: Kind of change
            user_id: Acting user

        Returns:
            The created entry, or None if it could not be recorded
        """
        try:
            with self.store.lock:
                timestamp = self._clock()
                previous = self.store.last("audit_log")
                if previous is not None and timestamp < previous.timestamp:
                    timestamp = previous.timestamp

                entry = AuditEntry(
                    id=self.store.next_id("audit_log"),
                    entity_type=entity_type,
                    entity_id=str(entity_id),
                    action=action,
                    user_id=user_id,
                    timestamp=timestamp,
                )
                return self.store.insert("audit_log", entry)
        except Exception as e:
            logger.warning(
                "audit_record_failed",
                entity_type=entity_type,
                entity_id=str(entity_id),
                action=str(action),
                error=str(e),
            )
            return None

    def entries(self, filters: AuditLogFilters | None = None) -> list[AuditEntry]:
        """
        Return audit entries, most recent first.

        Args:
            filters: Optional entity type, entity id, user and action filters

        Returns:
            Matching entries sorted by timestamp descending
        """
        filters = filters or AuditLogFilters()

        def matches(entry: AuditEntry) -> bool:
            if filters.entity_type and entry.entity_type != filters.entity_type:
                return False
            if filters.entity_id and entry.entity_id != filters.entity_id:
                return False
            if filters.user_id and entry.user_id != filters.user_id:
                return False
            if filters.action and entry.action != filters.action:
                return False
            return True

        logs = self.store.find("audit_log", matches)
        logs.sort(key=lambda entry: (entry.timestamp, entry.id), reverse=True)

        if filters.limit is not None:
            logs = logs[: filters.limit]
        return logs
