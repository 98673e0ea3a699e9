"""Change batches and the trigger context they arrive with."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.order_line import OrderLineRecord


class Operation(Enum):
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


class Phase(Enum):
    BEFORE_INSERT = "before-insert"
    BEFORE_UPDATE = "before-update"
    AFTER_INSERT = "after-insert"
    AFTER_UPDATE = "after-update"
    AFTER_DELETE = "after-delete"


_PHASES: dict[tuple[bool, Operation], Phase] = {
    (True, Operation.INSERT): Phase.BEFORE_INSERT,
    (True, Operation.UPDATE): Phase.BEFORE_UPDATE,
    (False, Operation.INSERT): Phase.AFTER_INSERT,
    (False, Operation.UPDATE): Phase.AFTER_UPDATE,
    (False, Operation.DELETE): Phase.AFTER_DELETE,
}


@dataclass(frozen=True)
class TriggerContext:
    """Flags supplied by the runtime alongside a change batch."""

    is_before: bool
    is_after: bool
    operation: Operation

    @property
    def phase(self) -> Phase:
        if self.is_before == self.is_after:
            raise ValidationError(
                "Exactly one of is_before / is_after must be set"
            )
        phase = _PHASES.get((self.is_before, self.operation))
        if phase is None:
            when = "before" if self.is_before else "after"
            raise ValidationError(
                f"No phase handles {when} {self.operation.value}"
            )
        return phase

    @staticmethod
    def for_phase(phase: Phase) -> TriggerContext:
        for (is_before, operation), candidate in _PHASES.items():
            if candidate is phase:
                return TriggerContext(is_before, not is_before, operation)
        raise ValidationError(f"Unknown phase: {phase!r}")


@dataclass(frozen=True)
class ChangeBatch:
    """Before/after snapshots for one data-mutation event.

    Invariant: when both sides are present they are index-aligned and of
    equal length, so ``old_records[i]`` and ``new_records[i]`` describe
    the same record.
    """

    new_records: tuple[OrderLineRecord, ...] | None = None
    old_records: tuple[OrderLineRecord, ...] | None = None

    def __post_init__(self) -> None:
        if self.new_records is not None:
            object.__setattr__(self, "new_records", tuple(self.new_records))
        if self.old_records is not None:
            object.__setattr__(self, "old_records", tuple(self.old_records))

        if self.new_records is None or self.old_records is None:
            return
        if len(self.new_records) != len(self.old_records):
            raise ValidationError(
                f"Change batch is misaligned: {len(self.old_records)} old "
                f"records vs {len(self.new_records)} new records"
            )
        for old, new in zip(self.old_records, self.new_records):
            if old.id != new.id:
                raise ValidationError(
                    f"Change batch is misaligned: old record '{old.id}' "
                    f"paired with new record '{new.id}'"
                )

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def inserted(records: list[OrderLineRecord]) -> ChangeBatch:
        return ChangeBatch(new_records=tuple(records))

    @staticmethod
    def updated(
        old_records: list[OrderLineRecord],
        new_records: list[OrderLineRecord],
    ) -> ChangeBatch:
        return ChangeBatch(new_records=tuple(new_records), old_records=tuple(old_records))

    @staticmethod
    def deleted(records: list[OrderLineRecord]) -> ChangeBatch:
        return ChangeBatch(old_records=tuple(records))

    # --- Accessors ------------------------------------------------------------

    def __len__(self) -> int:
        if self.new_records is not None:
            return len(self.new_records)
        if self.old_records is not None:
            return len(self.old_records)
        return 0

    def require_new(self) -> tuple[OrderLineRecord, ...]:
        if self.new_records is None:
            raise ValidationError("Change batch carries no new records")
        return self.new_records

    def require_old(self) -> tuple[OrderLineRecord, ...]:
        if self.old_records is None:
            raise ValidationError("Change batch carries no old records")
        return self.old_records

    def pairs(self) -> Iterator[tuple[OrderLineRecord, OrderLineRecord]]:
        """Yield aligned ``(old, new)`` pairs for an update batch."""
        yield from zip(self.require_old(), self.require_new())
