"""Run context handed to resources and zap passes."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from .collection import ResourceCollection

if TYPE_CHECKING:
    from collections.abc import Callable

    from .resource import Resource

log = getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class ConvergeRecord:
    """One side-effect boundary entered (or, in why-run, skipped) by a resource."""

    resource: str
    description: str
    why_run: bool = False


@dataclass(slots=True)
class ConvergeReport:
    records: list[ConvergeRecord] = field(default_factory=list["ConvergeRecord"])

    @property
    def updated(self) -> bool:
        return bool(self.records)

    def record(self, record: ConvergeRecord) -> None:
        self.records.append(record)

    def records_for(self, resource: Resource) -> tuple[ConvergeRecord, ...]:
        label = str(resource)
        return tuple(record for record in self.records if record.resource == label)


@dataclass(slots=True, kw_only=True)
class RunContext:
    """State shared by every resource of one run.

    There is no ambient run: callers construct a context and pass it to the
    runner, resources and zap passes explicitly.
    """

    resource_collection: ResourceCollection = field(default_factory=ResourceCollection)
    why_run: bool = False
    report: ConvergeReport = field(default_factory=ConvergeReport)

    def converge_by(
        self,
        resource: Resource,
        description: str,
        block: Callable[[], object],
    ) -> bool:
        """Run ``block`` as one reported unit of change.

        In why-run mode the block is skipped and the unit is recorded as a change
        that would have happened. Returns whether the block ran.
        """

        if self.why_run:
            log.info("%s would %s", resource, description)
            self.report.record(
                ConvergeRecord(resource=str(resource), description=description, why_run=True)
            )
            return False

        block()
        log.info("%s %s", resource, description)
        self.report.record(ConvergeRecord(resource=str(resource), description=description))
        return True
