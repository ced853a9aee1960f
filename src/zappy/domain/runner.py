"""Minimal host runner: converge every resource of a run context in order."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from zappy.domain.model import ConvergeReport, RunContext

log = getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class ResourceFailure:
    resource: str
    action: str | None
    error: Exception


@dataclass(slots=True)
class RunReport:
    """Summary of one traversal of the resource collection."""

    converge: ConvergeReport
    processed: int = 0
    failures: list[ResourceFailure] = field(default_factory=list["ResourceFailure"])

    @property
    def succeeded(self) -> bool:
        return not self.failures

    @property
    def updated(self) -> bool:
        return self.converge.updated


def converge(context: RunContext) -> RunReport:
    """Run each resource's declared action, including resources appended meanwhile.

    A failing resource is recorded and traversal continues with the next one.
    """

    collection = context.resource_collection
    report = RunReport(converge=context.report)
    index = 0
    while index < len(collection):
        resource = collection[index]
        index += 1
        try:
            resource.run_action(context)
        except Exception as exc:  # noqa: BLE001
            log.error("%s failed: %s", resource, exc)  # noqa: TRY400
            report.failures.append(
                ResourceFailure(resource=str(resource), action=resource.action, error=exc)
            )
        report.processed += 1

    log.info(
        "Converged %s resources: changes=%s, failures=%s, why_run=%s",
        report.processed,
        len(report.converge.records),
        len(report.failures),
        context.why_run,
    )
    return report
