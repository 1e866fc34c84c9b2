from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Mapping

from ecswipe.core.config import Config
from ecswipe.core.errors import MalformedResponseError
from ecswipe.core.outcome import OperationOutcome

Report = Dict[str, Dict[str, List[str]]]


def record_result(report: Report, resource_type, resource_id, success, message=''):
    """Add one deleted or failed entry under ``resource_type`` in ``report``."""
    if resource_type not in report:
        report[resource_type] = {'deleted': [], 'failed': []}
    if success:
        report[resource_type]['deleted'].append(resource_id)
    else:
        msg = f"{resource_id} ({message})" if message else resource_id
        report[resource_type]['failed'].append(msg)


def require_field(response: Mapping[str, Any], operation: str, *path: str) -> Any:
    """Return ``response[path[0]][path[1]]...`` or raise MalformedResponseError."""
    value: Any = response
    for key in path:
        if not isinstance(value, Mapping) or value.get(key) in (None, ''):
            raise MalformedResponseError(operation, '.'.join(path))
        value = value[key]
    return value


class ResourceCleaner(ABC):
    """Tears down one kind of ECS resource in one region.

    The ECS client is shared by every concurrent operation of the cleaner;
    the report is only written from the calling thread, after a batch ends.
    """

    resource_type = 'ECS Resources'

    def __init__(self, ecs, region: str, config: Config, report: Report):
        self.ecs = ecs
        self.region = region
        self.config = config
        self.report = report

    def _record_result(self, resource_type, resource_id, success, message=''):
        # Dry runs delete nothing, so there is nothing to report
        if self.config.dry_run:
            return
        record_result(self.report, resource_type, resource_id, success, message)

    def _record_outcomes(self, outcomes: Iterable[OperationOutcome]):
        for outcome in outcomes:
            self._record_result(
                self.resource_type,
                f"{outcome.resource_id} ({self.region})",
                outcome.success,
                outcome.message,
            )

    @abstractmethod
    def cleanup(self) -> List[OperationOutcome]:
        pass
