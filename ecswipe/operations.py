"""What to tear down (action) and where (scope)."""
from enum import Enum
from typing import Dict, NamedTuple


class Action(Enum):
    DELETE_CLUSTERS = 'delete-clusters'
    DEREGISTER_TASK_DEFINITIONS = 'deregister-task-definitions'
    DELETE_INACTIVE_TASK_DEFINITIONS = 'delete-task-definitions'


class Scope(Enum):
    SINGLE_REGION = 'single-region'
    ALL_REGIONS = 'all-regions'


class Operation(NamedTuple):
    action: Action
    scope: Scope

    @property
    def name(self) -> str:
        if self.scope is Scope.ALL_REGIONS:
            return f"{self.action.value}-all-regions"
        return self.action.value


OPERATIONS: Dict[str, Operation] = {
    op.name: op
    for op in (Operation(action, scope) for action in Action for scope in Scope)
}

DEFAULT_OPERATION = Operation(Action.DELETE_CLUSTERS, Scope.SINGLE_REGION)


def parse_operation(name: str) -> Operation:
    try:
        return OPERATIONS[name]
    except KeyError:
        raise ValueError(
            f"Unknown operation {name!r}; expected one of {', '.join(OPERATIONS)}"
        ) from None
