from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError

from ecswipe.core.errors import BatchItemFailure, MalformedResponseError


class FailureKind(Enum):
    REMOTE_ERROR = 'remote_error'
    CONNECTION_ERROR = 'connection_error'
    MALFORMED_RESPONSE = 'malformed_response'
    PARTIAL_FAILURE = 'partial_failure'
    UNEXPECTED = 'unexpected'


def classify(exc: BaseException) -> FailureKind:
    if isinstance(exc, ClientError):
        return FailureKind.REMOTE_ERROR
    if isinstance(exc, BotoCoreError):
        return FailureKind.CONNECTION_ERROR
    if isinstance(exc, MalformedResponseError):
        return FailureKind.MALFORMED_RESPONSE
    if isinstance(exc, BatchItemFailure):
        return FailureKind.PARTIAL_FAILURE
    return FailureKind.UNEXPECTED


@dataclass(frozen=True)
class OperationOutcome:
    """Result of one operation run by the batch executor."""
    resource_id: str
    success: bool
    failure: Optional[FailureKind] = None
    message: str = ''
    error: Optional[BaseException] = field(default=None, compare=False, repr=False)

    @classmethod
    def succeeded(cls, resource_id: str) -> 'OperationOutcome':
        return cls(resource_id, True)

    @classmethod
    def failed(cls, resource_id: str, exc: BaseException) -> 'OperationOutcome':
        return cls(resource_id, False, classify(exc), str(exc), exc)
