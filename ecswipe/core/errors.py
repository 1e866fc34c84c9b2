"""Exception hierarchy for ecswipe.

Fatal errors (``ConfigError``, ``ClientProviderError``) abort the run.
The rest describe why a single resource or batch failed and are turned
into logged outcomes by the batch executor.
"""


class EcsWipeError(Exception):
    """Base class for all ecswipe errors."""


class ConfigError(EcsWipeError):
    """Missing or invalid startup configuration."""


class ClientProviderError(EcsWipeError):
    """An AWS session or client could not be constructed."""


class MalformedResponseError(EcsWipeError):
    """A successful API response lacks a field we rely on."""

    def __init__(self, operation, field):
        super().__init__(f"{operation} response is missing '{field}'")
        self.operation = operation
        self.field = field


class BatchItemFailure(EcsWipeError):
    """A batch call succeeded but reported failures for some of its items."""

    def __init__(self, operation, failures, succeeded=()):
        self.operation = operation
        self.failures = failures
        self.succeeded = list(succeeded)
        details = ', '.join(
            f"{f.get('arn', '?')} ({f.get('reason', 'unknown')})" for f in failures
        )
        super().__init__(f"{operation} reported {len(failures)} failure(s): {details}")
