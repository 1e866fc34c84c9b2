import logging
from functools import partial
from typing import List

from ecswipe.core.chunking import TASK_DEFINITION_CHUNK_SIZE, chunked
from ecswipe.core.errors import BatchItemFailure, MalformedResponseError
from ecswipe.core.executor import run_batch
from ecswipe.core.outcome import OperationOutcome
from ecswipe.resources.base import ResourceCleaner, require_field
from ecswipe.resources.listing import INACTIVE, iter_task_definition_arns


class TaskDefinitionCleaner(ResourceCleaner):
    """Deregisters every task definition revision in a region.

    Deregistered revisions become INACTIVE; removing them for good is
    :class:`InactiveTaskDefinitionCleaner`'s job.
    """

    resource_type = 'ECS Task Definitions (deregistered)'

    def cleanup(self) -> List[OperationOutcome]:
        region = self.region
        logging.info(f"[{region}] Deregistering task definitions", extra={'region': region})

        arns = list(iter_task_definition_arns(self.ecs))
        logging.info(f"[{region}] Found {len(arns)} task definitions", extra={'region': region})
        if not arns:
            return []

        if self.config.dry_run:
            for arn in arns:
                logging.info(f"[Dry-Run] Would deregister task definition {arn}")
            return []

        outcomes = run_batch(
            ((arn, partial(self.deregister, arn)) for arn in arns),
            'Deregister task definition',
            region,
        )
        self._record_outcomes(outcomes)
        return outcomes

    def deregister(self, arn: str):
        response = self.ecs.deregister_task_definition(taskDefinition=arn)
        require_field(response, 'DeregisterTaskDefinition', 'taskDefinition', 'taskDefinitionArn')
        logging.info(f"[{self.region}] Task definition {arn} deregistered",
                     extra={'region': self.region, 'resource_id': arn,
                            'action': 'deregister_task_definition'})


class InactiveTaskDefinitionCleaner(ResourceCleaner):
    """Permanently deletes INACTIVE task definition revisions, in batches."""

    resource_type = 'ECS Task Definitions (deleted)'

    def cleanup(self) -> List[OperationOutcome]:
        region = self.region
        logging.info(f"[{region}] Deleting inactive task definitions", extra={'region': region})

        arns = list(iter_task_definition_arns(self.ecs, status=INACTIVE))
        logging.info(f"[{region}] Found {len(arns)} inactive task definitions",
                     extra={'region': region})
        if not arns:
            return []

        if self.config.dry_run:
            for arn in arns:
                logging.info(f"[Dry-Run] Would delete task definition {arn}")
            return []

        chunks = chunked(arns, TASK_DEFINITION_CHUNK_SIZE)
        by_id = {self._chunk_id(i, len(chunks), chunk): chunk
                 for i, chunk in enumerate(chunks, 1)}
        outcomes = run_batch(
            ((chunk_id, partial(self.delete_batch, chunk)) for chunk_id, chunk in by_id.items()),
            'Delete task definitions',
            region,
        )
        for outcome in outcomes:
            self._record_chunk(by_id[outcome.resource_id], outcome)
        return outcomes

    def _record_chunk(self, chunk: List[str], outcome: OperationOutcome):
        """Report each ARN of a chunk on its own, splitting partial failures."""
        def record(arn, success, message=''):
            self._record_result(self.resource_type, f"{arn} ({self.region})", success, message)

        if outcome.success:
            for arn in chunk:
                record(arn, True)
        elif isinstance(outcome.error, BatchItemFailure):
            for arn in outcome.error.succeeded:
                record(arn, True)
            for failure in outcome.error.failures:
                record(failure.get('arn', '?'), False, failure.get('reason', 'unknown'))
        else:
            for arn in chunk:
                record(arn, False, outcome.message)

    @staticmethod
    def _chunk_id(index, total, chunk):
        return f"batch {index}/{total}: {', '.join(chunk)}"

    def delete_batch(self, arns: List[str]):
        response = self.ecs.delete_task_definitions(taskDefinitions=arns)
        failures = response.get('failures') or []
        deleted = response.get('taskDefinitions')
        if deleted is None and not failures:
            raise MalformedResponseError('DeleteTaskDefinitions', 'taskDefinitions')

        deleted_arns = [td.get('taskDefinitionArn') for td in deleted or []]
        for arn in deleted_arns:
            logging.info(f"[{self.region}] Task definition {arn} deleted",
                         extra={'region': self.region, 'resource_id': arn,
                                'action': 'delete_task_definitions'})
        if failures:
            raise BatchItemFailure('DeleteTaskDefinitions', failures, deleted_arns)
