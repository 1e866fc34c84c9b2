import logging
from typing import Callable, List, Optional

from ecswipe.client import ClientProvider
from ecswipe.core.config import Config, load_regions
from ecswipe.core.logging import timed
from ecswipe.operations import Action, Operation, Scope
from ecswipe.resources.clusters import ClusterCleaner
from ecswipe.resources.task_definitions import (
    InactiveTaskDefinitionCleaner,
    TaskDefinitionCleaner,
)
from ecswipe.resources.base import record_result

CLEANERS = {
    Action.DELETE_CLUSTERS: ClusterCleaner,
    Action.DEREGISTER_TASK_DEFINITIONS: TaskDefinitionCleaner,
    Action.DELETE_INACTIVE_TASK_DEFINITIONS: InactiveTaskDefinitionCleaner,
}


class ECSCleaner:
    def __init__(self, config: Config, provider: ClientProvider,
                 regions_loader: Callable[[str], List[str]] = load_regions):
        self.config = config
        self.provider = provider
        self.regions_loader = regions_loader
        self.report = {}

    def print_report(self):
        print('\n=== ECS Cleanup Report ===')
        if not self.report:
            print('\nNothing deleted' + (' (dry run)' if self.config.dry_run else ''))
        for resource_type, results in self.report.items():
            print(f"\nResource: {resource_type}")
            print('  Deleted:')
            if results['deleted']:
                for item in results['deleted']:
                    print(f"    - {item}")
            else:
                print('    None')
            print('  Failed:')
            if results['failed']:
                for item in results['failed']:
                    print(f"    - {item}")
            else:
                print('    None')

    @timed
    def cleanup_region(self, region: str, ecs, action: Action):
        """Run one action's full pipeline against one region.

        Listing and describe errors propagate; per-resource failures are
        handled inside the cleaner's batch.
        """
        cleaner = CLEANERS[action](ecs, region, self.config, self.report)
        return cleaner.cleanup()

    def cleanup_all_regions(self, action: Action) -> List[str]:
        """Run ``action`` in every region of the regions file, one region at a time.

        Returns the regions whose pipeline failed.
        """
        regions = self.regions_loader(self.config.regions_file)
        logging.info(f"Cleaning regions: {regions}")
        clients = self.provider.clients_for(regions)

        failed = []
        for region, ecs in clients:
            try:
                self.cleanup_region(region, ecs, action)
                logging.info(f"Completed region {region}", extra={'region': region})
            except Exception as ex:
                logging.error(f"Region {region} encountered fatal error: {ex}",
                              extra={'region': region, 'action': action.value})
                record_result(self.report, 'Region Errors', region, False, str(ex))
                failed.append(region)
        return failed

    def run(self, operation: Operation, region: Optional[str] = None) -> List[str]:
        """Dispatch ``operation`` and return the regions that failed.

        In single-region scope a pipeline error is raised to the caller.
        """
        if self.config.dry_run:
            logging.info("Running in dry-run mode - no resources will be deleted")

        if operation.scope is Scope.ALL_REGIONS:
            failed = self.cleanup_all_regions(operation.action)
        else:
            region = region or self.provider.default_region
            self.cleanup_region(region, self.provider.client(region), operation.action)
            failed = []

        logging.info(f'=== {operation.name} complete ===')
        self.print_report()
        return failed
