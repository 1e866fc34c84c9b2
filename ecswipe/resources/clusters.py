import logging
from functools import partial
from typing import List

from ecswipe.core.executor import run_batch
from ecswipe.core.outcome import OperationOutcome
from ecswipe.resources.base import ResourceCleaner, require_field
from ecswipe.resources.listing import (
    ClusterDescriptor,
    ServiceDescriptor,
    describe_clusters,
    describe_services,
    iter_cluster_arns,
    iter_service_arns,
)


class ClusterCleaner(ResourceCleaner):
    """Deletes every ECS cluster in a region, services first."""

    resource_type = 'ECS Clusters'

    def cleanup(self) -> List[OperationOutcome]:
        region = self.region
        logging.info(f"[{region}] Deleting clusters", extra={'region': region})

        cluster_arns = list(iter_cluster_arns(self.ecs))
        logging.info(f"[{region}] Found {len(cluster_arns)} clusters", extra={'region': region})
        if not cluster_arns:
            return []

        clusters = describe_clusters(self.ecs, cluster_arns, region)
        outcomes = run_batch(
            ((c.name, partial(self.teardown_cluster, c)) for c in clusters),
            'Delete cluster',
            region,
        )
        self._record_outcomes(outcomes)
        return outcomes

    def teardown_cluster(self, cluster: ClusterDescriptor):
        """Drain and delete each service of ``cluster``, then the cluster itself.

        Services are handled one at a time. The first failure stops the
        teardown of this cluster and propagates to the batch executor, which
        leaves the cluster in place (scaled down where that already happened).
        """
        region = self.region
        logging.info(f"[{region}] Deleting cluster: {cluster.name}",
                     extra={'region': region, 'resource_id': cluster.arn})

        service_arns = list(iter_service_arns(self.ecs, cluster.name))
        logging.info(f"[{region}] Cluster {cluster.name} has {len(service_arns)} services")
        for service in describe_services(self.ecs, cluster.name, service_arns):
            self.delete_service(cluster.name, service)

        if self.config.dry_run:
            logging.info(f"[Dry-Run] Would delete cluster {cluster.name} ({region})")
            return

        response = self.ecs.delete_cluster(cluster=cluster.name)
        name = require_field(response, 'DeleteCluster', 'cluster', 'clusterName')
        logging.info(f"[{region}] Cluster {name} deleted",
                     extra={'region': region, 'resource_id': cluster.arn, 'action': 'delete_cluster'})

    def delete_service(self, cluster_name: str, service: ServiceDescriptor):
        region = self.region
        # Unknown desired count is treated as running
        needs_drain = service.desired_count != 0

        if self.config.dry_run:
            if needs_drain:
                logging.info(f"[Dry-Run] Would scale service {service.name} in {cluster_name} to 0")
            logging.info(f"[Dry-Run] Would delete service {service.name} in {cluster_name}")
            return

        if needs_drain:
            response = self.ecs.update_service(
                cluster=cluster_name, service=service.arn, desiredCount=0
            )
            name = require_field(response, 'UpdateService', 'service', 'serviceName')
            logging.info(f"[{region}] Service {name} in {cluster_name} scaled to 0",
                         extra={'region': region, 'resource_id': service.arn,
                                'action': 'update_service'})

        response = self.ecs.delete_service(cluster=cluster_name, service=service.arn)
        name = require_field(response, 'DeleteService', 'service', 'serviceName')
        logging.info(f"[{region}] Service {name} in {cluster_name} deleted",
                     extra={'region': region, 'resource_id': service.arn,
                            'action': 'delete_service'})
