"""Listing and describe calls that feed the teardown pipelines.

The ``iter_*`` helpers walk every page of the ECS list APIs, so callers see
the complete result even when the API splits it across continuation tokens.
"""
import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence

from ecswipe.core.chunking import (
    DESCRIBE_CLUSTERS_CHUNK_SIZE,
    DESCRIBE_SERVICES_CHUNK_SIZE,
    chunked,
)
from ecswipe.resources.base import require_field

INACTIVE = 'INACTIVE'


@dataclass(frozen=True)
class ClusterDescriptor:
    name: str
    arn: str


@dataclass(frozen=True)
class ServiceDescriptor:
    name: str
    arn: str
    desired_count: Optional[int]


def _paginate(ecs, operation: str, key: str, **kwargs) -> Iterator[str]:
    paginator = ecs.get_paginator(operation)
    for page in paginator.paginate(**kwargs):
        yield from page.get(key, [])


def iter_cluster_arns(ecs) -> Iterator[str]:
    return _paginate(ecs, 'list_clusters', 'clusterArns')


def iter_service_arns(ecs, cluster: str) -> Iterator[str]:
    return _paginate(ecs, 'list_services', 'serviceArns', cluster=cluster)


def iter_task_definition_arns(ecs, status: Optional[str] = None) -> Iterator[str]:
    """Task definition ARNs, optionally limited to ``ACTIVE`` or ``INACTIVE``."""
    kwargs = {'status': status} if status else {}
    return _paginate(ecs, 'list_task_definitions', 'taskDefinitionArns', **kwargs)


def describe_clusters(ecs, arns: Sequence[str], region: Optional[str] = None) -> List[ClusterDescriptor]:
    """Resolve cluster ARNs to names, skipping clusters that are already gone."""
    descriptors = []
    for chunk in chunked(arns, DESCRIBE_CLUSTERS_CHUNK_SIZE):
        response = ecs.describe_clusters(clusters=chunk)
        for failure in response.get('failures', []):
            logging.warning(f"[{region}] Cannot describe cluster {failure.get('arn')}: "
                            f"{failure.get('reason')}")
        for cluster in response.get('clusters', []):
            arn = cluster.get('clusterArn', '?')
            name = cluster.get('clusterName')
            if not name:
                logging.error(f"[{region}] DescribeClusters returned no name for {arn}, skipping",
                              extra={'region': region, 'resource_id': arn})
                continue
            if cluster.get('status') == INACTIVE:
                logging.info(f"[{region}] Cluster {name} is already inactive, skipping")
                continue
            descriptors.append(ClusterDescriptor(name=name, arn=arn))
    return descriptors


def describe_services(ecs, cluster: str, arns: Sequence[str]) -> List[ServiceDescriptor]:
    """Describe services of ``cluster`` in the order their ARNs were given."""
    by_arn = {}
    for chunk in chunked(arns, DESCRIBE_SERVICES_CHUNK_SIZE):
        response = ecs.describe_services(cluster=cluster, services=chunk)
        for failure in response.get('failures', []):
            logging.warning(f"Cannot describe service {failure.get('arn')} in {cluster}: "
                            f"{failure.get('reason')}")
        for service in response.get('services', []):
            arn = require_field(service, 'DescribeServices', 'serviceArn')
            if service.get('status') == INACTIVE:
                continue
            by_arn[arn] = ServiceDescriptor(
                name=require_field(service, 'DescribeServices', 'serviceName'),
                arn=arn,
                desired_count=service.get('desiredCount'),
            )
    return [by_arn[arn] for arn in arns if arn in by_arn]
