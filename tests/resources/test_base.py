from unittest.mock import MagicMock
from ecswipe.resources.base import ResourceCleaner, record_result


class NoopCleaner(ResourceCleaner):
    def cleanup(self):
        return []


def test_record_result_groups_by_resource_type():
    report = {}
    record_result(report, 'ECS Clusters', 'demo (us-east-1)', True)
    record_result(report, 'ECS Clusters', 'bad (us-east-1)', False, 'ClusterContainsServicesException')
    record_result(report, 'Region Errors', 'eu-west-1', False)

    assert report == {
        'ECS Clusters': {
            'deleted': ['demo (us-east-1)'],
            'failed': ['bad (us-east-1) (ClusterContainsServicesException)'],
        },
        'Region Errors': {'deleted': [], 'failed': ['eu-west-1']},
    }


def test_cleaner_records_into_shared_report(config):
    report = {}
    NoopCleaner(MagicMock(), 'us-east-1', config, report)._record_result('ECS Clusters', 'demo', True)
    assert report == {'ECS Clusters': {'deleted': ['demo'], 'failed': []}}


def test_cleaner_records_nothing_on_dry_run(dry_config):
    report = {}
    NoopCleaner(MagicMock(), 'us-east-1', dry_config, report)._record_result('ECS Clusters', 'demo', True)
    assert report == {}
