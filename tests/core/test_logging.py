import json
import logging
import pytest
from ecswipe.core.logging import JSONFormatter, get_run_id, setup_logging, timed


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def make_record(msg, **extra):
    record = logging.LogRecord('ecswipe', logging.ERROR, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_structured_fields():
    record = make_record('Delete cluster failed', region='us-east-1', resource_id='demo')
    entry = json.loads(JSONFormatter().format(record))

    assert entry['level'] == 'ERROR'
    assert entry['message'] == 'Delete cluster failed'
    assert entry['run_id'] == get_run_id()
    assert entry['region'] == 'us-east-1'
    assert entry['resource_id'] == 'demo'
    assert 'action' not in entry


def test_run_id_is_stable():
    assert get_run_id() == get_run_id()
    assert len(get_run_id()) == 8


@pytest.mark.parametrize('verbosity, level', [(0, logging.WARNING), (1, logging.INFO), (2, logging.DEBUG)])
def test_setup_logging_levels(restore_root_logger, verbosity, level):
    setup_logging(verbosity)
    assert restore_root_logger.level == level
    assert len(restore_root_logger.handlers) == 1


def test_setup_logging_json(restore_root_logger):
    setup_logging(1, json_format=True)
    assert isinstance(restore_root_logger.handlers[0].formatter, JSONFormatter)


def test_timed_logs_elapsed(caplog):
    @timed
    def cleanup_region():
        return 'done'

    with caplog.at_level(logging.INFO):
        assert cleanup_region() == 'done'
    assert any('cleanup_region took' in r.getMessage() for r in caplog.records)


def test_timed_tags_region(caplog):
    @timed
    def cleanup_region(region, action):
        return action

    with caplog.at_level(logging.INFO):
        cleanup_region('eu-west-1', action='delete-clusters')

    record = next(r for r in caplog.records if 'took' in r.getMessage())
    assert record.getMessage().startswith('[eu-west-1] cleanup_region took')
    assert record.region == 'eu-west-1'
