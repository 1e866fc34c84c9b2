import pytest
from unittest.mock import MagicMock
from botocore.exceptions import ClientError
from ecswipe import cli
from ecswipe.core.config import Credentials
from ecswipe.operations import parse_operation

AWS_VARS = ('AWS_ACCESS_KEY_ID', 'AWS_SECRET_ACCESS_KEY', 'AWS_REGION', 'AWS_SESSION_TOKEN')


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    monkeypatch.setattr(cli, 'setup_logging', lambda *args, **kwargs: None)


@pytest.fixture
def cleaner_cls(monkeypatch):
    cls = MagicMock()
    cls.return_value.run.return_value = []
    monkeypatch.setattr(cli, 'ECSCleaner', cls)
    monkeypatch.setattr(cli, 'ClientProvider', MagicMock())
    monkeypatch.setattr(cli, 'load_credentials',
                        lambda env_file: Credentials('AKIATEST', 'secret', 'us-east-1'))
    return cls


def test_default_operation(cleaner_cls):
    assert cli.main([]) == 0
    cleaner_cls.return_value.run.assert_called_once_with(parse_operation('delete-clusters'), None)


def test_operation_and_overrides(cleaner_cls):
    code = cli.main(['-o', 'delete-task-definitions-all-regions', '--regions-file', 'r.txt',
                     '--dry-run'])
    assert code == 0
    config = cleaner_cls.call_args.args[0]
    assert config.regions_file == 'r.txt'
    assert config.dry_run is True
    cleaner_cls.return_value.run.assert_called_once_with(
        parse_operation('delete-task-definitions-all-regions'), None)


def test_region_override(cleaner_cls):
    cli.main(['--region', 'eu-west-1'])
    cleaner_cls.return_value.run.assert_called_once_with(parse_operation('delete-clusters'), 'eu-west-1')


def test_unknown_operation_rejected():
    with pytest.raises(SystemExit) as excinfo:
        cli.main(['--operation', 'delete-everything'])
    assert excinfo.value.code == 2


def test_missing_credentials_exit_non_zero(monkeypatch, tmp_path):
    for name in AWS_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(cli, 'ECSCleaner', MagicMock())

    assert cli.main(['--env-file', str(tmp_path / 'missing.env')]) == 1
    cli.ECSCleaner.assert_not_called()


def test_missing_config_file_exit_non_zero(tmp_path):
    assert cli.main(['--config', str(tmp_path / 'nope.yaml')]) == 1


def test_pipeline_failure_exit_non_zero(cleaner_cls):
    cleaner_cls.return_value.run.side_effect = ClientError(
        {'Error': {'Code': 'AccessDeniedException', 'Message': 'denied'}}, 'ListClusters')
    assert cli.main([]) == 1


def test_failed_region_exit_non_zero(cleaner_cls):
    cleaner_cls.return_value.run.return_value = ['eu-west-1']
    assert cli.main(['-o', 'delete-clusters-all-regions']) == 1


def test_config_file_operation(cleaner_cls, tmp_path):
    path = tmp_path / 'ecswipe.yaml'
    path.write_text('operation: deregister-task-definitions\n')
    assert cli.main(['-c', str(path)]) == 0
    cleaner_cls.return_value.run.assert_called_once_with(
        parse_operation('deregister-task-definitions'), None)


def test_module_entry_point(monkeypatch):
    import runpy
    monkeypatch.setattr('sys.argv', ['ecswipe', '--help'])
    with pytest.raises(SystemExit) as excinfo:
        runpy.run_module('ecswipe', run_name='__main__')
    assert excinfo.value.code == 0
