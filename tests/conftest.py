import pytest
from unittest.mock import MagicMock
from botocore.exceptions import ClientError
from ecswipe.core.config import Config


@pytest.fixture
def config():
    return Config()


@pytest.fixture
def dry_config():
    return Config(dry_run=True)


@pytest.fixture
def make_ecs():
    """Build a MagicMock ECS client whose paginators return canned pages.

    ``pages`` maps paginator names to a list of pages, or to a callable that
    receives the paginate() kwargs and returns the pages.
    """
    def factory(pages=None):
        pages = pages or {}
        ecs = MagicMock()

        def get_paginator(name):
            paginator = MagicMock()
            value = pages.get(name, [{}])
            if callable(value):
                paginator.paginate.side_effect = value
            else:
                paginator.paginate.return_value = value
            return paginator

        ecs.get_paginator.side_effect = get_paginator
        return ecs
    return factory


@pytest.fixture
def client_error():
    def factory(code='ClientException', operation='Test'):
        return ClientError({'Error': {'Code': code, 'Message': f'{code} raised'}}, operation)
    return factory
