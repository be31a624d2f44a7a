import pathlib
import site

import pytest
from recordset.config.type_mapping import TypeMapping

HERE = pathlib.Path(pathlib.Path(__file__).resolve()).parent
site.addsitedir(HERE)


@pytest.fixture(autouse=True)
def reset_type_mapping():
    """Reset the shared type mapping before and after each test to ensure test isolation."""
    TypeMapping.reset_instance()
    yield
    TypeMapping.reset_instance()


pytest_plugins = [
    'tests.fixtures.mocks',
    'tests.fixtures.sqlite',
]
