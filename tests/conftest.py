import pytest

from coaclient.config import Settings


@pytest.fixture
def settings(tmp_path):
    return Settings(storage_dir=tmp_path / ".coursera")
