import os

import pytest

import chunkfile


@pytest.fixture(autouse=True)
def log_dir(tmp_path, monkeypatch):
    directory = tmp_path / "logs"
    monkeypatch.setattr(chunkfile, "LOG_DIR", str(directory))
    monkeypatch.setattr(chunkfile, "_unwritable_log_dirs", set())
    return directory


@pytest.fixture
def make_file(tmp_path):
    def _make(name, size):
        path = tmp_path / name
        path.write_bytes(os.urandom(size))
        return str(path)
    return _make
