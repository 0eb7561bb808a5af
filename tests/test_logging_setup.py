import logging

import pytest

from kml_to_fgfp import logging_setup


@pytest.fixture
def fresh_root(monkeypatch):
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    monkeypatch.setattr(logging_setup, "_INITIALIZED", False)
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_level_from_argument(fresh_root):
    logging_setup.setup_logging("debug")
    assert fresh_root.level == logging.DEBUG


def test_level_from_env(fresh_root, monkeypatch):
    monkeypatch.setenv(logging_setup.LEVEL_ENV, "ERROR")
    logging_setup.setup_logging()
    assert fresh_root.level == logging.ERROR


def test_unknown_level_falls_back_to_warning(fresh_root, monkeypatch):
    monkeypatch.delenv(logging_setup.LEVEL_ENV, raising=False)
    logging_setup.setup_logging("chatty")
    assert fresh_root.level == logging.WARNING


def test_handler_added_once(fresh_root):
    before = len(fresh_root.handlers)
    logging_setup.setup_logging()
    logging_setup.setup_logging()
    assert len(fresh_root.handlers) == before + 1
