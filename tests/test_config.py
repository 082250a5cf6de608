import logging
import os
from pathlib import Path

from kappa import config


def test_prelude_paths_default_empty(monkeypatch):
    monkeypatch.delenv("KAPPA_PRELUDE_PATH", raising=False)
    assert config.get_prelude_paths() == []


def test_prelude_paths_split_on_path_separator(monkeypatch):
    monkeypatch.setenv("KAPPA_PRELUDE_PATH", os.pathsep.join(["a.kp", " b.kp ", ""]))
    assert config.get_prelude_paths() == [Path("a.kp"), Path("b.kp")]


def test_log_level(monkeypatch):
    monkeypatch.delenv("KAPPA_LOG_LEVEL", raising=False)
    assert config.get_log_level() == logging.WARNING
    monkeypatch.setenv("KAPPA_LOG_LEVEL", "debug")
    assert config.get_log_level() == logging.DEBUG
    monkeypatch.setenv("KAPPA_LOG_LEVEL", "15")
    assert config.get_log_level() == 15
    monkeypatch.setenv("KAPPA_LOG_LEVEL", "chatty")
    assert config.get_log_level() == logging.WARNING


def test_recursion_limit(monkeypatch):
    monkeypatch.delenv("KAPPA_RECURSION_LIMIT", raising=False)
    assert config.get_recursion_limit() is None
    monkeypatch.setenv("KAPPA_RECURSION_LIMIT", "5000")
    assert config.get_recursion_limit() == 5000
    monkeypatch.setenv("KAPPA_RECURSION_LIMIT", "lots")
    assert config.get_recursion_limit() is None


def test_configure_logging_sets_package_level(monkeypatch):
    logger = logging.getLogger("kappa")
    previous = logger.level
    try:
        config.configure_logging(logging.DEBUG)
        assert logger.level == logging.DEBUG
        monkeypatch.setenv("KAPPA_LOG_LEVEL", "ERROR")
        config.configure_logging()
        assert logger.level == logging.ERROR
    finally:
        logger.setLevel(previous)
