from __future__ import annotations

import logging

import pytest

from bintree.demo import main


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)


def test_prints_value(root_logger, capsys) -> None:
    assert main() == 0
    assert capsys.readouterr().out == "Under 42 lives 56\n"


def test_log_level_from_env(root_logger, monkeypatch, capsys) -> None:
    monkeypatch.setenv("BINTREE_LOG_LEVEL", "debug")
    assert main() == 0
    assert "Under 42 lives 56" in capsys.readouterr().out

