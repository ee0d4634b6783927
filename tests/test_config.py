from __future__ import annotations

import logging
import os

from workshop import config


def test_configure_logging_adds_one_handler(monkeypatch) -> None:
    logger = logging.getLogger("workshop")
    monkeypatch.setattr(logger, "handlers", [])
    monkeypatch.setattr(logger, "level", logger.level)

    config.configure_logging("DEBUG")
    config.configure_logging("WARNING")

    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG


def test_default_directories_sit_under_repo_root() -> None:
    if "WORKSHOP_DATA_DIR" not in os.environ:
        assert config.DATA_DIR == os.path.join(config.ROOT_DIR, "data")
    assert os.path.isfile(os.path.join(config.ROOT_DIR, "app.py"))
