"""Shared pytest fixtures and configuration for all tests."""

import logging

import pytest

from prettier_ls.observability.logging import ROOT_LOGGER_NAME


@pytest.fixture(autouse=True)
def package_log_level():
    """Let caplog see info records from the package loggers."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    previous = logger.level
    logger.setLevel(logging.DEBUG)
    yield logger
    logger.setLevel(previous)


@pytest.fixture
def workspace_tree(tmp_path):
    """A workspace folder with a project-local Prettier install."""
    root = tmp_path / "project"
    module = root / "node_modules" / "prettier"
    module.mkdir(parents=True)
    (module / "package.json").write_text('{"name": "prettier", "version": "3.3.3"}', encoding="utf-8")
    (root / "src").mkdir()
    (root / "src" / "index.js").write_text("const a = 1\n", encoding="utf-8")
    return root
