"""
Tests for utils.py and logging_config.py
"""

import logging

import pytest

from table2struct.logging_config import LOGGER_NAME, get_logger, setup_logging
from table2struct.utils import OutputError, resolve_output_dir, write_source_file


def test_resolve_output_dir_defaults_to_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    assert resolve_output_dir(None) == tmp_path.resolve()


def test_resolve_output_dir_rejects_files(tmp_path):
    path = tmp_path / "file.txt"
    path.write_text("x", encoding="utf-8")

    with pytest.raises(OutputError, match="not a directory"):
        resolve_output_dir(path)


def test_write_source_file_overwrites(tmp_path):
    write_source_file(tmp_path, "users.go", "old\n")

    path = write_source_file(tmp_path, "users.go", "new\n")

    assert path == tmp_path / "users.go"
    assert path.read_text(encoding="utf-8") == "new\n"


def test_write_source_file_reports_os_errors(tmp_path):
    with pytest.raises(OutputError, match="Error writing file"):
        write_source_file(tmp_path / "missing", "users.go", "x\n")


def test_get_logger_nests_under_package():
    assert get_logger("table2struct.cli").name == "table2struct.cli"
    assert get_logger("helpers").name == "table2struct.helpers"


@pytest.fixture
def package_logger():
    logger = logging.getLogger(LOGGER_NAME)
    saved = (logger.level, logger.propagate, list(logger.handlers))
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(saved[0])
    logger.propagate = saved[1]
    for handler in saved[2]:
        logger.addHandler(handler)


def test_setup_logging_writes_log_file(tmp_path, package_logger):
    log_file = tmp_path / "run.log"

    setup_logging("INFO", log_file)
    get_logger("tests").info("hello from tests")

    assert "INFO" in log_file.read_text(encoding="utf-8")
    assert "hello from tests" in log_file.read_text(encoding="utf-8")
    assert len(package_logger.handlers) == 2


def test_setup_logging_rejects_unknown_level(package_logger):
    with pytest.raises(ValueError):
        setup_logging("LOUD")
