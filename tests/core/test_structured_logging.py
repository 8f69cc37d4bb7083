"""Tests for structured logging setup."""

import json

import pytest
import structlog

from yamlsplit.core.logging import configure_default_logging, log, setup_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()
    configure_default_logging()


class TestSetupLogging:
    """Test renderer selection and level filtering."""

    def test_json_lines_on_stderr(self, capsys):
        setup_logging("json", "info")
        log.info("split.complete", documents=2)
        captured = capsys.readouterr()
        assert captured.out == ""
        record = json.loads(captured.err.strip())
        assert record["event"] == "split.complete"
        assert record["level"] == "info"
        assert record["documents"] == 2
        assert "timestamp" in record

    def test_plain_format(self, capsys):
        setup_logging("plain", "info")
        log.info("split.complete", documents=2)
        err = capsys.readouterr().err
        assert "split.complete" in err
        assert "documents=2" in err

    def test_level_filtering(self, capsys):
        setup_logging("json", "warning")
        log.info("chunker.document", index=0)
        log.debug("transcoder.detected", encoding="utf-8")
        log.error("split.failed", error="boom")
        lines = capsys.readouterr().err.strip().splitlines()
        assert [json.loads(line)["event"] for line in lines] == ["split.failed"]

    def test_auto_uses_json_in_ci(self, capsys, monkeypatch):
        monkeypatch.setenv("CI", "true")
        setup_logging("auto", "info")
        log.info("split.complete", documents=0)
        assert json.loads(capsys.readouterr().err)["documents"] == 0


class TestDefaultLogging:
    """Test the configuration used when the package is a library."""

    def test_library_use_is_quiet(self, capsys):
        structlog.reset_defaults()
        configure_default_logging()
        log.debug("transcoder.detected", encoding="utf-8")
        log.info("chunker.document", index=0)
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_library_use_reports_warnings_on_stderr(self, capsys):
        structlog.reset_defaults()
        configure_default_logging()
        log.warning("split.failed", error="boom")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "split.failed" in captured.err

    def test_existing_configuration_is_kept(self, capsys):
        setup_logging("json", "debug")
        configure_default_logging()
        log.debug("transcoder.detected", encoding="utf-8")
        assert json.loads(capsys.readouterr().err)["encoding"] == "utf-8"
