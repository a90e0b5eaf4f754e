"""Tests for logging helpers."""

import logging

import pytest

from narrato.analyzers.project import analyze
from narrato.logging import log_operation, progress_bar
from narrato.models.analysis import SourceFile


class TestLogOperation:
    """Tests for log_operation."""

    def test_records_elapsed_time(self) -> None:
        """Should fill in elapsed time once the block exits."""
        with log_operation("noop") as timing:
            sum(range(1000))

        assert timing.elapsed >= 0.0
        assert timing.elapsed_ms == pytest.approx(timing.elapsed * 1000)

    def test_logs_failure_and_reraises(self, caplog: pytest.LogCaptureFixture) -> None:
        """Should log failures at ERROR and re-raise them."""
        with caplog.at_level(logging.DEBUG, logger="narrato"):
            with pytest.raises(RuntimeError):
                with log_operation("explode"):
                    raise RuntimeError("boom")

        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert "explode failed" in errors[0].getMessage()

    def test_custom_level(self, caplog: pytest.LogCaptureFixture) -> None:
        """Should log start and completion at the requested level."""
        with caplog.at_level(logging.INFO, logger="narrato"):
            with log_operation("fetch", {"model": "m"}, level=logging.INFO):
                pass

        messages = [r.getMessage() for r in caplog.records]
        assert any("Starting fetch model=m" in m for m in messages)
        assert any("Completed fetch" in m for m in messages)

    def test_analyze_summary_includes_duration(self, caplog: pytest.LogCaptureFixture) -> None:
        """Should report the analysis duration in the debug summary."""
        with caplog.at_level(logging.DEBUG, logger="narrato"):
            analyze([SourceFile(name="a.py", content="class A:\n")])

        assert any(
            "1 files, 2 lines in" in r.getMessage() and "ms" in r.getMessage()
            for r in caplog.records
        )


class TestProgressBar:
    """Tests for progress_bar."""

    def test_disabled_returns_iterable(self) -> None:
        """Should hand back the iterable unchanged when disabled."""
        items = [1, 2, 3]
        assert progress_bar(items, desc="Items", disable=True) is items
