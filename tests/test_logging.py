"""
Tests for logging and error tracking utilities.
"""
import json
import tempfile

from submission_exporter.utils.logging import (
    ErrorSeverity, ExportLogger, ExportStats, FetchError
)


class TestFetchError:
    """Test cases for FetchError."""

    def test_to_dict(self):
        error = FetchError(
            source="signature",
            url="https://acme.example.com/sig.png",
            error_type="ConnectionError",
            error_message="refused",
            severity=ErrorSeverity.LOW
        )
        data = error.to_dict()

        assert data["source"] == "signature"
        assert data["severity"] == "low"
        assert "timestamp" in data


class TestExportLogger:
    """Test cases for ExportLogger."""

    def test_log_fetch_error_severity(self):
        export_logger = ExportLogger()
        export_logger.log_fetch_error("signature", "u1", ConnectionError("a"))
        export_logger.log_fetch_error("sync", "u2", RuntimeError("b"))

        assert export_logger.errors[0].severity == ErrorSeverity.LOW
        assert export_logger.errors[1].severity == ErrorSeverity.HIGH
        assert export_logger.errors[1].error_type == "RuntimeError"

    def test_summary(self):
        export_logger = ExportLogger()
        export_logger.log_fetch_error("signature", "u1", ConnectionError("a"))
        export_logger.log_fetch_error("signature", "u2", ConnectionError("b"))

        summary = export_logger.get_summary()
        assert summary["total_errors"] == 2
        assert summary["errors_by_source"] == {"signature": 2}

    def test_record_signature(self):
        export_logger = ExportLogger()
        export_logger.record_signature(True)
        export_logger.record_signature(False)
        export_logger.record_signature(False)

        assert export_logger.stats.signatures_embedded == 1
        assert export_logger.stats.missing_signatures == 2

    def test_write_error_report(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            export_logger = ExportLogger(log_dir=temp_dir)
            export_logger.log_fetch_error("submissions", "u", ValueError("x"))

            report_file = export_logger.write_error_report()

            data = json.loads(report_file.read_text())
            assert data["summary"]["total_errors"] == 1
            assert data["stats"]["end_time"] is not None

    def test_write_error_report_without_log_dir(self):
        assert ExportLogger().write_error_report() is None


class TestExportStats:
    """Test cases for ExportStats."""

    def test_to_dict_without_times(self):
        data = ExportStats(csv_exports=2).to_dict()
        assert data["csv_exports"] == 2
