"""
Export service tying the dashboard API to the view and export components.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .config import ExporterConfig
from .exporters.consent_pdf_generator import ConsentPDFGenerator, ConsentPDFReport, SignatureFetcher
from .exporters.csv_exporter import CSVExporter
from .loaders.api_client import DashboardAPIClient
from .models.core import Form, Submission, SubmissionSchema, SyncResult
from .processors.date_filter import DateInput, filter_by_date_range
from .processors.schema_inferencer import infer_schema
from .processors.sync_reducer import SyncResultReducer
from .utils.logging import ExportLogger


@dataclass(frozen=True)
class SubmissionView:
    """Snapshot of a form's submissions: schema over all rows, filtered rows."""
    schema: SubmissionSchema
    submissions: Tuple[Submission, ...]
    filtered: Tuple[Submission, ...]


class SubmissionExportService:
    """
    Coordinates loading, viewing and exporting submissions.

    1. Load submissions for a form from the dashboard API
    2. Infer the column schema over all loaded submissions
    3. Filter by date range
    4. Export to CSV, or render a consent submission to PDF
    """

    def __init__(self, config: ExporterConfig, api_client: Optional[DashboardAPIClient] = None,
                 pdf_generator: Optional[ConsentPDFGenerator] = None):
        """
        Initialize the export service.

        Args:
            config: Exporter configuration
            api_client: Optional API client; built from config when omitted
            pdf_generator: Optional PDF generator; built from config when omitted
        """
        self.config = config
        self.logger = logging.getLogger(__name__)
        self.export_logger = ExportLogger(log_dir=config.log_dir)

        self.api_client = api_client or DashboardAPIClient(
            config.api_url,
            token=config.api_token,
            timeout=config.request_timeout
        )
        self.csv_exporter = CSVExporter()
        self.pdf_generator = pdf_generator or ConsentPDFGenerator(
            fetcher=SignatureFetcher(timeout=config.request_timeout),
            report_title=config.report_title,
            signature_path=config.signature_path,
            page_size=config.page_size,
            export_logger=self.export_logger
        )
        self.sync_reducer = SyncResultReducer(ttl=config.sync_result_ttl)

        self.processing_stats: Dict[str, Any] = {
            "start_time": datetime.now(),
            "submissions_loaded": 0,
            "csv_exports": 0,
            "pdf_exports": 0,
            "missing_signatures": 0,
            "errors": []
        }

    def load_submissions(self, form_id: str) -> List[Submission]:
        """
        Load a form's submissions.

        Raises:
            APIRequestError: If the request fails; recorded in processing_stats
        """
        try:
            submissions = self.api_client.fetch_submissions(form_id)
        except Exception as e:
            self.processing_stats["errors"].append(f"Failed to load submissions: {e}")
            raise

        self.processing_stats["submissions_loaded"] += len(submissions)
        self.export_logger.stats.submissions_loaded += len(submissions)
        return submissions

    def build_view(
        self,
        submissions: List[Submission],
        start_date: DateInput = None,
        end_date: DateInput = None
    ) -> SubmissionView:
        """Infer the schema over all submissions and apply the date filter."""
        schema = infer_schema(submissions)
        filtered = filter_by_date_range(submissions, start_date, end_date)
        self.logger.info(f"View: {len(filtered)} of {len(submissions)} submissions in range")
        return SubmissionView(schema=schema, submissions=tuple(submissions), filtered=filtered)

    def export_csv(
        self,
        form: Form,
        start_date: DateInput = None,
        end_date: DateInput = None,
        output_dir: Optional[str] = None
    ) -> Optional[Path]:
        """
        Export a form's submissions within a date range to CSV.

        Args:
            form: Form to export; its name becomes the file stem
            start_date: First day to include, or None
            end_date: Last day to include, or None
            output_dir: Output directory (default: configured output_dir)

        Returns:
            Path of the CSV file, or None when there was nothing to export
        """
        submissions = self.load_submissions(form.id)
        view = self.build_view(submissions, start_date, end_date)

        export = self.csv_exporter.export(view.filtered, view.schema, file_stem=form.name or None)
        if export is None:
            return None

        path = export.write_to(output_dir or self.config.output_dir)
        self.processing_stats["csv_exports"] += 1
        self.export_logger.stats.csv_exports += 1
        self.export_logger.stats.submissions_exported += export.row_count
        return path

    def load_consent_submissions(self) -> List[Submission]:
        try:
            return self.api_client.fetch_consent_submissions()
        except Exception as e:
            self.processing_stats["errors"].append(f"Failed to load consent form submissions: {e}")
            raise

    def find_consent_submission(self, submission_id: str) -> Optional[Submission]:
        for submission in self.load_consent_submissions():
            if submission.id == str(submission_id):
                return submission
        return None

    def export_consent_pdf(
        self,
        submission: Submission,
        wordpress_url: Optional[str] = None,
        output_dir: Optional[str] = None
    ) -> ConsentPDFReport:
        """
        Render a consent submission to PDF.

        Args:
            submission: Consent form submission
            wordpress_url: Client site URL; defaults to the one on the submission
            output_dir: Output directory (default: configured output_dir)

        Returns:
            ConsentPDFReport for the written file
        """
        report = self.pdf_generator.generate(
            submission,
            wordpress_url=wordpress_url,
            output_dir=output_dir or self.config.output_dir
        )
        self.processing_stats["pdf_exports"] += 1
        self.processing_stats["missing_signatures"] += len(report.missing_signatures)
        self.export_logger.stats.pdf_exports += 1
        return report

    def sync_client(self, client_id: str) -> SyncResult:
        """Trigger a sync; the outcome stays visible on sync_reducer until it expires."""
        result = self.sync_reducer.run(self.api_client.sync_client, client_id)
        if result.is_error:
            self.processing_stats["errors"].append(f"Sync failed: {result.error}")
            self.export_logger.log_fetch_error(
                "sync",
                f"{self.api_client.api_url}/api/sync/client/{client_id}",
                RuntimeError(result.error)
            )
        return result

    def get_processing_stats(self) -> Dict[str, Any]:
        """Processing statistics, with the session duration."""
        stats = self.processing_stats.copy()
        duration = datetime.now() - stats["start_time"]
        stats["duration_seconds"] = duration.total_seconds()
        stats["fetch_errors"] = self.export_logger.get_summary()
        return stats

    def write_error_report(self) -> Optional[Path]:
        """Write the session's fetch errors and stats to the configured log_dir, if any."""
        return self.export_logger.write_error_report()
