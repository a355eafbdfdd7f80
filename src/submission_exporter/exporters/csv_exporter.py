"""
CSV exporter for form submissions.
"""
import csv
import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from ..models.core import Submission, SubmissionSchema
from ..processors.name_splitter import split_name
from ..processors.schema_inferencer import COMPOUND_NAME_KEY
from ..utils.filenames import safe_file_stem


logger = logging.getLogger(__name__)

DEFAULT_FILE_STEM = "submissions"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class CSVExport:
    """A rendered CSV artifact."""
    filename: str
    content: str
    row_count: int

    def write_to(self, output_dir: str) -> Path:
        """
        Write the CSV as UTF-8 text.

        Args:
            output_dir: Directory to write into; created if missing

        Returns:
            Path of the written file
        """
        output_path = Path(output_dir)
        output_path.mkdir(parents=True, exist_ok=True)

        file_path = output_path / self.filename
        with open(file_path, 'w', encoding='utf-8', newline='') as f:
            f.write(self.content)

        logger.info(f"Wrote {self.row_count} rows to {file_path}")
        return file_path


class CSVExporter:
    """
    Serializes submissions into CSV text using an inferred column schema.

    Every field, header included, is double-quoted and embedded quotes are
    doubled. The row-action column of the on-screen table is not exported.
    """

    def __init__(self, timestamp_format: str = TIMESTAMP_FORMAT):
        self.timestamp_format = timestamp_format
        self.exported_count = 0

    def export(
        self,
        submissions: Sequence[Submission],
        schema: SubmissionSchema,
        file_stem: Optional[str] = None
    ) -> Optional[CSVExport]:
        """
        Render submissions to CSV.

        Args:
            submissions: Submissions to export, already filtered
            schema: Schema inferred over the full submission list
            file_stem: File name without extension; defaults to 'submissions'.
                Path separators and other unsafe characters become hyphens

        Returns:
            The CSVExport, or None when there is nothing to export
        """
        if not submissions:
            logger.info("No submissions to export")
            self.exported_count = 0
            return None

        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")

        writer.writerow(self.build_header(schema))
        for sub in submissions:
            writer.writerow(self.build_row(sub, schema))

        # No trailing newline after the last row
        content = buffer.getvalue().rstrip("\n")
        self.exported_count = len(submissions)

        filename = f"{safe_file_stem(file_stem, DEFAULT_FILE_STEM)}.csv"
        logger.info(f"Rendered {self.exported_count} submissions to {filename}")

        return CSVExport(filename=filename, content=content, row_count=self.exported_count)

    def build_header(self, schema: SubmissionSchema) -> List[str]:
        header = []
        if schema.has_compound_name:
            header.extend(["First Name", "Last Name"])
        header.extend(schema.data_keys)
        header.append("Submitted")
        return header

    def build_row(self, submission: Submission, schema: SubmissionSchema) -> List[str]:
        row = []
        if schema.has_compound_name:
            name = split_name(submission.get(COMPOUND_NAME_KEY))
            row.extend([name.first, name.last])

        for key in schema.data_keys:
            value = submission.get(key)
            row.append("" if value is None else str(value))

        row.append(submission.submitted_at.strftime(self.timestamp_format))
        return row
