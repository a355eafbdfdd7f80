"""
PDF report generator for client consent form submissions.
"""
import io
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, List, Optional
from urllib.parse import urlparse

import requests
from reportlab.lib.pagesizes import A4, letter
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfgen import canvas

from ..models.core import Submission
from ..processors.consent_fields import UNKNOWN_COMPANY, get_company_name, order_consent_fields
from ..utils.filenames import safe_file_stem
from ..utils.logging import ExportLogger


logger = logging.getLogger(__name__)

PAGE_SIZES = {"A4": A4, "letter": letter}

SIGNATURE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".gif")
SIGNATURE_PATH = "wp-content/uploads/gravity_forms/sig"
SIGNATURE_UNAVAILABLE = "[Signature image unavailable]"
AGREED_VALUE = "Agreed"
EMPTY_VALUE = "—"

# Layout, in millimetres from the top-left corner of the page
LEFT_MARGIN = 20
RIGHT_EDGE = 190
TOP_MARGIN = 20
BOTTOM_GAP = 27
CONTENT_START = 45
TEXT_WIDTH = 150
LINE_HEIGHT = 6
FIELD_SPACING = 4
SHORT_LINE_ADVANCE = 8
SIGNATURE_WIDTH = 80
SIGNATURE_HEIGHT = 30
SIGNATURE_ADVANCE = 36
SIGNATURE_BLOCK = 40

FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
FONT_SIZE = 10
TITLE_FONT_SIZE = 16


def is_signature_value(value: Optional[str]) -> bool:
    """True when a value is a bare image filename with no URL scheme."""
    if not value:
        return False
    text = value.strip()
    if "/" in text or "\\" in text or urlparse(text).scheme:
        return False
    return text.lower().endswith(SIGNATURE_EXTENSIONS)


def build_signature_url(base_url: Optional[str], filename: str, signature_path: str = SIGNATURE_PATH) -> Optional[str]:
    if not base_url:
        return None
    return f"{base_url.rstrip('/')}/{signature_path.strip('/')}/{filename.strip()}"


def consent_pdf_filename(company_name: str) -> str:
    slug = safe_file_stem(re.sub(r"\s+", "-", company_name), UNKNOWN_COMPANY)
    return f"consent-form-{slug}.pdf"


class SignatureFetcher:
    """Downloads signature images and turns them into embeddable images."""

    def __init__(self, timeout: float = 10.0, session: Optional[requests.Session] = None):
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch(self, url: str) -> ImageReader:
        """
        Fetch an image.

        Raises:
            requests.RequestException: If the download fails
            ValueError: If the body is not a readable image
        """
        response = self.session.get(url, timeout=self.timeout)
        response.raise_for_status()

        try:
            image = ImageReader(io.BytesIO(response.content))
            image.getSize()
        except Exception as e:
            raise ValueError(f"Not a readable image: {e}") from e
        return image


@dataclass
class ConsentPDFReport:
    """Result of rendering one consent submission."""
    filename: str
    company_name: str
    page_count: int = 0
    fields_rendered: int = 0
    signatures_embedded: int = 0
    missing_signatures: List[str] = field(default_factory=list)
    path: Optional[Path] = None


class _PageCursor:
    """Vertical position on the current page, measured from the top in mm."""

    def __init__(self, pdf: canvas.Canvas, page_height: float):
        self.pdf = pdf
        self.page_height = page_height
        self.bottom = page_height / mm - BOTTOM_GAP
        self.y = CONTENT_START

    def pdf_y(self, y: Optional[float] = None) -> float:
        return self.page_height - (self.y if y is None else y) * mm

    def new_page(self) -> None:
        self.pdf.showPage()
        self.y = TOP_MARGIN

    def ensure_room(self, height: float) -> None:
        if self.y + height > self.bottom:
            self.new_page()


class ConsentPDFGenerator:
    """
    Renders a consent form submission into a paginated PDF.

    Fields are emitted in canonical order with a single vertical cursor.
    Signature images are fetched one field at a time, in field order; a failed
    fetch renders a placeholder line and the report always completes.
    """

    def __init__(
        self,
        fetcher: Optional[SignatureFetcher] = None,
        report_title: str = "Client Consent Form",
        signature_path: str = SIGNATURE_PATH,
        page_size: str = "A4",
        compress: bool = True,
        export_logger: Optional[ExportLogger] = None
    ):
        """
        Initialize the PDF generator.

        Args:
            fetcher: Signature image fetcher (default: requests-based)
            report_title: Title prefix printed before the company name
            signature_path: Upload path of signatures below the WordPress URL
            page_size: 'A4' or 'letter'
            compress: Compress page streams
            export_logger: Optional tracker for fetch errors and signature counts
        """
        if page_size not in PAGE_SIZES:
            raise ValueError(f"Unsupported page size: {page_size}")

        self.fetcher = fetcher or SignatureFetcher()
        self.report_title = report_title
        self.signature_path = signature_path
        self.page_size = PAGE_SIZES[page_size]
        self.compress = compress
        self.export_logger = export_logger

    def generate(
        self,
        submission: Submission,
        wordpress_url: Optional[str] = None,
        output_dir: str = "output"
    ) -> ConsentPDFReport:
        """
        Render a consent submission to ``<output_dir>/consent-form-<company>.pdf``.

        Args:
            submission: The consent form submission
            wordpress_url: Owning client's site URL, used to resolve signatures
            output_dir: Directory for the PDF; created if missing

        Returns:
            ConsentPDFReport describing the written file
        """
        output_path = Path(output_dir)
        output_path.mkdir(parents=True, exist_ok=True)

        company_name = get_company_name(submission.submission_data)
        file_path = output_path / consent_pdf_filename(company_name)

        buffer = io.BytesIO()
        report = self.render(submission, buffer, wordpress_url)
        file_path.write_bytes(buffer.getvalue())

        report.path = file_path
        logger.info(f"Consent PDF written to {file_path} ({report.page_count} pages)")
        return report

    def render(
        self,
        submission: Submission,
        stream: BinaryIO,
        wordpress_url: Optional[str] = None
    ) -> ConsentPDFReport:
        """
        Render a consent submission into a binary stream.

        Args:
            submission: The consent form submission
            stream: Writable binary stream receiving the PDF
            wordpress_url: Owning client's site URL, used to resolve signatures

        Returns:
            ConsentPDFReport; ``path`` is left unset
        """
        base_url = wordpress_url or submission.wordpress_url
        company_name = get_company_name(submission.submission_data)
        report = ConsentPDFReport(filename=consent_pdf_filename(company_name), company_name=company_name)

        pdf = canvas.Canvas(stream, pagesize=self.page_size, pageCompression=1 if self.compress else 0)
        pdf.setTitle(f"{self.report_title} - {company_name}")
        cursor = _PageCursor(pdf, self.page_size[1])

        self._draw_header(pdf, cursor, submission, company_name)

        for label, value in order_consent_fields(submission.submission_data):
            self._draw_field(pdf, cursor, report, label, value, base_url)
            report.fields_rendered += 1

        report.page_count = pdf.getPageNumber()
        pdf.save()

        if report.missing_signatures:
            logger.warning(
                f"Consent PDF for {company_name} rendered without "
                f"{len(report.missing_signatures)} signature image(s)"
            )
        return report

    def _draw_header(self, pdf: canvas.Canvas, cursor: _PageCursor, submission: Submission, company_name: str) -> None:
        pdf.setFont(FONT_BOLD, TITLE_FONT_SIZE)
        pdf.drawString(LEFT_MARGIN * mm, cursor.pdf_y(20), f"{self.report_title} - {company_name}")

        pdf.setLineWidth(0.5)
        pdf.line(LEFT_MARGIN * mm, cursor.pdf_y(25), RIGHT_EDGE * mm, cursor.pdf_y(25))

        pdf.setFont(FONT, FONT_SIZE)
        submitted = submission.submitted_at.strftime("%Y-%m-%d %H:%M:%S")
        pdf.drawString(LEFT_MARGIN * mm, cursor.pdf_y(33), f"Submitted: {submitted}")

    def _draw_field(
        self,
        pdf: canvas.Canvas,
        cursor: _PageCursor,
        report: ConsentPDFReport,
        label: str,
        value: Optional[str],
        base_url: Optional[str]
    ) -> None:
        text = str(value or "")
        is_signature = is_signature_value(text)
        label_lines = simpleSplit(f"{label}:", FONT_BOLD, FONT_SIZE, TEXT_WIDTH * mm)

        # Keep the label on the same page as the first line of its value
        if is_signature or text == AGREED_VALUE:
            first_value_line = SHORT_LINE_ADVANCE
        else:
            first_value_line = LINE_HEIGHT
        cursor.ensure_room(len(label_lines) * LINE_HEIGHT + first_value_line)

        pdf.setFont(FONT_BOLD, FONT_SIZE)
        for line in label_lines:
            if cursor.y > cursor.bottom:
                cursor.new_page()
                pdf.setFont(FONT_BOLD, FONT_SIZE)
            pdf.drawString(LEFT_MARGIN * mm, cursor.pdf_y(), line)
            cursor.y += LINE_HEIGHT

        pdf.setFont(FONT, FONT_SIZE)

        if is_signature:
            image = self._load_signature(base_url, text.strip())
            if image is not None:
                cursor.ensure_room(SIGNATURE_BLOCK)
                pdf.drawImage(
                    image,
                    LEFT_MARGIN * mm,
                    cursor.pdf_y(cursor.y + SIGNATURE_HEIGHT),
                    width=SIGNATURE_WIDTH * mm,
                    height=SIGNATURE_HEIGHT * mm,
                    preserveAspectRatio=True,
                    mask="auto"
                )
                cursor.y += SIGNATURE_ADVANCE
                report.signatures_embedded += 1
            else:
                pdf.drawString(LEFT_MARGIN * mm, cursor.pdf_y(), SIGNATURE_UNAVAILABLE)
                cursor.y += SHORT_LINE_ADVANCE
                report.missing_signatures.append(label)

            if self.export_logger:
                self.export_logger.record_signature(image is not None)

        elif text == AGREED_VALUE:
            # ZapfDingbats "4" is a check mark
            pdf.setFont("ZapfDingbats", FONT_SIZE)
            pdf.drawString(LEFT_MARGIN * mm, cursor.pdf_y(), "4")
            pdf.setFont(FONT, FONT_SIZE)
            pdf.drawString((LEFT_MARGIN + 5) * mm, cursor.pdf_y(), AGREED_VALUE)
            cursor.y += SHORT_LINE_ADVANCE

        else:
            lines = simpleSplit(text or EMPTY_VALUE, FONT, FONT_SIZE, TEXT_WIDTH * mm) or [EMPTY_VALUE]
            for line in lines:
                if cursor.y > cursor.bottom:
                    cursor.new_page()
                    pdf.setFont(FONT, FONT_SIZE)
                pdf.drawString(LEFT_MARGIN * mm, cursor.pdf_y(), line)
                cursor.y += LINE_HEIGHT
            cursor.y += FIELD_SPACING

    def _load_signature(self, base_url: Optional[str], filename: str) -> Optional[ImageReader]:
        """Fetch one signature image; None when unavailable. Never raises."""
        url = build_signature_url(base_url, filename, self.signature_path)
        if url is None:
            logger.info(f"No WordPress URL for signature {filename}; rendering placeholder")
            return None

        try:
            return self.fetcher.fetch(url)
        except Exception as e:
            logger.warning(f"Failed to fetch signature image {url}: {e}")
            if self.export_logger:
                self.export_logger.log_fetch_error("signature", url, e)
            return None
