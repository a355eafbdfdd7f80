"""
Export components for CSV and consent PDF generation.
"""

from .csv_exporter import CSVExporter, CSVExport
from .consent_pdf_generator import ConsentPDFGenerator, ConsentPDFReport, SignatureFetcher

__all__ = ['CSVExporter', 'CSVExport', 'ConsentPDFGenerator', 'ConsentPDFReport', 'SignatureFetcher']
