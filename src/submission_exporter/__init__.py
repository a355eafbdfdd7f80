"""
Submission Exporter - review and export form submissions collected from
client WordPress sites.
"""

__version__ = "0.1.0"
