"""
Processing components for submission views.
"""

from .name_splitter import split_name
from .schema_inferencer import infer_schema
from .date_filter import filter_by_date_range, parse_filter_date
from .consent_fields import CONSENT_FIELD_ORDER, order_consent_fields, get_company_name
from .sync_reducer import SyncResultReducer

__all__ = [
    "split_name",
    "infer_schema",
    "filter_by_date_range",
    "parse_filter_date",
    "CONSENT_FIELD_ORDER",
    "order_consent_fields",
    "get_company_name",
    "SyncResultReducer",
]
