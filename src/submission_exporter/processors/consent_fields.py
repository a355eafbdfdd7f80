"""
Canonical field ordering for client consent form submissions.
"""
from typing import Dict, Iterable, List, Tuple

from ..models.core import FieldValue


# Labels as published on the consent form, in report order. Labels not listed
# here are rendered after all of these, in submission order.
CONSENT_FIELD_ORDER: Tuple[str, ...] = (
    "Company Name (official company name to include on invoices)",
    "Client Name (main point of contact)",
    "Client Email",
    "Client Phone",
    "Street Address",
    "City",
    "State",
    "ZIP Code",
    "Company Main Phone Number",
    "Company Website",
    "Is your physical address different from your mailing address?",
    "Accounting Contact Name",
    "Accounting Contact Email",
    "Accounting Contact Phone Number",
    "Is your accounting address different from your mailing address?",
    "Sales Tax Status",
    "Additional Invoicing Instructions",
    "Payment",
    "Payment to Media Vendors",
    "Production & Hard Costs Billing",
    "Sales Tax",
    "Overdue Invoices",
    "Artificial Intelligence",
    "Termination",
    "Signature",
)

_FIELD_RANK: Dict[str, int] = {label: i for i, label in enumerate(CONSENT_FIELD_ORDER)}
_UNKNOWN_RANK = len(CONSENT_FIELD_ORDER)

UNKNOWN_COMPANY = "Unknown"


def order_consent_fields(
    submission_data: Iterable[Tuple[str, FieldValue]]
) -> List[Tuple[str, FieldValue]]:
    """
    Order consent form entries by the canonical field list.

    Known labels sort by their position in CONSENT_FIELD_ORDER; unknown labels
    follow all known ones and keep their submission order.

    Args:
        submission_data: Ordered (label, value) pairs

    Returns:
        A new list of (label, value) pairs
    """
    return sorted(submission_data, key=lambda item: _FIELD_RANK.get(item[0], _UNKNOWN_RANK))


def get_company_name(submission_data: Iterable[Tuple[str, FieldValue]]) -> str:
    """Value of the first field whose label mentions "company name", or 'Unknown'."""
    for label, value in submission_data:
        if "company name" in label.lower():
            return value or UNKNOWN_COMPANY
    return UNKNOWN_COMPANY
