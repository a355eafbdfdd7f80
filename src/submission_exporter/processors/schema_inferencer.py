"""
Column schema inference across schema-less form submissions.
"""
import logging
from typing import Iterable, List

from ..models.core import Submission, SubmissionSchema


logger = logging.getLogger(__name__)

COMPOUND_NAME_KEY = "Name"
SPLIT_NAME_COLUMNS = ("First Name", "Last Name")
SUBMITTED_COLUMN = "Submitted"
ACTION_COLUMN = ""


def infer_schema(submissions: Iterable[Submission]) -> SubmissionSchema:
    """
    Derive the ordered set of data columns for a submission sequence.

    Keys keep their first-seen order: submissions are walked in input order and
    each submission's fields in their stored order, since plugins emit fields in
    form-layout order. When any submission carries a compound "Name" field, it
    is replaced by split "First Name"/"Last Name" columns.

    Args:
        submissions: Submissions in display order

    Returns:
        SubmissionSchema; empty input yields no columns at all
    """
    submissions = list(submissions)
    if not submissions:
        return SubmissionSchema()

    has_compound_name = any(sub.has(COMPOUND_NAME_KEY) for sub in submissions)

    data_keys: List[str] = []
    seen = set()
    for sub in submissions:
        for key in sub.keys():
            if has_compound_name and key == COMPOUND_NAME_KEY:
                continue
            if key not in seen:
                seen.add(key)
                data_keys.append(key)

    columns: List[str] = []
    if has_compound_name:
        columns.extend(SPLIT_NAME_COLUMNS)
    columns.extend(data_keys)
    columns.extend([SUBMITTED_COLUMN, ACTION_COLUMN])

    logger.debug(
        f"Inferred {len(data_keys)} data columns from {len(submissions)} submissions "
        f"(compound name: {has_compound_name})"
    )

    return SubmissionSchema(
        has_compound_name=has_compound_name,
        data_keys=tuple(data_keys),
        columns=tuple(columns),
    )
