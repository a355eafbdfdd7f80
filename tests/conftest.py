"""
Shared fixtures for submission exporter tests.
"""
from datetime import datetime

import pytest

from submission_exporter.models.core import Submission


def make_submission(sub_id, submitted_at, data, **kwargs):
    """Build a Submission from a dict of fields, keeping insertion order."""
    if isinstance(submitted_at, str):
        submitted_at = datetime.fromisoformat(submitted_at)
    return Submission(
        id=str(sub_id),
        form_id=kwargs.get("form_id", "form-1"),
        client_id=kwargs.get("client_id", "client-1"),
        submitted_at=submitted_at,
        submission_data=tuple(data.items()),
        wordpress_url=kwargs.get("wordpress_url")
    )


@pytest.fixture
def submission_factory():
    return make_submission
