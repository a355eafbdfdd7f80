"""
Tests for compound name splitting.
"""
import pytest

from submission_exporter.models.core import NameParts
from submission_exporter.processors.name_splitter import split_name


class TestSplitName:
    """Test cases for split_name."""

    def test_single_token(self):
        assert split_name("Jane") == NameParts("Jane", "")

    def test_multiple_tokens(self):
        assert split_name("Jane Q Public") == NameParts("Jane", "Q Public")

    @pytest.mark.parametrize("value", ["", "   ", None])
    def test_empty_values(self, value):
        assert split_name(value) == NameParts("", "")

    def test_whitespace_runs_collapsed(self):
        assert split_name("  Jane \t  Q\n Public  ") == NameParts("Jane", "Q Public")
