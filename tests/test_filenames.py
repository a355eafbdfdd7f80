"""
Tests for export file name helpers.
"""
import pytest

from submission_exporter.utils.filenames import safe_file_stem


class TestSafeFileStem:
    """Test cases for safe_file_stem."""

    @pytest.mark.parametrize("name,expected", [
        ("Contact Form", "Contact Form"),
        ("Quote/Contact", "Quote-Contact"),
        ("A\\B", "A-B"),
        ('What? "Now": <here>|*', "What- -Now-- -here---"),
        ("  padded  ", "padded"),
    ])
    def test_replaces_unsafe_characters(self, name, expected):
        assert safe_file_stem(name, "fallback") == expected

    @pytest.mark.parametrize("name", ["", None, "   ", ".", ".."])
    def test_falls_back_to_default(self, name):
        assert safe_file_stem(name, "submissions") == "submissions"
