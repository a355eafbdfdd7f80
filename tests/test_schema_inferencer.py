"""
Tests for column schema inference.
"""
from submission_exporter.processors.schema_inferencer import infer_schema

from conftest import make_submission


class TestInferSchema:
    """Test cases for infer_schema."""

    def test_empty_sequence(self):
        schema = infer_schema([])
        assert schema.has_compound_name is False
        assert schema.data_keys == ()
        assert schema.columns == ()

    def test_first_seen_order_without_duplicates(self):
        submissions = [
            make_submission(1, "2024-03-01T10:00:00", {"Email": "a", "Phone": "1"}),
            make_submission(2, "2024-03-02T10:00:00", {"Company": "x", "Email": "b"}),
            make_submission(3, "2024-03-03T10:00:00", {"Phone": "2", "Message": "hi", "Budget": "5k"}),
        ]
        schema = infer_schema(submissions)

        assert schema.data_keys == ("Email", "Phone", "Company", "Message", "Budget")
        assert len(set(schema.data_keys)) == len(schema.data_keys)
        assert schema.columns == ("Email", "Phone", "Company", "Message", "Budget", "Submitted", "")

    def test_order_is_not_alphabetical(self):
        schema = infer_schema([make_submission(1, "2024-03-01T10:00:00", {"Zeta": "1", "Alpha": "2"})])
        assert schema.data_keys == ("Zeta", "Alpha")

    def test_compound_name_detected_and_split(self):
        submissions = [
            make_submission(1, "2024-03-01T10:00:00", {"Email": "a"}),
            make_submission(2, "2024-03-02T10:00:00", {"Name": "Jane Doe", "Email": "b", "Message": "m"}),
        ]
        schema = infer_schema(submissions)

        assert schema.has_compound_name is True
        assert "Name" not in schema.data_keys
        assert schema.data_keys == ("Email", "Message")
        assert schema.columns == ("First Name", "Last Name", "Email", "Message", "Submitted", "")

    def test_name_key_is_case_sensitive(self):
        schema = infer_schema([make_submission(1, "2024-03-01T10:00:00", {"name": "Jane"})])
        assert schema.has_compound_name is False
        assert schema.data_keys == ("name",)

    def test_idempotent(self):
        submissions = [
            make_submission(1, "2024-03-01T10:00:00", {"Name": "A B", "Email": "a"}),
            make_submission(2, "2024-03-02T10:00:00", {"Phone": "1"}),
        ]
        assert infer_schema(submissions) == infer_schema(submissions)

    def test_accepts_generator(self):
        gen = (make_submission(i, "2024-03-01T10:00:00", {"Field": str(i)}) for i in range(3))
        assert infer_schema(gen).data_keys == ("Field",)
