"""
Tests for the dashboard API client.
"""
from unittest.mock import Mock

import pytest
import requests

from submission_exporter.loaders.api_client import (
    APIRequestError, DashboardAPIClient, get_response_error_message
)


def json_response(data):
    response = Mock()
    response.raise_for_status = Mock()
    response.json = Mock(return_value=data)
    return response


def error_response(status_code, body):
    response = requests.Response()
    response.status_code = status_code
    response._content = body
    response.encoding = "utf-8"
    response.url = "http://api.test/api/x"
    return response


class TestDashboardAPIClient:
    """Test cases for DashboardAPIClient."""

    def setup_method(self):
        self.session = Mock()
        self.session.headers = {}
        self.client = DashboardAPIClient("http://api.test/", token="secret", timeout=7, session=self.session)

    def test_auth_header(self):
        assert self.session.headers["Authorization"] == "Bearer secret"
        assert self.client.api_url == "http://api.test"

    def test_fetch_submissions(self):
        self.session.request.return_value = json_response([
            {"id": 1, "form_id": 9, "client_id": 2, "submitted_at": "2024-03-10T10:00:00",
             "submission_data": {"Name": "Jane Doe", "Email": "jane@example.com"}},
            {"id": 2, "form_id": 9, "client_id": 2, "submitted_at": "2024-03-11T10:00:00",
             "submission_data": {"Email": "bob@example.com"}},
        ])

        submissions = self.client.fetch_submissions("9")

        self.session.request.assert_called_once_with("GET", "http://api.test/api/forms/9/submissions", timeout=7)
        assert [s.id for s in submissions] == ["1", "2"]
        assert submissions[0].keys() == ["Name", "Email"]

    def test_non_list_response_is_empty(self):
        self.session.request.return_value = json_response({"error": "unexpected"})
        assert self.client.fetch_submissions("9") == []

    def test_null_response_is_empty(self):
        self.session.request.return_value = json_response(None)
        assert self.client.fetch_consent_submissions() == []

    def test_malformed_records_skipped(self):
        self.session.request.return_value = json_response([
            {"id": 1, "submitted_at": "garbage", "submission_data": {}},
            {"id": 2, "submitted_at": "2024-03-11T10:00:00", "submission_data": {}},
            "not a record",
        ])
        assert [s.id for s in self.client.fetch_submissions("9")] == ["2"]

    def test_fetch_forms_and_clients(self):
        self.session.request.return_value = json_response([{"id": 3, "form_name": "Contact", "plugin": "cf7"}])
        forms = self.client.fetch_forms("2")
        assert forms[0].name == "Contact"
        self.session.request.assert_called_with("GET", "http://api.test/api/forms/client/2", timeout=7)

        self.session.request.return_value = json_response([{"id": 2, "name": "Acme", "wordpress_url": "https://acme.test"}])
        clients = self.client.fetch_clients()
        assert clients[0].wordpress_url == "https://acme.test"

    def test_sync_client_has_no_timeout(self):
        self.session.request.return_value = json_response({"synced": 4, "skipped": 1})

        assert self.client.sync_client("2") == {"synced": 4, "skipped": 1}
        self.session.request.assert_called_once_with("POST", "http://api.test/api/sync/client/2", timeout=None)

    def test_connection_error_raises_api_error(self):
        self.session.request.side_effect = requests.ConnectionError("connection refused")

        with pytest.raises(APIRequestError) as exc_info:
            self.client.fetch_submissions("9")

        assert exc_info.value.message == "connection refused"
        assert exc_info.value.status_code is None

    def test_http_error_uses_api_error_field(self):
        self.session.request.return_value = error_response(409, b'{"error": "Sync already running"}')

        with pytest.raises(APIRequestError) as exc_info:
            self.client.sync_client("2")

        assert exc_info.value.message == "Sync already running"
        assert exc_info.value.status_code == 409


class TestGetResponseErrorMessage:
    """Test cases for get_response_error_message."""

    def test_plain_text_body(self):
        error = requests.HTTPError("502 Server Error", response=error_response(502, b"Bad Gateway"))
        assert get_response_error_message(error) == "Bad Gateway"

    def test_json_string_body(self):
        error = requests.HTTPError("400", response=error_response(400, b'"Invalid client"'))
        assert get_response_error_message(error) == "Invalid client"

    def test_no_response(self):
        assert get_response_error_message(requests.Timeout("timed out")) == "timed out"
