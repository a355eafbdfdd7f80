"""
Client for the submissions dashboard API.
"""
import logging
from typing import Any, Dict, List, Optional

import requests

from ..models.core import Client, Form, Submission


logger = logging.getLogger(__name__)


class APIRequestError(Exception):
    """Raised when a dashboard API request fails."""

    def __init__(self, message: str, status_code: Optional[int] = None, url: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.url = url


def get_response_error_message(error: requests.RequestException) -> str:
    """
    Best human-readable message for a failed request.

    Prefers the API's JSON ``error`` field, then the raw response body, then the
    exception text.
    """
    response = getattr(error, "response", None)
    if response is not None:
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
        if body is not None and not isinstance(body, dict):
            return str(body)
        if response.text:
            return response.text

    return str(error) or "Unknown error"


class DashboardAPIClient:
    """Fetches clients, forms and submissions, and triggers syncs."""

    def __init__(self, api_url: str, token: Optional[str] = None, timeout: float = 10.0,
                 session: Optional[requests.Session] = None):
        """
        Initialize the API client.

        Args:
            api_url: Base URL of the dashboard API
            token: Bearer token for authentication
            timeout: Request timeout in seconds for list requests
            session: Optional pre-configured requests session
        """
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})
        if token:
            self.session.headers.update({"Authorization": f"Bearer {token}"})

    def _request(self, method: str, path: str, timeout: Optional[float] = None) -> Any:
        url = f"{self.api_url}{path}"
        try:
            response = self.session.request(method, url, timeout=timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            message = get_response_error_message(e)
            status = e.response.status_code if getattr(e, "response", None) is not None else None
            logger.error(f"{method} {url} failed: {message}")
            raise APIRequestError(message, status_code=status, url=url) from e

        try:
            return response.json()
        except ValueError:
            logger.warning(f"{method} {url} returned a non-JSON body")
            return None

    def _get_list(self, path: str) -> List[Dict[str, Any]]:
        data = self._request("GET", path, timeout=self.timeout)
        if not isinstance(data, list):
            logger.warning(f"Expected a list from {path}, got {type(data).__name__}; treating as empty")
            return []
        return [item for item in data if isinstance(item, dict)]

    def fetch_clients(self) -> List[Client]:
        return [Client.from_api(record) for record in self._get_list("/api/clients")]

    def fetch_forms(self, client_id: str) -> List[Form]:
        return [Form.from_api(record) for record in self._get_list(f"/api/forms/client/{client_id}")]

    def fetch_submissions(self, form_id: str) -> List[Submission]:
        """
        Fetch all submissions of a form in stored order.

        Args:
            form_id: Form identifier

        Returns:
            List of submissions; empty when the API returns anything but a list

        Raises:
            APIRequestError: If the request fails
        """
        records = self._get_list(f"/api/forms/{form_id}/submissions")
        submissions = self._parse_submissions(records)
        logger.info(f"Loaded {len(submissions)} submissions for form {form_id}")
        return submissions

    def fetch_consent_submissions(self) -> List[Submission]:
        records = self._get_list("/api/consent-form/submissions")
        submissions = self._parse_submissions(records)
        logger.info(f"Loaded {len(submissions)} consent form submissions")
        return submissions

    def sync_client(self, client_id: str) -> Dict[str, Any]:
        """
        Trigger a sync of a client's WordPress site.

        No timeout is applied; the sync runs to completion or failure.

        Returns:
            Response body, expected to hold 'synced' and 'skipped' counts

        Raises:
            APIRequestError: If the sync fails
        """
        data = self._request("POST", f"/api/sync/client/{client_id}")
        return data if isinstance(data, dict) else {}

    @staticmethod
    def _parse_submissions(records: List[Dict[str, Any]]) -> List[Submission]:
        submissions = []
        for record in records:
            try:
                submissions.append(Submission.from_api(record))
            except ValueError as e:
                logger.warning(f"Skipping malformed submission {record.get('id')}: {e}")
        return submissions
