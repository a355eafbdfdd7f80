"""
Data loading components for the dashboard API.
"""

from .api_client import DashboardAPIClient, APIRequestError

__all__ = ["DashboardAPIClient", "APIRequestError"]
