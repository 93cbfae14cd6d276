"""
Pytest configuration and shared fixtures.

This module contains pytest fixtures and configuration that are shared
across all test modules.
"""

from unittest.mock import Mock

import pytest
import requests

from commgr.auth.credentials import Credentials


def make_response(status_code: int = 200, payload=None, json_error=None) -> Mock:
    """
    Build a mocked requests.Response.

    Parameters
    ----------
    status_code : int
        HTTP status code
    payload : Any
        Value returned by response.json()
    json_error : Exception, optional
        Exception raised by response.json() instead of returning payload
    """
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    if json_error is not None:
        response.json = Mock(side_effect=json_error)
    else:
        response.json = Mock(return_value=payload)
    return response


@pytest.fixture
def response_factory():
    """Provide make_response() to tests."""
    return make_response


@pytest.fixture
def credentials() -> Credentials:
    """Provide resolved credentials."""
    return Credentials(username="admin", password="secret")


@pytest.fixture
def sample_payload() -> list:
    """
    Provide a listing response body with one persistent and one ephemeral
    community.

    Returns
    -------
    list
        Decoded JSON payload
    """
    return [
        {"id": "a", "clients": 3, "persistent": True},
        {"id": "b", "clients": 0, "persistent": False},
    ]


@pytest.fixture
def mock_session(sample_payload) -> Mock:
    """Provide a session whose GET returns the sample payload."""
    session = Mock(spec=requests.Session)
    session.get = Mock(return_value=make_response(200, sample_payload))
    return session
