"""
Client for the community management API.

This module provides the ManagerClient class, which performs a single
authenticated request against the management API and decodes the list
of communities it returns.
"""

import logging
import threading
from typing import Optional

import requests

from commgr.auth.attachers import BasicAuthAttacher, CredentialAttacher
from commgr.auth.credentials import Credentials
from commgr.core.config import DEFAULT_TIMEOUT, ManagerConfig
from commgr.core.models import CommunityList, parse_communities
from commgr.exceptions import (
    AuthError,
    NetworkError,
    ProtocolError,
    RequestCancelledError,
)
from commgr.manager.cancellation import Cancellation

logger = logging.getLogger(__name__)

# Status codes meaning the credentials were rejected
AUTH_STATUS_CODES = (401, 403)


class ManagerClient:
    """
    Client listing communities from the management API.

    The client keeps no state between calls; each call to
    list_communities() is one HTTP round trip with no retries.

    Parameters
    ----------
    remote_address : str
        URL of the management API
    credentials : Credentials, optional
        Credentials presented with HTTP basic authentication
    attacher : CredentialAttacher, optional
        Alternative credential strategy (e.g. bearer token). Exactly one
        of credentials and attacher must be given.
    session : requests.Session, optional
        HTTP session to use. If omitted, a fresh session is created and
        closed for every call.
    timeout : float, optional
        Request timeout in seconds (default: 30)

    Examples
    --------
    >>> client = ManagerClient(
    ...     "https://webrtcfd-production.up.railway.app/",
    ...     credentials=Credentials("admin", "secret"),
    ... )
    >>> for community in client.list_communities():  # doctest: +SKIP
    ...     print(community.id, community.clients)
    """

    def __init__(
        self,
        remote_address: str,
        credentials: Optional[Credentials] = None,
        attacher: Optional[CredentialAttacher] = None,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        if not remote_address or not remote_address.strip():
            raise ValueError("Remote address must not be empty")

        if (credentials is None) == (attacher is None):
            raise ValueError("Provide exactly one of credentials or attacher")

        self._remote_address = remote_address.strip()
        self._attacher = attacher or BasicAuthAttacher(credentials)
        self._session = session
        self._timeout = timeout

    @classmethod
    def from_config(
        cls,
        config: ManagerConfig,
        credentials: Credentials,
        session: Optional[requests.Session] = None,
    ) -> "ManagerClient":
        """
        Build a client from configuration and resolved credentials.

        Parameters
        ----------
        config : ManagerConfig
            Supplies remote address and timeout
        credentials : Credentials
            Resolved credentials
        session : requests.Session, optional
            HTTP session to use

        Returns
        -------
        ManagerClient
            Configured client
        """
        return cls(
            config.remote_address,
            credentials=credentials,
            session=session,
            timeout=config.timeout,
        )

    @property
    def remote_address(self) -> str:
        """Return the management API address."""
        return self._remote_address

    @property
    def attacher(self) -> CredentialAttacher:
        """Return the credential attachment strategy."""
        return self._attacher

    def list_communities(
        self, cancellation: Optional[Cancellation] = None
    ) -> CommunityList:
        """
        List communities known to the management API.

        Parameters
        ----------
        cancellation : Cancellation, optional
            Signal aborting the request when cancelled

        Returns
        -------
        CommunityList
            Communities in the order returned by the server

        Raises
        ------
        NetworkError
            If the server cannot be reached, times out or reports a
            server-side failure
        RequestCancelledError
            If the cancellation fired before or during the request
        AuthError
            If the server rejects the credentials
        ProtocolError
            If the response cannot be decoded
        """
        cancellation = cancellation or Cancellation()
        cancellation.raise_if_cancelled()

        owns_session = self._session is None
        session = self._session or requests.Session()

        logger.debug(f"Listing communities from {self._remote_address}")

        try:
            response = self._send(session, cancellation)
        except requests.RequestException as e:
            if cancellation.cancelled:
                raise RequestCancelledError() from e
            if isinstance(e, requests.Timeout):
                raise NetworkError(
                    f"Request to {self._remote_address} timed out "
                    f"after {self._timeout}s"
                ) from e
            raise NetworkError(f"Could not reach {self._remote_address}: {e}") from e
        finally:
            if owns_session:
                session.close()

        cancellation.raise_if_cancelled()

        communities = self._decode(response)
        logger.info(f"Received {len(communities)} communities")
        return communities

    def _send(
        self, session: requests.Session, cancellation: Cancellation
    ) -> requests.Response:
        """
        Issue the GET on a worker thread and wait for it or the cancellation.

        On cancellation the session is closed and RequestCancelledError is
        raised at once; the worker is abandoned and its result discarded.
        """
        outcome = {}
        finished = threading.Event()

        def worker():
            try:
                outcome["response"] = session.get(
                    self._remote_address,
                    auth=self._attacher,
                    headers={"Accept": "application/json"},
                    timeout=self._timeout,
                )
            except Exception as e:
                outcome["error"] = e
            finally:
                finished.set()

        thread = threading.Thread(target=worker, name="commgr-request", daemon=True)

        def abort():
            finished.set()
            session.close()

        unregister = cancellation.on_cancel(abort)
        try:
            thread.start()
            finished.wait()
        finally:
            unregister()

        if "response" in outcome:
            return outcome["response"]
        if cancellation.cancelled:
            logger.debug(f"Abandoned request to {self._remote_address}")
            raise RequestCancelledError()
        raise outcome["error"]

    def _decode(self, response: requests.Response) -> CommunityList:
        """Map an HTTP response to a community list or an error."""
        status = response.status_code

        if status in AUTH_STATUS_CODES:
            raise AuthError(
                f"Management API rejected the credentials (HTTP {status})",
                status_code=status,
            )

        if status >= 500:
            raise NetworkError(
                f"Management API is unavailable (HTTP {status})",
                status_code=status,
            )

        if not 200 <= status < 300:
            raise ProtocolError(
                f"Unexpected response from management API (HTTP {status})",
                status_code=status,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise ProtocolError(
                f"Management API returned invalid JSON: {e}",
                status_code=status,
            ) from e

        return parse_communities(payload)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(remote_address='{self._remote_address}')"
