"""
Strategies for attaching credentials to management API requests.

The manager client does not know how credentials are presented; it
receives a CredentialAttacher and hands it to requests as the ``auth``
argument.
"""

from abc import ABC, abstractmethod

import requests
from requests.auth import AuthBase, HTTPBasicAuth

from commgr.auth.credentials import Credentials
from commgr.exceptions import MissingCredentialError


class CredentialAttacher(AuthBase, ABC):
    """
    Abstract base class for credential attachment strategies.

    Subclasses modify an outgoing request so that the management API
    can authenticate it.
    """

    @abstractmethod
    def attach(self, request: requests.PreparedRequest) -> requests.PreparedRequest:
        """
        Add credentials to a prepared request.

        Parameters
        ----------
        request : requests.PreparedRequest
            Request about to be sent

        Returns
        -------
        requests.PreparedRequest
            The same request with credentials applied
        """
        pass

    def __call__(self, request: requests.PreparedRequest) -> requests.PreparedRequest:
        return self.attach(request)


class BasicAuthAttacher(CredentialAttacher):
    """
    HTTP basic authentication from resolved credentials.

    Examples
    --------
    >>> attacher = BasicAuthAttacher(Credentials("admin", "secret"))
    >>> requests.get("https://example.com/", auth=attacher)  # doctest: +SKIP
    """

    def __init__(self, credentials: Credentials):
        self._credentials = credentials

    @property
    def username(self) -> str:
        """Return the username presented to the server."""
        return self._credentials.username

    def attach(self, request: requests.PreparedRequest) -> requests.PreparedRequest:
        basic = HTTPBasicAuth(self._credentials.username, self._credentials.password)
        return basic(request)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(username='{self.username}')"


class BearerTokenAttacher(CredentialAttacher):
    """
    Bearer token authentication.

    Used when the management API is protected by an identity provider.
    The token must already have been obtained; this class only presents it.

    Raises
    ------
    MissingCredentialError
        If the token is empty
    """

    def __init__(self, token: str):
        token = (token or "").strip()
        if not token:
            raise MissingCredentialError("token")
        self._token = token

    def attach(self, request: requests.PreparedRequest) -> requests.PreparedRequest:
        request.headers["Authorization"] = f"Bearer {self._token}"
        return request

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(token='***')"
