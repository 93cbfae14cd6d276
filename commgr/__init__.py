"""
commgr - Client for the community management API.

This package resolves operator credentials, lists the communities known
to a remote management API together with their connected client counts,
and renders the result as CSV.

Example usage::

    import sys

    from commgr import CredentialResolver, ManagerClient, ManagerConfig, render_csv

    config = ManagerConfig()
    credentials = CredentialResolver(config).resolve(password="secret")

    client = ManagerClient.from_config(config, credentials)
    render_csv(client.list_communities(), sys.stdout)
"""

from commgr.auth.attachers import (
    BasicAuthAttacher,
    BearerTokenAttacher,
    CredentialAttacher,
)
from commgr.auth.credentials import (
    CredentialResolver,
    Credentials,
    resolve_credentials,
)
from commgr.core.config import ManagerConfig
from commgr.core.models import Community, CommunityList, parse_communities
from commgr.exceptions import (
    AuthError,
    CommgrError,
    MissingCredentialError,
    NetworkError,
    ProtocolError,
    RequestCancelledError,
    WriteError,
)
from commgr.manager.cancellation import Cancellation
from commgr.manager.client import ManagerClient
from commgr.output.renderer import render_csv

__version__ = "0.1.0"

__all__ = [
    # Configuration
    "ManagerConfig",
    # Credentials
    "Credentials",
    "CredentialResolver",
    "resolve_credentials",
    "CredentialAttacher",
    "BasicAuthAttacher",
    "BearerTokenAttacher",
    # Management API
    "ManagerClient",
    "Cancellation",
    "Community",
    "CommunityList",
    "parse_communities",
    # Output
    "render_csv",
    # Exceptions
    "CommgrError",
    "MissingCredentialError",
    "NetworkError",
    "RequestCancelledError",
    "AuthError",
    "ProtocolError",
    "WriteError",
    # Version
    "__version__",
]
