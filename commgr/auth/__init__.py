"""
Authentication for the management API.

Credentials are resolved from flags and environment variables, then
attached to requests by a CredentialAttacher.
"""

from commgr.auth.attachers import (
    BasicAuthAttacher,
    BearerTokenAttacher,
    CredentialAttacher,
)
from commgr.auth.credentials import (
    PASSWORD_ENV,
    USERNAME_ENV,
    CredentialResolver,
    Credentials,
    resolve_credentials,
)

__all__ = [
    "BasicAuthAttacher",
    "BearerTokenAttacher",
    "CredentialAttacher",
    "CredentialResolver",
    "Credentials",
    "PASSWORD_ENV",
    "USERNAME_ENV",
    "resolve_credentials",
]
