"""
Credential resolution for the management API.

Credentials come from command-line flags, optionally overridden by
environment variables. The username falls back to a configured default;
the password has no default.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from commgr.core.config import ManagerConfig
from commgr.exceptions import MissingCredentialError

logger = logging.getLogger(__name__)

# Environment variables overriding the credential flags
USERNAME_ENV = "API_USERNAME"
PASSWORD_ENV = "API_PASSWORD"


@dataclass(frozen=True)
class Credentials:
    """
    Username and password for the management API.

    Both values are non-empty once produced by resolve_credentials().
    """

    username: str
    password: str

    def __repr__(self) -> str:
        return f"Credentials(username={self.username!r}, password='***')"


def resolve_credentials(
    flag_username: Optional[str],
    flag_password: Optional[str],
    env_username: Optional[str] = None,
    env_password: Optional[str] = None,
    verbose: bool = False,
) -> Credentials:
    """
    Determine the effective credentials.

    A non-empty environment value replaces the corresponding flag value.
    A value made only of whitespace counts as missing, but the values
    are returned as given. The password is checked before the username,
    so a missing password is reported even when both are missing.

    Parameters
    ----------
    flag_username : str, optional
        Username bound from the command line (already holding its default)
    flag_password : str, optional
        Password bound from the command line
    env_username : str, optional
        Value of the username environment variable
    env_password : str, optional
        Value of the password environment variable
    verbose : bool, optional
        Log which environment variables were used (default: False)

    Returns
    -------
    Credentials
        Resolved, non-empty credentials

    Raises
    ------
    MissingCredentialError
        If the resolved password or username is empty

    Examples
    --------
    >>> resolve_credentials("admin", "flag-secret", env_password="env-secret")
    Credentials(username='admin', password='***')
    """
    username = flag_username or ""
    password = flag_password or ""

    if env_username:
        if verbose:
            logger.info(f"Using username from {USERNAME_ENV} env variable")
        username = env_username

    if env_password:
        if verbose:
            logger.info(f"Using password from {PASSWORD_ENV} env variable")
        password = env_password

    if not password.strip():
        raise MissingCredentialError("password")

    if not username.strip():
        raise MissingCredentialError("username")

    return Credentials(username=username, password=password)


class CredentialResolver:
    """
    Resolves credentials against a configuration and an environment.

    Parameters
    ----------
    config : ManagerConfig, optional
        Supplies the default username (default: ManagerConfig())
    environ : Mapping[str, str], optional
        Environment to read overrides from (default: os.environ)

    Examples
    --------
    >>> resolver = CredentialResolver(environ={"API_PASSWORD": "secret"})
    >>> resolver.resolve().username
    'admin'
    """

    def __init__(
        self,
        config: Optional[ManagerConfig] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self._config = config or ManagerConfig()
        self._environ = os.environ if environ is None else environ

    @property
    def config(self) -> ManagerConfig:
        """Return the configuration supplying defaults."""
        return self._config

    def resolve(
        self,
        username: Optional[str] = None,
        password: Optional[str] = None,
        verbose: bool = False,
    ) -> Credentials:
        """
        Resolve credentials from flag values and the environment.

        Parameters
        ----------
        username : str, optional
            Flag value for the username; None means the flag was not
            given and the configured default applies
        password : str, optional
            Flag value for the password
        verbose : bool, optional
            Log which environment variables were used

        Returns
        -------
        Credentials
            Resolved credentials

        Raises
        ------
        MissingCredentialError
            If a credential is empty after resolution
        """
        if username is None:
            username = self._config.default_username

        return resolve_credentials(
            username,
            password,
            self._environ.get(USERNAME_ENV),
            self._environ.get(PASSWORD_ENV),
            verbose=verbose,
        )
