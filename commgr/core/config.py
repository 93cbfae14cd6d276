"""
Runtime configuration for the management API client.

Holds the defaults that the command line falls back to. Instances are
passed explicitly into the resolver and the client.
"""

from dataclasses import dataclass

DEFAULT_REMOTE_ADDRESS = "https://webrtcfd-production.up.railway.app/"
DEFAULT_USERNAME = "admin"
DEFAULT_TIMEOUT = 30


@dataclass(frozen=True)
class ManagerConfig:
    """
    Defaults for talking to the management API.

    Attributes
    ----------
    remote_address : str
        Base URL of the management API
    default_username : str
        Username used when neither flag nor environment supply one
    timeout : float
        Request timeout in seconds
    """

    remote_address: str = DEFAULT_REMOTE_ADDRESS
    default_username: str = DEFAULT_USERNAME
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self):
        if self.timeout <= 0:
            raise ValueError(f"Timeout must be positive, got {self.timeout}")
