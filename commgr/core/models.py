"""
Data model for communities reported by the management API.

This module provides the Community record and the decoder that turns
a JSON response body into a list of communities.
"""

import logging
from dataclasses import dataclass
from typing import Any

from commgr.exceptions import ProtocolError

logger = logging.getLogger(__name__)

# Column order of the tabular representation
FIELDS = ("id", "clients", "persistent")


@dataclass(frozen=True)
class Community:
    """
    A named group tracked by the management API.

    Attributes
    ----------
    id : str
        Community identifier
    clients : int
        Number of clients connected when the response was produced
    persistent : bool
        True if the community outlives its clients, False if it is
        removed once the last client leaves

    Examples
    --------
    >>> Community(id="lobby", clients=2, persistent=True)
    Community(id='lobby', clients=2, persistent=True)
    """

    id: str
    clients: int
    persistent: bool

    def to_row(self) -> list[str]:
        """Return the community as CSV fields in column order."""
        return [self.id, str(self.clients), "true" if self.persistent else "false"]


CommunityList = list[Community]


def parse_community(item: Any, index: int = 0) -> Community:
    """
    Decode a single community object.

    Parameters
    ----------
    item : Any
        Decoded JSON value for one community
    index : int, optional
        Position in the enclosing array, used in error messages

    Returns
    -------
    Community
        Decoded community

    Raises
    ------
    ProtocolError
        If the value is not an object or a field is missing or mistyped
    """
    if not isinstance(item, dict):
        raise ProtocolError(
            f"Community #{index}: expected object, got {type(item).__name__}"
        )

    missing = [name for name in FIELDS if name not in item]
    if missing:
        raise ProtocolError(
            f"Community #{index}: missing field(s): {', '.join(missing)}"
        )

    community_id = item["id"]
    clients = item["clients"]
    persistent = item["persistent"]

    if not isinstance(community_id, str):
        raise ProtocolError(f"Community #{index}: 'id' must be a string")

    # bool is a subclass of int
    if isinstance(clients, bool) or not isinstance(clients, int):
        raise ProtocolError(f"Community {community_id!r}: 'clients' must be an integer")
    if clients < 0:
        raise ProtocolError(
            f"Community {community_id!r}: 'clients' must not be negative, got {clients}"
        )

    if not isinstance(persistent, bool):
        raise ProtocolError(
            f"Community {community_id!r}: 'persistent' must be a boolean"
        )

    return Community(id=community_id, clients=clients, persistent=persistent)


def parse_communities(payload: Any) -> CommunityList:
    """
    Decode a JSON payload into a list of communities.

    Order is preserved exactly as received. A JSON ``null`` decodes to
    an empty list; unknown keys on community objects are ignored.

    Parameters
    ----------
    payload : Any
        Decoded JSON body of the listing response

    Returns
    -------
    CommunityList
        Communities in server order

    Raises
    ------
    ProtocolError
        If the payload is not an array or any element is invalid

    Examples
    --------
    >>> parse_communities([{"id": "a", "clients": 3, "persistent": True}])
    [Community(id='a', clients=3, persistent=True)]
    """
    if payload is None:
        return []

    if not isinstance(payload, list):
        raise ProtocolError(
            f"Expected a JSON array of communities, got {type(payload).__name__}"
        )

    communities = [parse_community(item, i) for i, item in enumerate(payload)]
    logger.debug(f"Decoded {len(communities)} communities")
    return communities
