"""
Core module for commgr.

This module contains the data model and runtime configuration.
"""

from commgr.core.config import ManagerConfig
from commgr.core.models import Community, CommunityList, parse_communities

__all__ = ["Community", "CommunityList", "ManagerConfig", "parse_communities"]
