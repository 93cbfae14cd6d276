"""
Management API module for commgr.

This module contains the client for the community management API:
- ManagerClient: lists communities with a single authenticated request
- Cancellation: signal aborting an in-flight request
"""

from commgr.manager.cancellation import Cancellation, cancel_on_interrupt
from commgr.manager.client import ManagerClient

__all__ = ["Cancellation", "ManagerClient", "cancel_on_interrupt"]
