"""
CLI module for commgr.

This module provides the command-line interface for listing communities
known to the management API.
"""

from commgr.cli.commands import main

__all__ = ["main"]
