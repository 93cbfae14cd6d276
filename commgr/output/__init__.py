"""
Output module for commgr.

This module renders community lists for consumption by scripts.
"""

from commgr.output.renderer import render_csv

__all__ = ["render_csv"]
