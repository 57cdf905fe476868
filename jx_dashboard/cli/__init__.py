"""CLI front-end module for jx-dashboard

This module implements the Typer-based CLI with the dashboard command.
"""

from .main import app

__all__ = ['app']
