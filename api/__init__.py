"""
API Module for Drawing Analysis

This module provides REST API endpoints for uploading children's drawings
and reading back their analysis reports.
"""

from .main import app, create_app

__version__ = "1.0.0"
__all__ = ["app", "create_app"]
