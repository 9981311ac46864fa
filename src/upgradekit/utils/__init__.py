"""Utility functions for UpgradeKit."""

from .imports import safe_import
from .network import check_internet

__all__ = ["safe_import", "check_internet"]
