"""Centralized package information for apidef.

This module provides a single source of truth for the apidef package name
and version, avoiding duplication across the codebase.
"""

from importlib.metadata import PackageNotFoundError, version

__all__ = ["PACKAGE_NAME", "PACKAGE_VERSION"]

# Package name constant
PACKAGE_NAME = "apidef"

try:
    PACKAGE_VERSION = version(PACKAGE_NAME)
except PackageNotFoundError:
    PACKAGE_VERSION = "unknown"
