"""apidef - declare API routes with typed, placed parameters and validate request input."""

from apidef.sdk.core import PACKAGE_VERSION as __version__

__all__ = ["__version__"]
