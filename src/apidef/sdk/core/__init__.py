"""apidef SDK Core - shared package information.

### Version (`apidef.sdk.core.version`)
- `PACKAGE_NAME`: The package name ("apidef")
- `PACKAGE_VERSION`: The installed package version
"""

from .version import PACKAGE_NAME, PACKAGE_VERSION

__all__ = ["PACKAGE_NAME", "PACKAGE_VERSION"]
