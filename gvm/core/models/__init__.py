"""
Domain models for gvm.

All models are re-exported here for convenient access:

    from gvm.core.models import VersionId, InstalledVersion, Receipt
"""

from gvm.core.models.installation import (
    CatalogRelease,
    InstalledVersion,
    InstallStatus,
    UseStatus,
    VersionState,
)
from gvm.core.models.receipt import Receipt
from gvm.core.models.version import VersionId

__all__ = [
    "CatalogRelease",
    "InstallStatus",
    "InstalledVersion",
    "Receipt",
    "UseStatus",
    "VersionId",
    "VersionState",
]
