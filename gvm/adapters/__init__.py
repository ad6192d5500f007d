"""Adapters — bindings to the Go toolchain and the release catalog.

Public re-exports for convenient access.
"""

from gvm.adapters.base import Toolchain
from gvm.adapters.catalog import CatalogClient
from gvm.adapters.toolchain import GoToolchain

__all__ = [
    "CatalogClient",
    "GoToolchain",
    "Toolchain",
]
