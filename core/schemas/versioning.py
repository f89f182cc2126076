"""
Module 01 - Schemas & Canonicalization
File: versioning.py

Purpose: Centralize the on-disk snapshot format version.
Keep this file free of imports from other schema files to avoid
circular dependencies.
"""

from typing import Literal

# Current snapshot store format
SCHEMA_VERSION: str = "v1"

SchemaVersion = Literal["v1"]

SUPPORTED_SCHEMA_VERSIONS: frozenset[str] = frozenset({"v1"})


class UnsupportedSchemaVersionError(ValueError):
    """Raised when a snapshot store was written with an unknown format."""

    def __init__(self, version: str, supported: frozenset[str] | None = None) -> None:
        self.version = version
        self.supported = supported or SUPPORTED_SCHEMA_VERSIONS
        super().__init__(
            f"Unsupported schema version: '{version}'. "
            f"Supported versions: {sorted(self.supported)}"
        )


def is_compatible_schema_version(version: str) -> bool:
    """Return True if the given schema version can be read."""
    return version in SUPPORTED_SCHEMA_VERSIONS


def assert_supported_schema_version(version: str) -> None:
    """
    Validate that the given schema version is supported.

    Raises:
        UnsupportedSchemaVersionError: If the version is not supported.
    """
    if not is_compatible_schema_version(version):
        raise UnsupportedSchemaVersionError(version)
