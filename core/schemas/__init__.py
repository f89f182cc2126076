"""
Module 01 - Schemas & Canonicalization
File: __init__.py

Purpose: Export the public API for the schemas module.
"""

# Version constants
from .versioning import (
    SCHEMA_VERSION,
    SUPPORTED_SCHEMA_VERSIONS,
    SchemaVersion,
    UnsupportedSchemaVersionError,
    assert_supported_schema_version,
    is_compatible_schema_version,
)

# Canonical serialization API
from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonicalize_value,
    dumps_canonical,
    loads_canonical,
)

# Error models and exceptions
from .errors import (
    AnchorError,
    AnchorException,
    CanonicalizationException,
    ErrorCodes,
    InvalidRangeException,
    LedgerCorruptException,
    LimitExceededException,
    MerkleVerificationException,
    NotFoundException,
    NothingPendingException,
    OutOfRangeException,
    SnapshotStoreCorruptException,
    UnauthorizedException,
)

# Operation result shapes
from .anchor import (
    CapacityView,
    CommittedProofView,
    ProofView,
    SnapshotView,
    TreeView,
)

__all__ = [
    # Versioning
    "SCHEMA_VERSION",
    "SUPPORTED_SCHEMA_VERSIONS",
    "SchemaVersion",
    "UnsupportedSchemaVersionError",
    "assert_supported_schema_version",
    "is_compatible_schema_version",
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "canonicalize_value",
    "dumps_canonical",
    "loads_canonical",
    # Errors
    "AnchorError",
    "AnchorException",
    "CanonicalizationException",
    "ErrorCodes",
    "InvalidRangeException",
    "LedgerCorruptException",
    "LimitExceededException",
    "MerkleVerificationException",
    "NotFoundException",
    "NothingPendingException",
    "OutOfRangeException",
    "SnapshotStoreCorruptException",
    "UnauthorizedException",
    # Views
    "CapacityView",
    "CommittedProofView",
    "ProofView",
    "SnapshotView",
    "TreeView",
]
