"""
Custom exception hierarchy for SnapSight.

Used by repositories, storage backends, the vision client and use cases.
All application exceptions inherit from SnapSightError and carry a
user-facing message that controllers put into the JSON error body.
"""

# -----------------------------------------------------------------------------
# Standard library
# -----------------------------------------------------------------------------
from typing import Any, Dict, Optional


# -----------------------------------------------------------------------------
# Base
# -----------------------------------------------------------------------------


class SnapSightError(Exception):
    """Base exception for all SnapSight errors."""

    default_user_message = "An error occurred. Please try again."

    def __init__(
        self,
        message: str,
        user_message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.user_message = user_message or self.default_user_message
        self.details = details or {}


# -----------------------------------------------------------------------------
# Client errors
# -----------------------------------------------------------------------------


class InvalidUploadError(SnapSightError):
    """Raised when an upload request carries no usable file."""

    default_user_message = "No file uploaded"


class PhotoNotFoundError(SnapSightError):
    """Raised when a photo id does not match any stored record."""

    default_user_message = "Photo not found"


# -----------------------------------------------------------------------------
# Persistence
# -----------------------------------------------------------------------------


class PhotoRepositoryError(SnapSightError):
    """Raised when the database rejects or cannot serve an operation."""

    default_user_message = "Database error"


# -----------------------------------------------------------------------------
# Blob storage
# -----------------------------------------------------------------------------


class BlobStorageError(SnapSightError):
    """Raised when a storage backend cannot write a blob."""

    default_user_message = "Storage error"


class BlobDeletionError(BlobStorageError):
    """Raised when a stored blob cannot be removed from its backend."""

    default_user_message = "Failed to delete photo file"


# -----------------------------------------------------------------------------
# External services
# -----------------------------------------------------------------------------


class VisionServiceError(SnapSightError):
    """Raised by the vision client when the upstream call fails."""

    default_user_message = "Object detection failed"
