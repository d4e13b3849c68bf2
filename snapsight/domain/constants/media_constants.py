"""
Shared constants for image uploads and blob placement.

Used by the ingest use case, the storage backends and the uploads route.
"""

DEFAULT_IMAGE_MIME = "image/jpeg"
DEFAULT_IMAGE_EXTENSION = ".jpg"

# URL path under which locally stored blobs are served
LOCAL_UPLOAD_URL_PREFIX = "/uploads"

# Category assigned to detected objects the model did not categorize
UNCATEGORIZED = "Uncategorized"
