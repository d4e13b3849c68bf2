"""Constants for Photo document field names"""


class PhotoFields:
    """Top-level field names of a photo document"""
    ID = "id"
    FILENAME = "filename"
    FILE_URL = "fileUrl"
    IS_LOCAL_STORAGE = "isLocalStorage"
    STORAGE_BACKEND = "storageBackend"
    DESCRIPTION = "description"
    METADATA = "metadata"
    CREATED_AT = "created_at"
    
    # MongoDB specific
    MONGO_ID = "_id"  # MongoDB's internal _id field (holds the photo id)


class PhotoMetadataFields:
    """Field names inside the embedded metadata document"""
    ID = "id"
    ORIGINAL_NAME = "originalName"
    FILENAME = "filename"
    FILE_URL = "fileUrl"
    IS_LOCAL_STORAGE = "isLocalStorage"
    STORAGE_BACKEND = "storageBackend"
    SIZE = "size"
    MIMETYPE = "mimetype"
    DESCRIPTION = "description"
    DETECTED_OBJECTS = "detectedObjects"
    OBJECT_CATEGORIES = "objectCategories"
    ANALYSIS_TIMESTAMP = "analysisTimestamp"
    UPLOADED_AT = "uploadedAt"
    ERROR = "error"


class DetectedObjectFields:
    """Field names of a detected-object record"""
    NAME = "name"
    CONFIDENCE = "confidence"
    DESCRIPTION = "description"
    CATEGORY = "category"
