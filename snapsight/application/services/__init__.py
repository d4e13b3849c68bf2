from .object_detection_service import (
    COMMON_OBJECTS,
    DetectionOutcome,
    DetectionStrategy,
    ObjectDetectionService,
)

__all__ = [
    "COMMON_OBJECTS",
    "DetectionOutcome",
    "DetectionStrategy",
    "ObjectDetectionService",
]
