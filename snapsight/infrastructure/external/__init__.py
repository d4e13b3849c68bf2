"""External service clients for communicating with external systems"""

from .vision_detection_client import VisionDetectionClient

__all__ = [
    "VisionDetectionClient",
]
