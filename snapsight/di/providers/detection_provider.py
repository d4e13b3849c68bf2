from typing import TYPE_CHECKING
from ...application.services.object_detection_service import ObjectDetectionService
from ...infrastructure.external.vision_detection_client import VisionDetectionClient

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class DetectionProvider:
    """Object detection provider - vision client plus the adapter around it"""
    
    @staticmethod
    def register(container: "BaseContainer") -> None:
        if not container.has(VisionDetectionClient):
            container.register_singleton(VisionDetectionClient, VisionDetectionClient())
        
        container.register_singleton(
            ObjectDetectionService,
            ObjectDetectionService(vision_client=container.get(VisionDetectionClient)),
        )
