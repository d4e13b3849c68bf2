from .photo_controller import router as photo_router
from .uploads_controller import router as uploads_router


__all__ = ["photo_router", "uploads_router"]
