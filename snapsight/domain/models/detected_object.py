# Standard library imports
from dataclasses import dataclass
from typing import Any, Dict

# Local application imports
from ..constants import DetectedObjectFields, UNCATEGORIZED


@dataclass(frozen=True)
class DetectedObject:
    """
    One normalized entry describing an object found in an image.
    
    Confidence is always kept within [0, 1].
    """
    name: str
    confidence: float
    description: str = ""
    category: str = UNCATEGORIZED
    
    def __post_init__(self) -> None:
        """Business validations"""
        if not self.name or not self.name.strip():
            raise ValueError("Detected object name is required")
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"Confidence must lie in [0, 1], got {self.confidence}")
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            DetectedObjectFields.NAME: self.name,
            DetectedObjectFields.CONFIDENCE: self.confidence,
            DetectedObjectFields.DESCRIPTION: self.description,
            DetectedObjectFields.CATEGORY: self.category,
        }
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DetectedObject":
        return cls(
            name=data.get(DetectedObjectFields.NAME, ""),
            confidence=float(data.get(DetectedObjectFields.CONFIDENCE, 0.0)),
            description=data.get(DetectedObjectFields.DESCRIPTION) or "",
            category=data.get(DetectedObjectFields.CATEGORY) or UNCATEGORIZED,
        )
