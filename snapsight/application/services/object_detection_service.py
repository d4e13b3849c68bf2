"""
Object detection adapter.

Turns the vision model's reply into detected-object records. The reply is
interpreted by an ordered chain of strategies:

1. structured: the reply (minus code fences) is a JSON array of objects
2. keyword_scan: the reply is prose; known object nouns are picked out
3. placeholder: nothing usable came back; two "unknown object" records

detect() never raises. Every outcome names the strategy that produced it
and, for fallbacks, the reason the earlier strategies were skipped.
"""
import json
import logging
import re
from dataclasses import dataclass
from numbers import Real
from typing import Any, Callable, List, Optional, Tuple

from ...domain.constants import DetectedObjectFields, UNCATEGORIZED
from ...domain.exceptions import VisionServiceError
from ...domain.models.detected_object import DetectedObject
from ...infrastructure.external.vision_detection_client import VisionDetectionClient

logger = logging.getLogger(__name__)


# Vocabulary for the keyword scan, in match order
COMMON_OBJECTS: Tuple[str, ...] = (
    "person", "people", "man", "woman", "child", "baby",
    "car", "vehicle", "bicycle", "motorcycle", "bus", "truck",
    "tree", "plant", "flower", "grass", "leaf",
    "building", "house", "window", "door", "wall",
    "table", "chair", "sofa", "bed", "desk",
    "phone", "computer", "laptop", "screen", "keyboard",
    "book", "paper", "pen", "pencil",
    "cup", "glass", "bottle", "plate", "bowl",
    "food", "fruit", "apple", "banana", "orange",
    "dog", "cat", "bird", "animal",
    "sky", "cloud", "sun", "moon", "star",
    "water", "river", "lake", "ocean", "beach",
    "mountain", "hill", "rock", "stone",
    "road", "street", "path", "bridge",
    "light", "lamp", "candle", "fire",
    "bag", "backpack", "suitcase", "box",
    "clock", "watch", "mirror", "picture",
)

KEYWORD_CONFIDENCE = 0.8
MAX_KEYWORD_OBJECTS = 8
PLACEHOLDER_CONFIDENCE = 0.5

_FENCE_PATTERN = re.compile(r"^```[a-zA-Z]*\s*(.*?)\s*```$", re.DOTALL)


class DetectionStrategy:
    """Names of the strategies that can produce a detection outcome"""
    STRUCTURED = "structured"
    KEYWORD_SCAN = "keyword_scan"
    PLACEHOLDER = "placeholder"


@dataclass(frozen=True)
class DetectionOutcome:
    """Detected objects tagged with the strategy that produced them"""
    objects: List[DetectedObject]
    strategy: str
    fallback_reason: Optional[str] = None


ReplyStrategy = Callable[[str], Optional[DetectionOutcome]]


def placeholder_objects() -> List[DetectedObject]:
    """The fixed pair of records returned when nothing usable came back"""
    return [
        DetectedObject(
            name=f"unknown_object_{index}",
            confidence=PLACEHOLDER_CONFIDENCE,
            description="Object detected but not identified",
        )
        for index in (1, 2)
    ]


def strip_code_fence(content: str) -> str:
    """Remove a surrounding ``` or ```json fence, if any"""
    cleaned = content.strip()
    match = _FENCE_PATTERN.match(cleaned)
    if match:
        return match.group(1).strip()
    return cleaned


class ObjectDetectionService:
    """Sends images to the vision model and normalizes what comes back"""
    
    def __init__(self, vision_client: VisionDetectionClient) -> None:
        self.vision_client = vision_client
    
    def reply_strategies(self) -> List[ReplyStrategy]:
        """Reply interpreters in order of precedence"""
        return [
            self._parse_structured_reply,
            self._scan_keywords,
        ]
    
    async def detect(self, image_bytes: bytes, mime_type: str) -> DetectionOutcome:
        """
        Detect objects in an image.
        
        Args:
            image_bytes: Raw image bytes
            mime_type: MIME type of the image
            
        Returns:
            DetectionOutcome; never raises
        """
        try:
            reply = await self.vision_client.request_detection(image_bytes, mime_type)
        except VisionServiceError as e:
            logger.warning(f"Vision API call failed, using placeholder objects: {e.message}")
            return self._placeholder(e.message)
        except Exception as e:
            logger.error(f"Unexpected error calling vision API: {e}", exc_info=True)
            return self._placeholder(f"unexpected error: {e}")
        
        try:
            return self.interpret_reply(reply)
        except Exception as e:
            logger.error(f"Unexpected error interpreting vision reply: {e}", exc_info=True)
            return self._placeholder(f"unexpected error: {e}")
    
    def interpret_reply(self, reply: str) -> DetectionOutcome:
        """Run the reply through the strategy chain"""
        if not reply or not reply.strip():
            return self._placeholder("empty reply")
        
        for strategy in self.reply_strategies():
            outcome = strategy(reply)
            if outcome is not None:
                return outcome
        return self._placeholder("no strategy accepted the reply")
    
    def _parse_structured_reply(self, reply: str) -> Optional[DetectionOutcome]:
        """
        Parse the reply as a JSON array of detected objects.
        
        Returns None when the reply is not JSON at all, so the next strategy
        gets a chance. JSON of the wrong shape ends the chain with the
        placeholder set.
        """
        try:
            parsed = json.loads(strip_code_fence(reply))
        except ValueError:
            logger.info("Vision reply is not JSON, falling back to keyword scan")
            return None
        
        if not isinstance(parsed, list):
            logger.warning("Vision reply is JSON but not an array")
            return self._placeholder("reply is not a JSON array")
        
        objects = [obj for obj in (self._normalize(item) for item in parsed) if obj is not None]
        if parsed and not objects:
            logger.warning("Vision reply array holds no valid object records")
            return self._placeholder("reply array holds no valid object records")
        
        logger.debug(f"Detected objects: {[obj.name for obj in objects]}")
        return DetectionOutcome(objects=objects, strategy=DetectionStrategy.STRUCTURED)
    
    def _scan_keywords(self, reply: str) -> DetectionOutcome:
        """Pick known object nouns out of a prose reply"""
        lowered = reply.lower()
        matches = [noun for noun in COMMON_OBJECTS if noun in lowered][:MAX_KEYWORD_OBJECTS]
        objects = [
            DetectedObject(
                name=noun,
                confidence=KEYWORD_CONFIDENCE,
                description=f"Detected {noun} in the image",
            )
            for noun in matches
        ]
        return DetectionOutcome(
            objects=objects,
            strategy=DetectionStrategy.KEYWORD_SCAN,
            fallback_reason="reply is not JSON",
        )
    
    def _normalize(self, item: Any) -> Optional[DetectedObject]:
        """Build a record from one array element, or None if it is unusable"""
        if not isinstance(item, dict):
            return None
        
        name = item.get(DetectedObjectFields.NAME)
        confidence = item.get(DetectedObjectFields.CONFIDENCE)
        if not isinstance(name, str) or not name.strip():
            return None
        if isinstance(confidence, bool) or not isinstance(confidence, Real):
            return None
        try:
            confidence = min(1.0, max(0.0, float(confidence)))
        except (OverflowError, ValueError):
            return None
        
        description = item.get(DetectedObjectFields.DESCRIPTION)
        category = item.get(DetectedObjectFields.CATEGORY)
        return DetectedObject(
            name=name,
            confidence=confidence,
            description=description if isinstance(description, str) else "",
            category=category if isinstance(category, str) and category.strip() else UNCATEGORIZED,
        )
    
    @staticmethod
    def _placeholder(reason: str) -> DetectionOutcome:
        return DetectionOutcome(
            objects=placeholder_objects(),
            strategy=DetectionStrategy.PLACEHOLDER,
            fallback_reason=reason,
        )
