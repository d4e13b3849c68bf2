"""Vision Language Model client for object detection on uploaded photos."""
import base64
import logging
from typing import Any, Dict, Optional

import httpx

from ...core.config import get_settings
from ...domain.exceptions import VisionServiceError

logger = logging.getLogger(__name__)


DETECTION_PROMPT = (
    "Analyze this image and identify all visible objects in it. Be comprehensive and specific. "
    "For each object, include:\n\n"
    "1. The name of the object\n"
    "2. A confidence score between 0 and 1\n"
    "3. A brief description of the object's appearance\n"
    "4. The category it belongs to (e.g., furniture, electronic, food, clothing, etc.)\n\n"
    "Respond ONLY with a valid JSON array containing objects with this exact structure:\n"
    '[{"name": "object_name", "confidence": 0.95, "description": "brief description", '
    '"category": "object_category"}]\n\n'
    "Do not include any explanations, markdown formatting, or text outside of the JSON array."
)


class VisionDetectionClient:
    """
    Client for an OpenAI-compatible chat completions API with vision support.
    
    This client handles:
    - Encoding image bytes as a data URI
    - Sending a single-turn multimodal detection prompt
    - Extracting the reply text from the completion
    
    Interpreting the reply is left to the caller. Every failure of the call
    itself surfaces as VisionServiceError.
    """
    
    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize the client; unset arguments are read from settings."""
        settings = get_settings()
        self.api_key = api_key if api_key is not None else settings.vision_api_key
        self.api_url = api_url or settings.vision_api_url
        self.model = model or settings.vision_model
        self.max_tokens = max_tokens or settings.vision_max_tokens
        self.timeout = timeout or settings.vision_timeout_seconds
        self._transport = transport
        
        if not self.api_key:
            logger.warning("OPENAI_API_KEY not found in environment variables")
    
    @staticmethod
    def to_data_uri(image_bytes: bytes, mime_type: str) -> str:
        """Encode raw image bytes as a base64 data URI"""
        base64_str = base64.b64encode(image_bytes).decode("utf-8")
        return f"data:{mime_type};base64,{base64_str}"
    
    def build_payload(self, image_bytes: bytes, mime_type: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                {
                    "role": "user",
                    "content": [
                        {
                            "type": "text",
                            "text": DETECTION_PROMPT,
                        },
                        {
                            "type": "image_url",
                            "image_url": {
                                "url": self.to_data_uri(image_bytes, mime_type),
                                "detail": "high",
                            },
                        },
                    ],
                }
            ],
            "max_tokens": self.max_tokens,
        }
    
    async def request_detection(self, image_bytes: bytes, mime_type: str) -> str:
        """
        Ask the vision model to list the objects in an image.
        
        Args:
            image_bytes: Raw image bytes
            mime_type: MIME type of the image (e.g., "image/jpeg")
            
        Returns:
            Raw reply text from the model (non-empty)
            
        Raises:
            VisionServiceError: On missing credentials, transport errors,
                non-2xx responses, or an empty/malformed completion
        """
        if not self.api_key:
            raise VisionServiceError("Vision API key not configured")
        
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = self.build_payload(image_bytes, mime_type)
        
        logger.debug(f"Calling vision API with model: {self.model}")
        
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.api_url, headers=headers, json=payload)
                response.raise_for_status()
                result = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error from vision API: {e.response.status_code} - {e.response.text[:200]}")
            raise VisionServiceError(f"API error: {e.response.status_code}") from e
        except httpx.TimeoutException as e:
            logger.error("Timeout while calling vision API")
            raise VisionServiceError("Vision API timeout") from e
        except httpx.HTTPError as e:
            logger.error(f"Transport error calling vision API: {e}")
            raise VisionServiceError(f"Transport error: {e}") from e
        except ValueError as e:
            # Response body was not JSON
            logger.error(f"Malformed response from vision API: {e}")
            raise VisionServiceError("Malformed response from vision API") from e
        
        content = self._extract_content(result)
        if not content or not content.strip():
            logger.warning("Empty response from vision API")
            raise VisionServiceError("Empty response from vision API")
        
        return content
    
    @staticmethod
    def _extract_content(result: Any) -> Optional[str]:
        """Pull choices[0].message.content out of a completion, or None"""
        if not isinstance(result, dict):
            return None
        choices = result.get("choices")
        if not isinstance(choices, list) or not choices:
            return None
        first = choices[0]
        if not isinstance(first, dict):
            return None
        message = first.get("message")
        if not isinstance(message, dict):
            return None
        content = message.get("content")
        return content if isinstance(content, str) else None
