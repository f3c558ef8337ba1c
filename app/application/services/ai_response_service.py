from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Type
import logging

from pydantic import BaseModel, ValidationError

from ..ports.ai_provider import AIProvider
from ...media_utils import ImagePayloadError, decode_image_payload
from ...schemas.chat.chat import Persona, PersonaReply
from ...schemas.design.design import DesignRoastResult
from ...schemas.startup.startup import StartupAnalysisResult
from . import prompts
from .fallback import FallbackGenerator
from .response_normalizer import (
    ResponseParseError,
    normalize_design_roast,
    normalize_persona_reply,
    normalize_startup_analysis,
)

logger = logging.getLogger(__name__)


@dataclass
class AIResponseService:
    """Runs a request through Gemini and masks every model failure.

    ``ai_provider`` is ``None`` in simulation mode (no API key). Whatever
    happens upstream, callers receive a validated result of the requested
    shape; only the content differs between model and fallback output.
    """

    ai_provider: Optional[AIProvider]
    fallback: FallbackGenerator = field(default_factory=FallbackGenerator)
    allowed_image_types: List[str] = field(default_factory=lambda: ["image/jpeg", "image/png", "image/webp"])

    @property
    def simulation_mode(self) -> bool:
        return self.ai_provider is None

    async def analyze_startup(self, idea: str) -> StartupAnalysisResult:
        def fallback() -> Dict[str, Any]:
            return self.fallback.startup_analysis(idea)

        if self.ai_provider is None:
            return StartupAnalysisResult(**fallback())

        try:
            text = await self.ai_provider.generate_text(prompts.build_startup_prompt(idea))
        except Exception as e:
            logger.error(f"Error calling Gemini API: {e}")
            return StartupAnalysisResult(**fallback())

        return self._normalize(text, normalize_startup_analysis, StartupAnalysisResult, fallback)

    async def roast_design(self, image_data: Optional[str]) -> DesignRoastResult:
        fallback = self.fallback.design_roast

        if self.ai_provider is None or not image_data:
            return DesignRoastResult(**fallback())

        try:
            image_bytes, mime_type = decode_image_payload(image_data)
        except ImagePayloadError as e:
            logger.warning(f"Unusable design image, using simulated roast: {e}")
            return DesignRoastResult(**fallback())
        if mime_type not in self.allowed_image_types:
            logger.warning(f"Image type {mime_type} not allowed, using simulated roast")
            return DesignRoastResult(**fallback())

        try:
            text = await self.ai_provider.generate_from_image(prompts.build_design_prompt(), image_bytes, mime_type)
        except Exception as e:
            logger.error(f"Error calling Gemini Vision API: {e}")
            return DesignRoastResult(**fallback())

        return self._normalize(text, normalize_design_roast, DesignRoastResult, fallback)

    async def persona_reply(self, message: str, persona: Persona) -> PersonaReply:
        def fallback() -> Dict[str, Any]:
            return self.fallback.persona_reply(persona)

        if self.ai_provider is None:
            return PersonaReply(**fallback())

        try:
            text = await self.ai_provider.generate_text(prompts.build_persona_prompt(message, persona))
        except Exception as e:
            logger.error(f"Error calling Gemini API for persona: {e}")
            return PersonaReply(**fallback())

        return self._normalize(text, normalize_persona_reply, PersonaReply, fallback)

    def _normalize(
        self,
        text: str,
        normalizer: Callable[[str], Dict[str, Any]],
        schema: Type[BaseModel],
        fallback: Callable[[], Dict[str, Any]],
    ):
        try:
            return schema(**normalizer(text))
        except ResponseParseError as e:
            logger.error(f"Failed to parse JSON from Gemini response: {e}; raw: {text!r}")
        except ValidationError as e:
            logger.error(f"Gemini response does not match {schema.__name__}: {e.errors()}")
        return schema(**fallback())
