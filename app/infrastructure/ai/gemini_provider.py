import google.generativeai as genai
from google.generativeai.types import HarmBlockThreshold, HarmCategory

from ...core.config import Settings
from ...application.ports.ai_provider import AIProvider

SAFETY_SETTINGS = {
    HarmCategory.HARM_CATEGORY_HARASSMENT: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
    HarmCategory.HARM_CATEGORY_HATE_SPEECH: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
}


class GeminiProvider(AIProvider):
    def __init__(self, settings: Settings) -> None:
        genai.configure(api_key=settings.GEMINI_API_KEY)
        self.text_model = genai.GenerativeModel(settings.GEMINI_TEXT_MODEL, safety_settings=SAFETY_SETTINGS)
        self.vision_model = genai.GenerativeModel(settings.GEMINI_VISION_MODEL, safety_settings=SAFETY_SETTINGS)

    async def generate_text(self, prompt: str) -> str:
        result = await self.text_model.generate_content_async(prompt)
        # .text raises ValueError when the candidate was blocked
        return result.text

    async def generate_from_image(self, prompt: str, image_bytes: bytes, mime_type: str) -> str:
        result = await self.vision_model.generate_content_async([
            prompt,
            {"mime_type": mime_type, "data": image_bytes},
        ])
        return result.text
