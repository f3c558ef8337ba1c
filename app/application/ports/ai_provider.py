from typing import Protocol


class AIProvider(Protocol):
    async def generate_text(self, prompt: str) -> str:
        ...

    async def generate_from_image(self, prompt: str, image_bytes: bytes, mime_type: str) -> str:
        ...
