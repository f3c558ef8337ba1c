import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ...schemas.chat.chat import Persona

FALLBACK_EMOJIS = ["🤔", "🚀", "💡", "⚠"]

FALLBACK_TECH_STACK = [
    "React Native (Mobile App)",
    "Firebase (Backend + Auth)",
    "Gemini API (Product Recs)",
]

FALLBACK_COMPETITORS = [
    "Amazon Alexa Shopping",
    "Google Shopping",
    "ShopSense AI (startup)",
]

FALLBACK_FEEDBACK = [
    {"type": "negative", "text": "Try a more subtle color palette"},
    {"type": "warning", "text": "Typography hierarchy needs work"},
    {"type": "positive", "text": "Layout structure is good, but needs more whitespace"},
    {"type": "negative", "text": "Contrast ratio fails accessibility standards"},
    {"type": "warning", "text": "Consider a more consistent button style"},
    {"type": "positive", "text": "Visual hierarchy guides user attention well"},
]

FALLBACK_PERSONA_RESPONSES = {
    Persona.PAST: [
        "Remember when you were just starting out and full of hope? Those days, though uncertain, set you on an incredible journey.",
        "I used to worry about everything, but every mistake taught me something valuable.",
        "Back then, I was nervous but eager. Trust that the future holds growth.",
    ],
    Persona.PRESENT: [
        "Your focus now is key; break tasks into small, achievable steps and keep moving forward.",
        "Facing challenges now shapes you. Stay pragmatic and celebrate small wins.",
        "The present is all about learning and adaptation. Keep your balance.",
    ],
    Persona.FUTURE: [
        "Every risk you take today builds a brighter future. Continue pushing forward!",
        "Reflecting from the future, I can say that persistence pays off. Keep learning and evolving.",
        "I see your future as rich with achievements. Every setback was a lesson.",
    ],
}


@dataclass
class FallbackGenerator:
    """Simulated responses used when Gemini is unavailable or unusable.

    Output has exactly the shape of the model-backed results. Pass a seeded
    ``random.Random`` for reproducible output.
    """

    rng: random.Random = field(default_factory=random.Random)

    @classmethod
    def seeded(cls, seed: Optional[int]) -> "FallbackGenerator":
        return cls(rng=random.Random(seed))

    def startup_analysis(self, idea: str) -> Dict[str, Any]:
        subject = "personal shopping assistant" if "assistant" in idea.lower() else "product"
        return {
            "analysis": (
                f"Developing an AI-driven {subject} has potential, but the market is competitive. "
                "Focus on creating a unique value proposition to stand out."
            ),
            "marketFit": self.rng.randint(50, 79),
            "techStack": list(FALLBACK_TECH_STACK),
            "competitors": list(FALLBACK_COMPETITORS),
            "emoji": self.rng.choice(FALLBACK_EMOJIS),
        }

    def design_roast(self) -> Dict[str, Any]:
        feedback: List[Dict[str, str]] = [dict(item) for item in self.rng.sample(FALLBACK_FEEDBACK, 3)]
        return {
            "title": "Yikes, that's a lot of gradients!",
            "score": self.rng.randint(2, 7),
            "feedback": feedback,
            "suggestedFix": (
                "Try using a monochromatic color scheme with a single accent color. "
                "Reduce the number of font styles and increase padding."
            ),
        }

    def persona_reply(self, persona: Persona) -> Dict[str, Any]:
        options = FALLBACK_PERSONA_RESPONSES.get(persona, FALLBACK_PERSONA_RESPONSES[Persona.PRESENT])
        return {"response": self.rng.choice(options)}
