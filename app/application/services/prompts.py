"""Prompt templates sent to the Gemini models."""

from ...schemas.chat.chat import Persona

PERSONA_DESCRIPTIONS = {
    Persona.PAST: (
        "You are my past self from 5 years ago, full of optimism yet inexperienced. "
        "Offer advice with youthful enthusiasm."
    ),
    Persona.PRESENT: (
        "You are my present self, providing balanced and practical insights based on current challenges."
    ),
    Persona.FUTURE: (
        "You are my future self from 5 years ahead, wise and reflective, offering guidance with foresight."
    ),
}

PERSONA_WORD_LIMIT = 150


def build_startup_prompt(idea: str) -> str:
    return f"""
    As an AI startup analyst, evaluate this business idea in detail.
    Idea: "{idea.strip()}"

    Provide a response in the following JSON format:
    {{
        "analysis": "Your detailed analysis (2-3 sentences)",
        "marketFit": "A number from 1-100 representing market potential",
        "techStack": ["3-5 technologies suitable for implementing this idea"],
        "competitors": ["3-5 existing competitors or similar products"],
        "emoji": "A single emoji representing your overall sentiment"
    }}
    Provide only the JSON with no extra text.
    """


def build_design_prompt() -> str:
    return """
    You are an expert UI/UX design critic. Analyze this design image and provide detailed feedback.
    Return your response in the following JSON format:
    {
        "title": "A catchy title summarizing your critique",
        "score": "A number from 1-10 representing overall design quality",
        "feedback": [
            {"type": "positive", "text": "Something good about the design"},
            {"type": "negative", "text": "A critical point for improvement"},
            {"type": "warning", "text": "A cautionary point about potential issues"}
        ],
        "suggestedFix": "A brief paragraph suggesting improvements"
    }
    Feedback must contain exactly 3 items; type is one of "positive", "negative", "warning".
    Provide only the JSON with no additional text.
    """


def build_persona_prompt(message: str, persona: Persona) -> str:
    description = PERSONA_DESCRIPTIONS.get(persona, PERSONA_DESCRIPTIONS[Persona.PRESENT])
    return f"""
    {description}

    My message: "{message.strip()}"

    Provide a thoughtful, conversational response in less than {PERSONA_WORD_LIMIT} words.
    """
