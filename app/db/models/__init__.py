# Models package (re-export feature modules for stable imports)
from .analysis.startup_analysis import StartupAnalysis
from .analysis.design_roast import DesignRoast
from .chat.chat_message import ChatMessage
from .users.profile import UserProfile

__all__ = [
    "StartupAnalysis",
    "DesignRoast",
    "ChatMessage",
    "UserProfile",
]
