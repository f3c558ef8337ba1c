# Routers package
from . import startup_router
from . import design_router
from . import chat_router
from . import users_router

__all__ = [
    "startup_router",
    "design_router",
    "chat_router",
    "users_router",
]
