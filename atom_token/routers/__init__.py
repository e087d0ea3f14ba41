from .base import ErrorHandlingBaseRoute
from .system import router as system_router
from .tokens import router as tokens_router

__all__ = (
    "system_router",
    "tokens_router",
    "ErrorHandlingBaseRoute",
)
