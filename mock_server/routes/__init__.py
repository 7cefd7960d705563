from .ai_mock import router as ai_mock_router
from .health import router as health_router
from .util import router as util_router

__all__ = ["ai_mock_router", "health_router", "util_router"]
