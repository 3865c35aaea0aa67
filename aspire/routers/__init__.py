from .bundles import router as bundles_router
from .results import router as results_router
from .tests import router as tests_router
from .uploads import router as uploads_router
from .users import router as users_router

__all__ = [
    "bundles_router",
    "results_router",
    "tests_router",
    "uploads_router",
    "users_router",
]
