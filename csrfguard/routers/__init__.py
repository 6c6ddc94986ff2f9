from csrfguard.routers.csrf import router as csrf_router

__all__ = [
    "csrf_router",
]
