from .notifications import notifications_router

__all__ = ["notifications_router"]
