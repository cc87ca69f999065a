from .profiles import profiles_router

__all__ = ["profiles_router"]
