from .exchanges import exchanges_router

__all__ = ["exchanges_router"]
