from .factory import get_handler

__all__ = ["get_handler"]
