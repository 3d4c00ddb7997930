from .registry import SetRegistry

__all__ = ['SetRegistry']
