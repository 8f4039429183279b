# Dictionary Adapters
from .cedict import CedictDictionary

__all__ = ["CedictDictionary"]
