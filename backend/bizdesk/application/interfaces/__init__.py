from .business_store import BusinessStore, CounterKind
from .document_renderer import DocumentRenderer

__all__ = [
    "BusinessStore",
    "CounterKind",
    "DocumentRenderer",
]
