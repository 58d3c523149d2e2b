from .engine import create_engine, create_session_factory, init_models
from .models import Base, Setting, TrackedItem

__all__ = [
    "Base",
    "Setting",
    "TrackedItem",
    "create_engine",
    "create_session_factory",
    "init_models",
]
