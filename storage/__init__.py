from .base import Storage
from .memory import MemStorage
from .sql import SqlStorage
from .seed import seed_demo_data

__all__ = [
    "Storage",
    "MemStorage",
    "SqlStorage",
    "seed_demo_data",
]
