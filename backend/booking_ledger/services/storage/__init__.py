"""
Storage slot backends.
"""

from .file_storage import FileStorage
from .memory_storage import MemoryStorage
from .redis_storage import RedisStorage

__all__ = ['FileStorage', 'MemoryStorage', 'RedisStorage']
