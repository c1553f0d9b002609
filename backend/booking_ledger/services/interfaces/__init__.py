"""
Service interfaces for dependency inversion.
Allows swapping implementations without changing business logic.
"""

from .storage import StorageAdapter, dump_bookings, find_duplicate_id

__all__ = ['StorageAdapter', 'dump_bookings', 'find_duplicate_id']
