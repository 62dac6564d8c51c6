"""
Storage module.

Read and write clients for the content store (Sanity, or in memory).
"""

from src.storage.base import ContentClient, WriteClient, StoreError
from src.storage.sanity import SanityClient, SanityWriteClient
from src.storage.memory import MemoryContentStore

__all__ = [
    "ContentClient",
    "WriteClient",
    "StoreError",
    "SanityClient",
    "SanityWriteClient",
    "MemoryContentStore",
]
