"""
Storage Package

``build_storage`` picks the backend named by ``STORAGE_BACKEND``. The app
keeps the instance in ``app.extensions`` and handlers reach it through
``get_storage``.
"""

from flask import current_app

from academy.storage.base import KINDS, Repository, SessionStore, Storage
from academy.storage.memory import MemoryStorage
from academy.storage.sql import SqlStorage

BACKENDS = {
    'sql': SqlStorage,
    'memory': MemoryStorage,
}

EXTENSION_KEY = 'academy.storage'


def build_storage(backend):
    try:
        storage_class = BACKENDS[backend]
    except KeyError:
        raise ValueError(
            f'Unknown storage backend {backend!r}; expected one of: {", ".join(sorted(BACKENDS))}'
        ) from None
    return storage_class()


def get_storage():
    """Storage bound to the current app."""
    return current_app.extensions[EXTENSION_KEY]


__all__ = [
    'KINDS',
    'Repository',
    'SessionStore',
    'Storage',
    'SqlStorage',
    'MemoryStorage',
    'build_storage',
    'get_storage',
]
