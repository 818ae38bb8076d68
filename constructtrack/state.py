"""
The one in-process ProjectStore served by the API.

Routers receive it through Depends(get_store); tests override that
dependency with a fresh store.
"""

from .store import ProjectStore

_store = ProjectStore()


def get_store() -> ProjectStore:
    return _store
