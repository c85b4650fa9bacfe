from __future__ import annotations

from fastapi import Request

from imagehost.storage import StorageBackend


def get_storage(request: Request) -> StorageBackend:
    """Active storage backend, set on app.state by create_app()."""
    return request.app.state.storage
