from __future__ import annotations

from fastapi import Request

from .services.activity_store import ActivityStore


def get_store(request: Request) -> ActivityStore:
    """The store shared by the app; tests replace it via app.dependency_overrides."""
    return request.app.state.store
