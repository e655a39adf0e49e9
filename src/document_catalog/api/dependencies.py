"""Shared API dependencies."""

from typing import Optional
from fastapi import Header, Request

from ..core.activity_manager import ActivityManager
from ..core.category_manager import CategoryManager
from ..core.document_manager import DocumentManager
from ..core.favorites_manager import FavoritesManager
from ..core.identity import resolve_identity
from ..core.initial_data import InitialDataLoader
from ..core.session_manager import SessionManager
from ..models.session import Identity


def get_current_user(
    x_user_email: Optional[str] = Header(None, alias="X-User-Email"),
    x_user_name: Optional[str] = Header(None, alias="X-User-Name"),
) -> Identity:
    """Resolve the principal from gateway headers; anonymous if absent."""
    return resolve_identity(x_user_email, x_user_name)


def get_document_manager(request: Request) -> DocumentManager:
    return request.app.state.documents


def get_category_manager(request: Request) -> CategoryManager:
    return request.app.state.registry


def get_favorites_manager(request: Request) -> FavoritesManager:
    return request.app.state.favorites


def get_activity_manager(request: Request) -> ActivityManager:
    return request.app.state.activity


def get_session_manager(request: Request) -> SessionManager:
    return request.app.state.sessions


def get_initial_data_loader(request: Request) -> InitialDataLoader:
    return request.app.state.initial_data
