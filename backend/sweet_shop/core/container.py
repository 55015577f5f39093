"""
Application container: the collaborators one app instance is built from.

``create_app`` assembles an :class:`AppContainer` and stores it in
``app.extensions["sweet_shop"]``. Request handlers obtain services through
the helpers below; each request borrows one SQLAlchemy session, opened
lazily and closed on app-context teardown.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from flask import Flask, current_app, g
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from sweet_shop.core.config import Settings
from sweet_shop.domain.interfaces import IPasswordHasher, ITokenSigner
from sweet_shop.repositories.sweet_repository import SweetRepository
from sweet_shop.repositories.user_repo import UserRepository
from sweet_shop.services.auth_service import AccessService
from sweet_shop.services.inventory_service import InventoryService

EXTENSION_KEY = "sweet_shop"


@dataclass
class AppContainer:
    settings: Settings
    engine: Engine
    session_factory: sessionmaker
    hasher: IPasswordHasher
    signer: ITokenSigner

    @property
    def token_ttl(self) -> timedelta:
        return timedelta(hours=self.settings.jwt_expiration_hours)


def get_container(app: Optional[Flask] = None) -> AppContainer:
    return (app or current_app).extensions[EXTENSION_KEY]


def get_db_session() -> Session:
    """Return the request's session, opening it on first use."""
    if "db_session" not in g:
        g.db_session = get_container().session_factory()
    return g.db_session


def close_db_session(exc: Optional[BaseException] = None) -> None:
    session = g.pop("db_session", None)
    if session is not None:
        if exc is not None:
            session.rollback()
        session.close()


def get_inventory_service() -> InventoryService:
    return InventoryService(SweetRepository(get_db_session()))


def get_access_service() -> AccessService:
    container = get_container()
    return AccessService(
        UserRepository(get_db_session()),
        container.hasher,
        container.signer,
        token_ttl=container.token_ttl,
    )
