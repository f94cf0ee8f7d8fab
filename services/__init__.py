"""Service layer wiring."""

from __future__ import annotations

from dataclasses import dataclass

from flask import current_app

from config import Settings

from .accounts import AccountService
from .catalog import CatalogService
from .credentials import CredentialHasher
from .directory import UserDirectory
from .notifications import AbstractNotifier, build_notifier
from .tokens import TokenService

EXTENSION_KEY = "shop_services"


@dataclass(frozen=True)
class Services:
    """Service instances built once per application."""

    settings: Settings
    tokens: TokenService
    accounts: AccountService
    catalog: CatalogService


def build_services(settings: Settings, notifier: AbstractNotifier | None = None) -> Services:
    tokens = TokenService(settings)
    accounts = AccountService(
        settings=settings,
        directory=UserDirectory(),
        hasher=CredentialHasher(settings.password_hash_method),
        tokens=tokens,
        notifier=notifier or build_notifier(settings),
    )
    return Services(
        settings=settings,
        tokens=tokens,
        accounts=accounts,
        catalog=CatalogService(),
    )


def get_services() -> Services:
    """Return the services registered on the current application."""

    return current_app.extensions[EXTENSION_KEY]


__all__ = ["EXTENSION_KEY", "Services", "build_services", "get_services"]
