"""
Account checks against the Authentication table.
"""
from __future__ import annotations

import hmac
from dataclasses import dataclass

from app.core.cache import ResponseCache, cached, login_key
from app.core.errors import (
    AccountInactiveError,
    AccountNotFoundError,
    IncorrectPasswordError,
    ValidationError,
)
from app.gateway import tables
from app.gateway.records import AuthAccount
from app.gateway.repository import OutreachRepository


@dataclass
class LoginProfile:
    full_name: str
    email: str


def _accounts(repo: OutreachRepository) -> list[AuthAccount]:
    return repo.load_one(tables.AUTHENTICATION)


def check_login(email: str, repo: OutreachRepository) -> bool:
    """SSO login: the email must belong to an active account."""
    matches = [a for a in _accounts(repo) if a.email == email]
    if not matches:
        raise AccountNotFoundError(email)
    if not any(a.is_active for a in matches):
        raise AccountInactiveError(email)
    return True


def login(email: str, repo: OutreachRepository, cache: ResponseCache) -> bool:
    if not email:
        raise ValidationError.missing(["email"])
    return cached(cache, login_key(email), lambda: check_login(email, repo))


def manual_login(email: str, password: str, repo: OutreachRepository) -> LoginProfile:
    missing = [name for name, value in (("email", email), ("password", password)) if not value]
    if missing:
        raise ValidationError.missing(missing)

    found = False
    is_active = False
    correct_password = False
    for account in _accounts(repo):
        if account.email != email:
            continue
        found = True
        is_active = account.is_active
        correct_password = hmac.compare_digest(account.password.encode(), password.encode())
        if is_active and correct_password:
            return LoginProfile(
                full_name=account.display_name or "N/A",
                email=account.email or "N/A",
            )

    if not found:
        raise AccountNotFoundError(email)
    if not is_active:
        raise AccountInactiveError(email)
    raise IncorrectPasswordError()
