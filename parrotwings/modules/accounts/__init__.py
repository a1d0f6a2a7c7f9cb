"""Account domain services and models."""

from .models import Account, AccountCreateInput, AccountListQuery, AccountPage
from .service import AccountService, normalize_email
from .exceptions import (
    AccountError,
    AccountAlreadyExistsError,
    AccountNotFoundError,
    InvalidEmailError,
)

__all__ = [
    "Account",
    "AccountCreateInput",
    "AccountListQuery",
    "AccountPage",
    "AccountService",
    "AccountError",
    "AccountAlreadyExistsError",
    "AccountNotFoundError",
    "InvalidEmailError",
    "normalize_email",
]
