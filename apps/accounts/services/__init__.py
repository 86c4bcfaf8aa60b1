"""Accounts services - login and account creation for admins, serving agents and parents."""

from .user_authentication import authenticate_user
from .user_creation import create_account

__all__ = [
    'authenticate_user',
    'create_account',
]
