"""Database models."""

from indexer.models.smart_account import SmartAccount
from indexer.models.smart_account_authenticator import SmartAccountAuthenticator

__all__ = [
    "SmartAccount",
    "SmartAccountAuthenticator",
]
