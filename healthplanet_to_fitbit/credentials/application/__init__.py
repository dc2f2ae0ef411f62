"""Application layer for credential storage."""

from .persistence import persist_rotated_tokens
from .ports import CredentialStore, PersistenceError

__all__ = ["CredentialStore", "PersistenceError", "persist_rotated_tokens"]
