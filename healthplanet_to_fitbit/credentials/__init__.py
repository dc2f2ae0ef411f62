"""Credential storage modules."""

from .application import CredentialStore, PersistenceError, persist_rotated_tokens
from .infrastructure import EnvFileCredentialStore, create_env_file_credential_store

__all__ = [
    "CredentialStore",
    "PersistenceError",
    "persist_rotated_tokens",
    "EnvFileCredentialStore",
    "create_env_file_credential_store",
]
