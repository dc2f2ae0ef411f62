"""Infrastructure helpers for credential storage."""

from .env_file import EnvFileCredentialStore, create_env_file_credential_store

__all__ = ["EnvFileCredentialStore", "create_env_file_credential_store"]
