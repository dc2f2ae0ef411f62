"""``.env`` file implementation of the credential store port."""

from __future__ import annotations

import io
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, List, Mapping

from dotenv import dotenv_values
from dotenv.parser import parse_stream

from ..application.ports import CredentialStore, PersistenceError

logger = logging.getLogger(__name__)


class EnvFileCredentialStore(CredentialStore):
    """Keep credentials as ``KEY=VALUE`` bindings in a dotenv file.

    Keys are matched with the same parser that reads them, so
    ``export KEY=...`` and ``KEY = ...`` bindings are found too. Updates
    rewrite matching bindings in place and keep every other line,
    including comments and blank lines, in its original order. Keys that
    are missing from the file are not appended.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def read_all(self) -> Dict[str, str]:
        values = dotenv_values(self._path)
        return {key: value for key, value in values.items() if value is not None}

    def update(self, values: Mapping[str, str]) -> List[str]:
        try:
            text = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise PersistenceError(f"Failed to read {self._path}: {exc}") from exc

        chunks: List[str] = []
        updated: List[str] = []
        for binding in parse_stream(io.StringIO(text)):
            original = binding.original.string
            if binding.key is None or binding.key not in values:
                chunks.append(original)
                continue
            prefix = "export " if original.lstrip().startswith("export ") else ""
            ending = original[len(original.rstrip("\r\n")):]
            chunks.append(f"{prefix}{binding.key}={values[binding.key]}{ending}")
            if binding.key not in updated:
                updated.append(binding.key)

        missing = [key for key in values if key not in updated]
        if missing:
            logger.warning(
                "Keys not present in %s were not written: %s",
                self._path,
                ", ".join(missing),
            )

        self._write_atomically("".join(chunks))
        return updated

    def _write_atomically(self, content: str) -> None:
        directory = self._path.resolve().parent
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.", dir=directory
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
                    handle.write(content)
                if self._path.exists():
                    os.chmod(tmp_name, self._path.stat().st_mode & 0o777)
                os.replace(tmp_name, self._path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as exc:
            raise PersistenceError(f"Failed to write {self._path}: {exc}") from exc


def create_env_file_credential_store(path: Path | str = ".env") -> CredentialStore:
    """Create a credential store backed by the dotenv file at ``path``."""
    return EnvFileCredentialStore(path)
