"""Durable storage for the session token."""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

TOKEN_KEY = "auth_token"


class TokenStore:
    """Keeps the bearer token in a small JSON file under ``TOKEN_KEY``.

    Other keys in the file are preserved.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read(self) -> dict:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Unreadable token store, ignoring", extra={"path": str(self.path), "error": str(e)})
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data), encoding="utf-8")
        tmp_path.replace(self.path)

    def get(self) -> str | None:
        token = self._read().get(TOKEN_KEY)
        return token if isinstance(token, str) and token else None

    def set(self, token: str) -> None:
        data = self._read()
        data[TOKEN_KEY] = token
        self._write(data)

    def remove(self) -> None:
        data = self._read()
        if TOKEN_KEY in data:
            del data[TOKEN_KEY]
            self._write(data)
