"""Persistance de la session entre deux lancements de l'application."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import aiofiles
import aiofiles.os

from orea.config import DEFAULT_SESSION_NAMESPACE, OreaConfig
from orea.state import SessionState

KEY_IS_AUTHENTICATED = "isAuthenticated"
KEY_USERNAME = "username"


class SessionStoreError(RuntimeError):
    """Erreur levée lorsque le stockage de session est illisible ou inaccessible."""


class SessionStore:
    """Stockage clé-valeur de la session dans un fichier JSON.

    Le fichier contient un objet par espace de noms ; seul celui de la
    session est lu et modifié, les autres sont conservés tels quels.
    """

    def __init__(self, path: str | os.PathLike[str], *, namespace: str = DEFAULT_SESSION_NAMESPACE) -> None:
        self._path = Path(path)
        self._namespace = namespace

    @classmethod
    def from_config(cls, config: OreaConfig) -> SessionStore:
        return cls(config.session_path, namespace=config.session_namespace)

    @property
    def path(self) -> Path:
        return self._path

    async def restore(self) -> SessionState | None:
        """Relit la session persistée ; None si aucune session n'a été enregistrée."""
        values = (await self._read_all()).get(self._namespace)
        if not isinstance(values, dict):
            return None

        username = values.get(KEY_USERNAME)
        if values.get(KEY_IS_AUTHENTICATED) is True and isinstance(username, str):
            return SessionState.authenticated(username)
        return None

    async def save(self, username: str) -> None:
        """Enregistre une session authentifiée pour ``username``."""
        data = await self._read_all()
        data[self._namespace] = {KEY_IS_AUTHENTICATED: True, KEY_USERNAME: username}
        await self._write_all(data)

    async def clear(self) -> None:
        """Supprime les deux clés de session. Sans effet si rien n'est stocké."""
        data = await self._read_all()
        values = data.get(self._namespace)
        if values is None:
            return

        if isinstance(values, dict):
            values.pop(KEY_IS_AUTHENTICATED, None)
            values.pop(KEY_USERNAME, None)
        if not isinstance(values, dict) or not values:
            del data[self._namespace]
        await self._write_all(data)

    # ----------------------------------------------------------------- interne -
    async def _read_all(self) -> dict[str, Any]:
        try:
            async with aiofiles.open(self._path, mode="r", encoding="utf-8") as handle:
                content = await handle.read()
        except FileNotFoundError:
            return {}
        except UnicodeDecodeError as exc:
            raise SessionStoreError(f"Fichier de session corrompu : {self._path}") from exc
        except OSError as exc:
            raise SessionStoreError(f"Lecture de la session impossible : {self._path}") from exc

        if not content.strip():
            return {}
        try:
            data = json.loads(content)
        except json.JSONDecodeError as exc:
            raise SessionStoreError(f"Fichier de session corrompu : {self._path}") from exc
        if not isinstance(data, dict):
            raise SessionStoreError(f"Fichier de session corrompu : {self._path}")
        return data

    async def _write_all(self, data: dict[str, Any]) -> None:
        try:
            if not data:
                try:
                    await aiofiles.os.remove(self._path)
                except FileNotFoundError:
                    pass
                return

            await aiofiles.os.makedirs(self._path.parent, exist_ok=True)
            temporary = self._path.with_name(f"{self._path.name}.tmp")
            async with aiofiles.open(temporary, mode="w", encoding="utf-8") as handle:
                await handle.write(json.dumps(data, indent=2, ensure_ascii=False))
            await aiofiles.os.replace(temporary, self._path)
        except OSError as exc:
            raise SessionStoreError(f"Écriture de la session impossible : {self._path}") from exc
