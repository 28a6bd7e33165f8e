"""Contrôleur de la liste d'utilisateurs."""

from __future__ import annotations

import asyncio
import logging

from orea.controllers.base import Observable
from orea.errors import ApiError, ErrorKind
from orea.models import User
from orea.services.api_client import CancelToken
from orea.services.user_repository import UserRepository
from orea.state import ResourceListState

logger = logging.getLogger(__name__)

UsersState = ResourceListState[User]


def find_user(users: tuple[User, ...] | list[User], user_id: int) -> User | None:
    """Retourne l'utilisateur d'identifiant ``user_id`` s'il est présent."""
    return next((user for user in users if user.id == user_id), None)


class UsersController(Observable[UsersState]):
    """Replie les résultats du dépôt dans un ``ResourceListState``.

    Les opérations sont sérialisées : un second appel attend la fin du
    premier. Aucune opération n'est relancée automatiquement et aucune
    ``ApiError`` ne sort du contrôleur.
    """

    def __init__(self, repository: UserRepository) -> None:
        super().__init__(ResourceListState())
        self._repository = repository
        self._lock = asyncio.Lock()
        self.last_error: ApiError | None = None

    async def fetch_all(self, *, cancel_token: CancelToken | None = None) -> None:
        async with self._lock:
            self._set_state(self.state.started())
            try:
                users = await self._repository.list_users(cancel_token=cancel_token)
            except ApiError as exc:
                if exc.kind is ErrorKind.CANCELLED:
                    self._set_state(self.state.idle())
                    return
                self._fail(exc)
                return
            self._set_state(self.state.loaded(users))

    async def create(self, user: User, *, cancel_token: CancelToken | None = None) -> bool:
        async with self._lock:
            try:
                created = await self._repository.create_user(user, cancel_token=cancel_token)
            except ApiError as exc:
                return self._fail(exc)
            self._set_state(self.state.with_items((*self.state.items, created)))
            return True

    async def update(self, user_id: int, user: User, *, cancel_token: CancelToken | None = None) -> bool:
        async with self._lock:
            try:
                updated = await self._repository.update_user(user_id, user, cancel_token=cancel_token)
            except ApiError as exc:
                return self._fail(exc)
            self._set_state(
                self.state.with_items(updated if item.id == user_id else item for item in self.state.items)
            )
            return True

    async def delete(self, user_id: int, *, cancel_token: CancelToken | None = None) -> bool:
        async with self._lock:
            try:
                await self._repository.delete_user(user_id, cancel_token=cancel_token)
            except ApiError as exc:
                return self._fail(exc)
            self._set_state(self.state.with_items(item for item in self.state.items if item.id != user_id))
            return True

    def clear_error(self) -> None:
        self.last_error = None
        self._set_state(self.state.without_error())

    def _fail(self, exc: ApiError) -> bool:
        # Une requête annulée ne modifie pas l'état.
        if exc.kind is ErrorKind.CANCELLED:
            return False

        logger.warning("Opération sur les utilisateurs en échec : %r", exc)
        self.last_error = exc
        self._set_state(self.state.failed(exc.describe()))
        return False
