"""Façade CRUD typée sur la ressource ``/users``."""

from __future__ import annotations

from typing import Any, Iterable

import httpx

from orea.errors import ApiError, ErrorKind
from orea.models import User
from orea.services.api_client import ApiClient, CancelToken

USERS_PATH = "/users"


def _decode_error(detail: object) -> ApiError:
    return ApiError(ErrorKind.UNKNOWN, f"Réponse invalide : {detail}")


def _json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise _decode_error(exc) from exc


def _decode_user(payload: Any) -> User:
    try:
        return User.from_json(payload)
    except ValueError as exc:
        raise _decode_error(exc) from exc


def filter_users(users: Iterable[User], query: str) -> list[User]:
    """Filtre sur le nom, l'e-mail et l'entreprise, sans tenir compte de la casse."""
    users = list(users)
    if not query:
        return users

    needle = query.lower()
    return [
        user
        for user in users
        if needle in user.name.lower()
        or needle in user.email.lower()
        or needle in user.company.name.lower()
    ]


class UserRepository:
    """Chaque opération effectue exactement un appel au client HTTP.

    Les ``ApiError`` du client sont propagées telles quelles ; seuls les
    échecs de décodage sont ajoutés, en catégorie ``UNKNOWN``.
    """

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    async def list_users(self, *, cancel_token: CancelToken | None = None) -> list[User]:
        response = await self._client.get(USERS_PATH, cancel_token=cancel_token)
        payload = _json(response)
        if not isinstance(payload, list):
            raise _decode_error("une liste d'utilisateurs était attendue")
        return [_decode_user(item) for item in payload]

    async def get_user(self, user_id: int, *, cancel_token: CancelToken | None = None) -> User:
        response = await self._client.get(f"{USERS_PATH}/{user_id}", cancel_token=cancel_token)
        return _decode_user(_json(response))

    async def create_user(self, user: User, *, cancel_token: CancelToken | None = None) -> User:
        """Crée l'utilisateur ; l'identifiant éventuel du client n'est pas envoyé."""
        response = await self._client.post(
            USERS_PATH,
            user.to_json(include_id=False),
            cancel_token=cancel_token,
        )
        return _decode_user(_json(response))

    async def update_user(
        self, user_id: int, user: User, *, cancel_token: CancelToken | None = None
    ) -> User:
        response = await self._client.put(
            f"{USERS_PATH}/{user_id}",
            user.with_id(user_id).to_json(),
            cancel_token=cancel_token,
        )
        return _decode_user(_json(response))

    async def delete_user(self, user_id: int, *, cancel_token: CancelToken | None = None) -> None:
        await self._client.delete(f"{USERS_PATH}/{user_id}", cancel_token=cancel_token)

    async def search_users(self, query: str, *, cancel_token: CancelToken | None = None) -> list[User]:
        """Recherche côté client : l'API ne propose pas de filtrage."""
        return filter_users(await self.list_users(cancel_token=cancel_token), query)
