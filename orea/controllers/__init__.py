"""Contrôleurs exposant un état immuable et observable à la couche UI."""

from orea.controllers.base import Observable
from orea.controllers.session import SessionController
from orea.controllers.users import UsersController, UsersState, find_user

__all__ = [
    "Observable",
    "SessionController",
    "UsersController",
    "UsersState",
    "find_user",
]
