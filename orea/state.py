"""Structures de données partagées entre les contrôleurs et la couche UI."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Generic, Iterable, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class SessionState:
    """État de la session courante.

    ``is_loading`` ne vaut True que pendant la restauration initiale depuis le
    stockage persistant.
    """

    is_authenticated: bool = False
    username: str | None = None
    is_loading: bool = False

    def __post_init__(self) -> None:
        if self.is_authenticated and self.username is None:
            raise ValueError("Une session authentifiée doit porter un nom d'utilisateur.")

    @classmethod
    def loading(cls) -> SessionState:
        return cls(is_loading=True)

    @classmethod
    def anonymous(cls) -> SessionState:
        return cls()

    @classmethod
    def authenticated(cls, username: str) -> SessionState:
        return cls(is_authenticated=True, username=username)


@dataclass(frozen=True, slots=True)
class ResourceListState(Generic[T]):
    """État observable d'une liste de ressources distantes.

    Chaque transition produit une nouvelle instance : l'égalité structurelle
    suffit aux observateurs pour détecter un changement.
    """

    items: tuple[T, ...] = ()
    is_loading: bool = False
    error_message: str | None = None

    def started(self) -> ResourceListState[T]:
        """Nouvelle requête : l'erreur précédente est effacée avant le chargement."""
        return replace(self, is_loading=True, error_message=None)

    def loaded(self, items: Iterable[T]) -> ResourceListState[T]:
        return replace(self, items=tuple(items), is_loading=False)

    def idle(self) -> ResourceListState[T]:
        return replace(self, is_loading=False)

    def failed(self, message: str) -> ResourceListState[T]:
        return replace(self, is_loading=False, error_message=message)

    def with_items(self, items: Iterable[T]) -> ResourceListState[T]:
        return replace(self, items=tuple(items))

    def without_error(self) -> ResourceListState[T]:
        return replace(self, error_message=None)
