"""Garde de navigation et routeur piloté par l'état de session."""

from __future__ import annotations

import logging

from orea.config import DEFAULT_HOME_PATH, DEFAULT_LOGIN_PATH
from orea.controllers.base import Observable
from orea.controllers.session import SessionController
from orea.state import SessionState

INITIAL_LOCATION = "/"

logger = logging.getLogger(__name__)


def decide(
    session: SessionState,
    requested_path: str,
    *,
    login_path: str = DEFAULT_LOGIN_PATH,
    home_path: str = DEFAULT_HOME_PATH,
) -> str | None:
    """Retourne le chemin de redirection, ou None pour laisser passer.

    Fonction pure : aucune mémoire des décisions précédentes. Tant que la
    session est en cours de restauration, aucune redirection n'est décidée.
    """
    if session.is_loading:
        return None
    if not session.is_authenticated and requested_path != login_path:
        return login_path
    if session.is_authenticated and requested_path == login_path:
        return home_path
    return None


class AppRouter(Observable[str]):
    """Emplacement courant de l'application, réévalué à chaque changement de session."""

    def __init__(
        self,
        session: SessionController,
        *,
        login_path: str = DEFAULT_LOGIN_PATH,
        home_path: str = DEFAULT_HOME_PATH,
        initial_location: str = INITIAL_LOCATION,
    ) -> None:
        super().__init__(initial_location)
        self._session = session
        self._login_path = login_path
        self._home_path = home_path
        self._unsubscribe = session.subscribe(self._on_session_changed)
        self._set_state(self.resolve(initial_location))

    @property
    def location(self) -> str:
        return self.state

    def resolve(self, path: str) -> str:
        """Applique la garde jusqu'à obtenir un emplacement stable."""
        location = path
        while True:
            target = decide(
                self._session.state,
                location,
                login_path=self._login_path,
                home_path=self._home_path,
            )
            if target is None or target == location:
                return location
            logger.debug("Redirection %s -> %s", location, target)
            location = target

    def go(self, path: str) -> str:
        """Navigue vers ``path`` et retourne l'emplacement effectivement atteint."""
        location = self.resolve(path)
        self._set_state(location)
        return location

    def dispose(self) -> None:
        self._unsubscribe()

    def _on_session_changed(self, previous: SessionState, current: SessionState) -> None:
        if (
            previous.is_authenticated == current.is_authenticated
            and previous.is_loading == current.is_loading
        ):
            return
        self.go(self.location)
