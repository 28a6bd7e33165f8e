"""Machine à états de la session : chargement, anonyme, authentifié."""

from __future__ import annotations

import logging

from orea.controllers.base import Observable
from orea.services.session_store import SessionStore, SessionStoreError
from orea.state import SessionState

logger = logging.getLogger(__name__)


class SessionController(Observable[SessionState]):
    """Seul propriétaire de ``SessionState``.

    La connexion est un simple contrôle de présence des identifiants : toute
    paire non vide est acceptée. Ce n'est pas une authentification réelle.
    """

    def __init__(self, store: SessionStore) -> None:
        super().__init__(SessionState.loading())
        self._store = store
        self._restore_started = False
        self.last_error: SessionStoreError | None = None

    async def restore(self) -> SessionState:
        """Restaure la session persistée. Ne s'exécute qu'une fois par contrôleur."""
        if self._restore_started:
            return self.state
        self._restore_started = True

        try:
            restored = await self._store.restore()
        except SessionStoreError as exc:
            logger.error("Restauration de la session impossible : %s", exc)
            self.last_error = exc
            restored = None

        # Un login terminé pendant la restauration l'emporte.
        if self.state.is_loading:
            self._set_state(restored or SessionState.anonymous())
        return self.state

    async def login(self, username: str, password: str) -> bool:
        """Ouvre une session ; retourne False si un identifiant est vide."""
        if not username or not password:
            return False

        try:
            await self._store.save(username)
        except SessionStoreError as exc:
            logger.error("Enregistrement de la session impossible : %s", exc)
            self.last_error = exc
            return False

        self.last_error = None
        self._set_state(SessionState.authenticated(username))
        logger.info("Session ouverte pour %s", username)
        return True

    async def logout(self) -> None:
        """Ferme la session. Ne peut pas échouer du point de vue de l'appelant."""
        try:
            await self._store.clear()
        except SessionStoreError as exc:
            logger.warning("Effacement de la session persistée impossible : %s", exc)

        self._set_state(SessionState.anonymous())
        logger.info("Session fermée")
