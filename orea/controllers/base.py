"""État observable partagé par les contrôleurs."""

from __future__ import annotations

import logging
from typing import Callable, Generic, TypeVar

S = TypeVar("S")
Listener = Callable[[S, S], None]

logger = logging.getLogger(__name__)


class Observable(Generic[S]):
    """Détient un instantané immuable et notifie ses abonnés à chaque remplacement.

    Les abonnés reçoivent ``(précédent, courant)``. Une exception levée par un
    abonné est journalisée et n'interrompt ni les autres abonnés ni le
    contrôleur.
    """

    def __init__(self, initial: S) -> None:
        self._state = initial
        self._listeners: list[Listener[S]] = []

    @property
    def state(self) -> S:
        return self._state

    def subscribe(self, listener: Listener[S]) -> Callable[[], None]:
        """Enregistre ``listener`` et retourne la fonction de désabonnement."""
        if listener not in self._listeners:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, new_state: S) -> None:
        previous = self._state
        self._state = new_state
        for listener in list(self._listeners):
            try:
                listener(previous, new_state)
            except Exception:  # noqa: BLE001
                name = getattr(listener, "__name__", repr(listener))
                logger.exception("Échec de l'abonné « %s » sur %s", name, type(self).__name__)
