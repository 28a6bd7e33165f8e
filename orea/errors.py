"""Taxonomie fermée des erreurs remontées par le transport HTTP."""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Les neuf catégories d'échec reconnues. La liste est fermée."""

    TIMEOUT = "Timeout"
    NETWORK = "Network"
    BAD_REQUEST = "BadRequest"
    UNAUTHORIZED = "Unauthorized"
    FORBIDDEN = "Forbidden"
    NOT_FOUND = "NotFound"
    SERVER = "Server"
    CANCELLED = "Cancelled"
    UNKNOWN = "Unknown"


class ApiError(RuntimeError):
    """Erreur typée produite par le classificateur du transport.

    Une seule classe pour toutes les catégories : l'appelant discrimine sur
    ``kind`` plutôt que sur une hiérarchie de sous-classes.
    """

    def __init__(self, kind: ErrorKind, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code

    def describe(self) -> str:
        """Message destiné à l'affichage, préfixé par la catégorie."""
        return f"{self.kind.value}: {self.message}"

    def __repr__(self) -> str:
        return f"ApiError(kind={self.kind.name}, status_code={self.status_code!r}, message={self.message!r})"
