"""Gestion centralisée de la configuration du cœur client Orea."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

DEFAULT_BASE_URL = "https://jsonplaceholder.typicode.com"
DEFAULT_TIMEOUT = 10.0
DEFAULT_SESSION_PATH = ".orea_session.json"
DEFAULT_SESSION_NAMESPACE = "orea.session"
DEFAULT_LOGIN_PATH = "/login"
DEFAULT_HOME_PATH = "/dashboard"
_PRODUCTION = "production"


class ConfigError(RuntimeError):
    """Erreur levée lorsque la configuration est invalide."""


@dataclass(frozen=True, slots=True)
class OreaConfig:
    """Paramètres figés à la construction du client et des contrôleurs."""

    base_url: str = DEFAULT_BASE_URL
    connect_timeout: float = DEFAULT_TIMEOUT
    receive_timeout: float = DEFAULT_TIMEOUT
    send_timeout: float = DEFAULT_TIMEOUT
    session_path: str = DEFAULT_SESSION_PATH
    session_namespace: str = DEFAULT_SESSION_NAMESPACE
    login_path: str = DEFAULT_LOGIN_PATH
    home_path: str = DEFAULT_HOME_PATH
    debug: bool = True

    def __post_init__(self) -> None:
        for name in ("connect_timeout", "receive_timeout", "send_timeout"):
            value = getattr(self, name)
            if not (math.isfinite(value) and value > 0):
                raise ConfigError(f"Le délai « {name} » doit être un nombre fini strictement positif.")
        for name in ("login_path", "home_path"):
            if not getattr(self, name).startswith("/"):
                raise ConfigError(f"Le chemin « {name} » doit commencer par « / ».")
        if not self.session_namespace:
            raise ConfigError("L'espace de noms de session ne peut pas être vide.")


def _read_timeout(variable: str) -> float:
    raw = os.getenv(variable)
    if raw is None:
        return DEFAULT_TIMEOUT
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(f"{variable} doit être un nombre de secondes, reçu : {raw!r}.") from exc


def load_config() -> OreaConfig:
    """Charge la configuration depuis l'environnement (et un éventuel fichier .env)."""
    load_dotenv(find_dotenv(usecwd=True))

    environment = os.getenv("OREA_ENV", "development").strip().lower()

    return OreaConfig(
        base_url=os.getenv("OREA_API_BASE_URL", DEFAULT_BASE_URL),
        connect_timeout=_read_timeout("OREA_CONNECT_TIMEOUT"),
        receive_timeout=_read_timeout("OREA_RECEIVE_TIMEOUT"),
        send_timeout=_read_timeout("OREA_SEND_TIMEOUT"),
        session_path=os.getenv("OREA_SESSION_PATH", DEFAULT_SESSION_PATH),
        session_namespace=os.getenv("OREA_SESSION_NAMESPACE", DEFAULT_SESSION_NAMESPACE),
        debug=environment != _PRODUCTION,
    )
