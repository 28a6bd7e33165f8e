"""Cœur client Orea : session persistée, garde de navigation et accès aux données."""

from orea.app import Application, configure_logging, create_application
from orea.config import ConfigError, OreaConfig, load_config
from orea.errors import ApiError, ErrorKind
from orea.models import Address, Company, Geo, User
from orea.router import AppRouter, decide
from orea.state import ResourceListState, SessionState

__all__ = [
    "Address",
    "ApiError",
    "AppRouter",
    "Application",
    "Company",
    "ConfigError",
    "ErrorKind",
    "Geo",
    "OreaConfig",
    "ResourceListState",
    "SessionState",
    "User",
    "configure_logging",
    "create_application",
    "decide",
    "load_config",
]
