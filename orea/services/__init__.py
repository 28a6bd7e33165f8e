"""Services d'accès aux données : transport HTTP, dépôt et stockage de session."""

from orea.services.api_client import ApiClient, CancelToken
from orea.services.session_store import SessionStore, SessionStoreError
from orea.services.user_repository import UserRepository, filter_users

__all__ = [
    "ApiClient",
    "CancelToken",
    "SessionStore",
    "SessionStoreError",
    "UserRepository",
    "filter_users",
]
