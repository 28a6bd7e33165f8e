"""Assemblage explicite des dépendances du cœur client."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from orea.config import OreaConfig, load_config
from orea.controllers import SessionController, UsersController
from orea.router import AppRouter
from orea.services import ApiClient, SessionStore, UserRepository

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(config: OreaConfig) -> None:
    """Niveau DEBUG hors production, INFO sinon."""
    logging.basicConfig(
        level=logging.DEBUG if config.debug else logging.INFO,
        format=LOG_FORMAT,
    )


@dataclass(slots=True)
class Application:
    """Graphe d'objets prêt à être consommé par une interface."""

    config: OreaConfig
    client: ApiClient
    session_store: SessionStore
    repository: UserRepository
    session: SessionController
    users: UsersController
    router: AppRouter

    async def aclose(self) -> None:
        self.router.dispose()
        await self.client.aclose()


async def create_application(
    config: OreaConfig | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Application:
    """Initialise les dépendances puis restaure la session persistée."""
    config = config or load_config()
    client = ApiClient(config, transport=transport)
    store = SessionStore.from_config(config)
    repository = UserRepository(client)
    session = SessionController(store)
    router = AppRouter(session, login_path=config.login_path, home_path=config.home_path)

    app = Application(
        config=config,
        client=client,
        session_store=store,
        repository=repository,
        session=session,
        users=UsersController(repository),
        router=router,
    )
    await session.restore()
    return app
