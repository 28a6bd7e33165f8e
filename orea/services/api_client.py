"""Encapsulation des appels HTTP vers l'API REST."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping

import httpx

from orea.config import OreaConfig
from orea.errors import ApiError, ErrorKind

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}
_LOG_BODY_LIMIT = 500


class CancelToken:
    """Jeton d'annulation partagé entre l'appelant et une requête en cours."""

    def __init__(self) -> None:
        self._event = asyncio.Event()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    async def wait(self) -> None:
        await self._event.wait()


def _truncate(text: str) -> str:
    if len(text) <= _LOG_BODY_LIMIT:
        return text
    return f"{text[:_LOG_BODY_LIMIT]}… ({len(text)} caractères)"


def _server_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return "Erreur inconnue"
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return "Erreur inconnue"


def classify_response(response: httpx.Response) -> ApiError | None:
    """Retourne l'erreur typée correspondant au statut, ou None en cas de succès."""
    status = response.status_code
    if status < 400:
        return None
    if status == 400:
        return ApiError(ErrorKind.BAD_REQUEST, f"Requête invalide : {_server_message(response)}", status)
    if status == 401:
        return ApiError(ErrorKind.UNAUTHORIZED, "Non autorisé. Veuillez vous reconnecter.", status)
    if status == 403:
        return ApiError(ErrorKind.FORBIDDEN, f"Accès interdit : {_server_message(response)}", status)
    if status == 404:
        return ApiError(ErrorKind.NOT_FOUND, "Ressource introuvable.", status)
    if 500 <= status <= 599:
        return ApiError(ErrorKind.SERVER, "Erreur serveur. Veuillez réessayer plus tard.", status)
    return ApiError(ErrorKind.UNKNOWN, f"Erreur HTTP : {status}", status)


def classify_exception(exc: Exception) -> ApiError:
    """Traduit une exception du client HTTP en erreur typée."""
    if isinstance(exc, httpx.TimeoutException):
        return ApiError(ErrorKind.TIMEOUT, "Délai d'attente dépassé. Veuillez réessayer.")
    if isinstance(exc, httpx.NetworkError):
        return ApiError(
            ErrorKind.NETWORK,
            "Pas de connexion réseau. Vérifiez votre connexion.",
        )
    return ApiError(ErrorKind.UNKNOWN, f"Erreur inattendue : {exc}")


class ApiClient:
    """Client HTTP configuré une fois pour toutes à la construction.

    Tous les codes de statut passent par ``classify_response`` : httpx ne
    lève jamais sur un statut, et ``raise_for_status`` n'est pas utilisé.
    """

    def __init__(
        self,
        config: OreaConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            timeout=httpx.Timeout(
                connect=config.connect_timeout,
                read=config.receive_timeout,
                write=config.send_timeout,
                pool=config.connect_timeout,
            ),
            headers=DEFAULT_HEADERS,
            transport=transport,
        )

    async def get(
        self,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        cancel_token: CancelToken | None = None,
    ) -> httpx.Response:
        return await self._request("GET", path, params=params, cancel_token=cancel_token)

    async def post(
        self, path: str, body: Any = None, *, cancel_token: CancelToken | None = None
    ) -> httpx.Response:
        return await self._request("POST", path, body, cancel_token=cancel_token)

    async def put(
        self, path: str, body: Any = None, *, cancel_token: CancelToken | None = None
    ) -> httpx.Response:
        return await self._request("PUT", path, body, cancel_token=cancel_token)

    async def delete(
        self, path: str, body: Any = None, *, cancel_token: CancelToken | None = None
    ) -> httpx.Response:
        return await self._request("DELETE", path, body, cancel_token=cancel_token)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ----------------------------------------------------------------- interne -
    async def _request(
        self,
        method: str,
        path: str,
        body: Any = None,
        *,
        params: Mapping[str, Any] | None = None,
        cancel_token: CancelToken | None = None,
    ) -> httpx.Response:
        if cancel_token is not None and cancel_token.is_cancelled:
            raise self._cancelled(method, path)

        request = self._client.build_request(method, path, json=body, params=params)
        self._log_request(request)

        try:
            response = await self._send(request, cancel_token)
        except httpx.HTTPError as exc:
            error = classify_exception(exc)
            if self._config.debug:
                logger.debug("ERREUR %s %s -> %s", method, path, error.describe())
            raise error from exc

        self._log_response(response)

        error = classify_response(response)
        if error is not None:
            raise error
        return response

    async def _send(self, request: httpx.Request, cancel_token: CancelToken | None) -> httpx.Response:
        if cancel_token is None:
            return await self._client.send(request)

        send_task = asyncio.ensure_future(self._client.send(request))
        cancel_task = asyncio.ensure_future(cancel_token.wait())
        try:
            await asyncio.wait({send_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            send_task.cancel()
            raise
        finally:
            cancel_task.cancel()

        if send_task.done():
            return send_task.result()

        send_task.cancel()
        # La réponse tardive est abandonnée avec la tâche.
        await asyncio.gather(send_task, return_exceptions=True)
        raise self._cancelled(request.method, request.url.path)

    def _cancelled(self, method: str, path: str) -> ApiError:
        if self._config.debug:
            logger.debug("ANNULÉE %s %s", method, path)
        return ApiError(ErrorKind.CANCELLED, "La requête a été annulée.")

    def _log_request(self, request: httpx.Request) -> None:
        if not self._config.debug:
            return
        logger.debug(
            "REQUÊTE %s %s | en-têtes=%s | corps=%s",
            request.method,
            request.url.path,
            dict(request.headers),
            _truncate(request.content.decode("utf-8", errors="replace")),
        )

    def _log_response(self, response: httpx.Response) -> None:
        if not self._config.debug:
            return
        logger.debug(
            "RÉPONSE %s %s | en-têtes=%s | corps=%s",
            response.status_code,
            response.request.url.path,
            dict(response.headers),
            _truncate(response.text),
        )
