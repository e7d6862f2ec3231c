"""
Cliente HTTP de la Cupid content API.
"""
from typing import Mapping, Optional

import httpx
from loguru import logger

from app.core.config import settings
from app.infrastructure.external.cupid.status import classify_response
from app.shared.exceptions.infrastructure import ExternalSourceTransportError


class CupidClient:
    """
    Implementa ExternalSourceClient sobre httpx.AsyncClient.

    El cliente httpx se crea una vez y se reutiliza entre peticiones;
    cerrarlo con `aclose()` o usando `async with`.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        *,
        timeout_s: Optional[float] = None,
        user_agent: Optional[str] = None,
        connection_close: bool = False,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        base_url = (base_url or settings.CUPID_BASE_URL).strip()
        if not base_url:
            raise ValueError("base_url es obligatorio")

        self.base_url = base_url.rstrip("/")
        self.api_key = api_key if api_key is not None else settings.CUPID_API_KEY
        self.user_agent = user_agent or settings.CUPID_USER_AGENT
        self.connection_close = connection_close
        self._client = httpx.AsyncClient(
            timeout=timeout_s or settings.CUPID_TIMEOUT_S,
            transport=transport,
        )

    def build_url(self, path: str) -> str:
        """Une base + path. Las URLs absolutas se respetan."""
        if path.startswith("http://") or path.startswith("https://"):
            return path
        if not path.startswith("/"):
            path = "/" + path
        return self.base_url + path

    def default_headers(self) -> dict:
        headers = {"accept": "application/json"}
        if self.api_key:
            headers["x-api-key"] = self.api_key
        return headers

    async def fetch(
        self,
        method: str,
        path: str,
        headers: Optional[Mapping[str, str]] = None,
    ) -> bytes:
        """
        Ejecuta la peticion y devuelve el body de una respuesta 2xx.

        Raises:
            ExternalSourceClientError / ExternalSourceServerError: 4xx / 5xx
            UnexpectedStatusError: otro codigo
            ExternalSourceTransportError: red o timeout
        """
        url = self.build_url(path)
        request_headers = self.default_headers()
        if headers:
            request_headers.update(headers)
        request_headers["User-Agent"] = self.user_agent
        if self.connection_close:
            request_headers["Connection"] = "close"

        try:
            response = await self._client.request(method, url, headers=request_headers)
        except httpx.TimeoutException as e:
            logger.warning(f"Timeout en {method} {url}")
            raise ExternalSourceTransportError(f"Timeout en {method} {path}") from e
        except httpx.HTTPError as e:
            logger.warning(f"Error de red en {method} {url}: {e}")
            raise ExternalSourceTransportError(f"Error de red en {method} {path}: {e}") from e

        return classify_response(response.status_code, response.content, response.headers)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "CupidClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
