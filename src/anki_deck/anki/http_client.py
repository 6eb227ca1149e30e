"""HTTP client for AnkiConnect API communication."""

from types import TracebackType
from typing import Any, Literal

import httpx

from anki_deck.error_codes import ErrorCode
from anki_deck.exceptions import AnkiConnectError
from anki_deck.utils.logging import get_logger

logger = get_logger(__name__)

ANKI_CONNECT_VERSION = 6


class AnkiHttpClient:
    """Async HTTP client for the AnkiConnect API.

    Shapes the ``{"action", "version", "params"}`` request body and unwraps
    the ``{"result", "error"}`` envelope. Every failure surfaces as
    AnkiConnectError; nothing is retried.
    """

    def __init__(
        self,
        url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize HTTP client.

        Args:
            url: AnkiConnect URL
            timeout: Request timeout in seconds
            transport: Optional httpx transport (for tests)
        """
        self.url = url
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)
        logger.debug("anki_http_client_initialized", url=url, timeout=timeout)

    async def invoke(self, action: str, params: dict[str, Any] | None = None) -> Any:
        """
        Invoke an AnkiConnect action.

        Args:
            action: Action name
            params: Action parameters

        Returns:
            The ``result`` member of the response envelope

        Raises:
            AnkiConnectError: If the request or the action fails
        """
        payload = {"action": action, "version": ANKI_CONNECT_VERSION, "params": params or {}}

        logger.debug("anki_invoke", action=action)

        try:
            response = await self._client.post(self.url, json=payload)
            response.raise_for_status()
        except (httpx.TimeoutException, httpx.ConnectError) as e:
            msg = f"Connection error to AnkiConnect: {e}"
            raise AnkiConnectError(
                msg,
                suggestion="Ensure Anki is running and the AnkiConnect add-on is installed.",
                error_code=ErrorCode.ANK_CONNECTION_FAILED.value,
                context={"action": action, "url": self.url},
            ) from e
        except httpx.HTTPStatusError as e:
            msg = f"HTTP {e.response.status_code} from AnkiConnect: {e}"
            raise AnkiConnectError(
                msg,
                error_code=ErrorCode.ANK_HTTP_STATUS.value,
                context={"action": action, "status_code": e.response.status_code},
            ) from e
        except httpx.HTTPError as e:
            msg = f"HTTP error calling AnkiConnect: {e}"
            raise AnkiConnectError(
                msg,
                error_code=ErrorCode.ANK_CONNECTION_FAILED.value,
                context={"action": action, "url": self.url},
            ) from e

        try:
            result = response.json()
        except ValueError as e:
            msg = f"Invalid JSON response: {e}"
            raise AnkiConnectError(
                msg, error_code=ErrorCode.ANK_MALFORMED_RESPONSE.value
            ) from e

        if not isinstance(result, dict):
            msg = f"Invalid response type: expected dict, got {type(result).__name__}"
            raise AnkiConnectError(msg, error_code=ErrorCode.ANK_MALFORMED_RESPONSE.value)

        if "error" not in result and "result" not in result:
            msg = f"Malformed response: missing error/result fields in {result}"
            raise AnkiConnectError(msg, error_code=ErrorCode.ANK_MALFORMED_RESPONSE.value)

        if result.get("error") is not None:
            msg = f"AnkiConnect error: {result['error']}"
            raise AnkiConnectError(
                msg,
                error_code=ErrorCode.ANK_API_ERROR.value,
                context={"action": action},
            )

        return result.get("result")

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
        logger.debug("anki_http_client_closed", url=self.url)

    async def __aenter__(self) -> "AnkiHttpClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> Literal[False]:
        await self.aclose()
        return False
