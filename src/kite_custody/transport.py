"""Low-level HTTP transport for the KITE Custody Orchestrator.

Issues one request per call with a hard deadline, parses the body
defensively and turns every outcome into either a payload or one of
KiteApiError / KiteNetworkError.

Response envelope shapes tolerated:
- ``{"success": true, "status": 200, "data": ...}``  -> ``data``
- ``{"success": false, "status": 4xx, "error": "..."}`` -> KiteApiError
- any other JSON value                                -> returned as is
- unparsable text                                     -> ``{}`` on 2xx
"""

import asyncio
import json
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from kite_custody.errors import KiteApiError, KiteNetworkError
from kite_custody.log import SdkLogger

# Methods whose body is never sent even if one is passed
NO_BODY_METHODS = frozenset({"GET", "HEAD"})


@dataclass(frozen=True)
class RequestConfig:
    """Per-client request settings.

    Attributes:
        base_url: Orchestrator base URL (trailing slash is stripped)
        api_key: Organization API key sent as ``X-API-Key``
        timeout: Deadline for the whole exchange, in milliseconds
        log: Client-scoped logger
        transport: Optional httpx transport (custom networking or tests)
    """

    base_url: str
    api_key: str
    timeout: int
    log: SdkLogger
    transport: Optional[httpx.AsyncBaseTransport] = None

    def url_for(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}{path}"


def parse_envelope(text: str) -> Any:
    """Parse a response body as JSON, returning None if it is not JSON."""
    try:
        return json.loads(text)
    except ValueError:
        return None


def _error_field(envelope: Any) -> Optional[str]:
    if isinstance(envelope, dict):
        error = envelope.get("error")
        if isinstance(error, str) and error:
            return error
    return None


def _code_field(envelope: Any) -> Optional[str]:
    if isinstance(envelope, dict):
        code = envelope.get("code")
        if isinstance(code, str):
            return code
    return None


def _declared_status(envelope: dict, fallback: int) -> int:
    status = envelope.get("status")
    if isinstance(status, int) and not isinstance(status, bool):
        return status
    return fallback


def unwrap_payload(envelope: Any) -> Any:
    """Return the payload carried by a successful envelope."""
    if isinstance(envelope, dict) and "data" in envelope:
        data = envelope["data"]
        return data if data is not None else envelope
    return envelope if envelope is not None else {}


async def _exchange(
    config: RequestConfig,
    method: str,
    url: str,
    headers: dict[str, str],
    content: Optional[str],
) -> httpx.Response:
    async with httpx.AsyncClient(
        transport=config.transport,
        timeout=config.timeout / 1000,
    ) as client:
        # The response body is fully read before the client closes
        return await client.request(method, url, headers=headers, content=content)


async def request(
    config: RequestConfig,
    method: str,
    path: str,
    body: Any = None,
) -> Any:
    """Send one request to the orchestrator and normalize the outcome.

    Args:
        config: Client request settings
        method: HTTP method
        path: API path, already percent-encoded for user-supplied segments
        body: JSON-serializable body (ignored for GET/HEAD)

    Returns:
        The unwrapped response payload

    Raises:
        KiteApiError: Non-2xx status or ``success: false`` envelope
        KiteNetworkError: Timeout or transport-level failure
    """
    method = method.upper()
    url = config.url_for(path)

    headers = {
        "Content-Type": "application/json",
        "X-API-Key": config.api_key,
    }

    content = None
    if body is not None and method not in NO_BODY_METHODS:
        content = json.dumps(body)

    config.log("debug", f"{method} {url}")

    try:
        response = await asyncio.wait_for(
            _exchange(config, method, url, headers, content),
            timeout=config.timeout / 1000,
        )
    except (asyncio.TimeoutError, httpx.TimeoutException) as e:
        message = f"Request timed out after {config.timeout}ms"
        config.log("error", message)
        raise KiteNetworkError(message, cause=e) from e
    except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError) as e:
        message = str(e) or "Network request failed"
        config.log("error", message)
        raise KiteNetworkError(message, cause=e) from e

    response_text = response.text
    envelope = parse_envelope(response_text)
    status_code = response.status_code

    if not response.is_success:
        message = (
            _error_field(envelope)
            or response.reason_phrase
            or f"Request failed with status {status_code}"
        )
        config.log("warn", f"{status_code} {path}: {message}")
        raise KiteApiError(
            status_code=status_code,
            message=message,
            code=_code_field(envelope),
            raw=envelope if envelope is not None else response_text,
        )

    if isinstance(envelope, dict) and envelope.get("success") is False:
        error = envelope.get("error")
        message = error if isinstance(error, str) else "Request failed"
        config.log("warn", f"{status_code} {path}: {message}")
        raise KiteApiError(
            status_code=_declared_status(envelope, status_code),
            message=message,
            code=_code_field(envelope),
            raw=envelope,
        )

    return unwrap_payload(envelope)
