"""
Retry with exponential backoff around calls to the model API.

The upstream does not guarantee a structured error contract, so errors are
classified from whatever status attributes they carry and, failing that,
from substrings of their message.
"""
import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, List, TypeVar

from scholarguard.config import BASE_DELAY_MS, MAX_ATTEMPTS, RETRY_LOG_MESSAGE_CHARS
from scholarguard.errors import (
    AnalysisError,
    MissingCredentialError,
    UpstreamRequestError,
    UpstreamUnavailableError,
)

logger = logging.getLogger("retry")

T = TypeVar("T")

RETRYABLE_CODES = {429, 500, 503}
CREDENTIAL_CODES = {401, 403}

RETRYABLE_MARKERS = (
    "500",
    "503",
    "429",
    "Internal error",
    "UNAVAILABLE",
    "overloaded",
    "RESOURCE_EXHAUSTED",
)
CREDENTIAL_MARKERS = (
    "UNAUTHENTICATED",
    "PERMISSION_DENIED",
    "API key not valid",
    "API_KEY_INVALID",
)


class ErrorKind(str, Enum):
    RETRYABLE = "retryable"
    CREDENTIAL = "credential"
    TERMINAL = "terminal"


def _status_codes(exc: BaseException) -> List[int]:
    codes = []
    for attr in ("code", "status_code", "status"):
        value = getattr(exc, attr, None)
        if isinstance(value, bool):
            continue
        if isinstance(value, int):
            codes.append(value)
        elif isinstance(value, str) and value.isdigit():
            codes.append(int(value))
    return codes


def classify_error(exc: BaseException) -> ErrorKind:
    """Decide whether an upstream error is worth retrying."""
    codes = _status_codes(exc)
    if any(c in CREDENTIAL_CODES for c in codes):
        return ErrorKind.CREDENTIAL
    if any(c in RETRYABLE_CODES for c in codes):
        return ErrorKind.RETRYABLE

    message = str(exc)
    if any(marker in message for marker in CREDENTIAL_MARKERS):
        return ErrorKind.CREDENTIAL
    if any(marker in message for marker in RETRYABLE_MARKERS):
        return ErrorKind.RETRYABLE
    return ErrorKind.TERMINAL


def backoff_delay_ms(attempt: int, base_delay_ms: int = BASE_DELAY_MS) -> int:
    """Delay before 0-indexed ``attempt`` (>= 1): base, 2*base, 4*base..."""
    return base_delay_ms * 2 ** (attempt - 1)


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    *,
    max_attempts: int = MAX_ATTEMPTS,
    base_delay_ms: int = BASE_DELAY_MS,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """
    Await ``operation()`` until it succeeds or a terminal condition is hit.

    AnalysisError raised by the operation itself propagates untouched.
    Credential failures become MissingCredentialError and other
    non-retryable upstream errors become UpstreamRequestError, both after a
    single call. Once attempts run out the last error is surfaced as
    UpstreamUnavailableError.
    """
    last_error = None
    for attempt in range(1, max_attempts + 1):
        try:
            return await operation()
        except AnalysisError:
            raise
        except Exception as e:
            kind = classify_error(e)
            if kind is ErrorKind.CREDENTIAL:
                raise MissingCredentialError(f"Upstream rejected the API key: {e}") from e
            if kind is ErrorKind.TERMINAL:
                raise UpstreamRequestError(f"Upstream rejected the request: {e}") from e

            last_error = e
            if attempt == max_attempts:
                break
            delay_ms = backoff_delay_ms(attempt, base_delay_ms)
            logger.warning(
                f"API error (attempt {attempt}/{max_attempts}): "
                f"{str(e)[:RETRY_LOG_MESSAGE_CHARS]}. Retrying in {delay_ms}ms..."
            )
            await sleep(delay_ms / 1000)

    raise UpstreamUnavailableError(
        f"Upstream still failing after {max_attempts} attempts: {last_error}"
    ) from last_error
