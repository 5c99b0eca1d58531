"""Resilient request executor — bounded retries with rate-limit aware backoff.

Every remote call (Figma tree fetch, AI proxy POST) goes through
RequestExecutor.execute(), which owns all retry decisions:

    2xx                 → parse JSON body, return
    429                 → wait min(retry-after, 30s) on attempt 1, else 2^(n-1)s;
                          RateLimitedError once no attempts remain
    404 / 401           → NotFoundError / UnauthorizedError, no retry
    other status        → TransientNetworkError, retried
    transport exception → TransientNetworkError, retried with 2^(n-1)s (max 8s);
                          messages carrying 401/404/invalid-token markers are
                          classified as terminal where they are caught

Attempts run strictly one after another. After the last attempt the last
error is raised.

Usage:
    executor = RequestExecutor(max_attempts=3)
    async with httpx.AsyncClient() as client:
        data = await executor.execute(client, "GET", url, headers={"X-Figma-Token": token})
"""

from __future__ import annotations

import asyncio
import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional

import httpx

from ..errors import (
    MalformedResponseError,
    NotFoundError,
    RateLimitedError,
    RequestError,
    TransientNetworkError,
    UnauthorizedError,
)
from ..settings import (
    FIGMA_MAX_ATTEMPTS,
    NETWORK_BACKOFF_CAP,
    RATE_LIMIT_DEFAULT_RETRY_AFTER,
    RATE_LIMIT_MAX_WAIT,
)

logger = logging.getLogger(__name__)

_UNAUTHORIZED_MARKERS = ("401", "invalid token", "invalid figma token")
_NOT_FOUND_MARKERS = ("404",)


class AttemptOutcome(str, Enum):
    SUCCESS = "success"
    RETRYABLE_FAILURE = "retryable_failure"
    TERMINAL_FAILURE = "terminal_failure"


@dataclass
class RequestAttempt:
    """One try of a request, reported to the on_attempt observer."""
    attempt: int  # 1-based
    max_attempts: int
    outcome: AttemptOutcome
    wait: float = 0.0  # seconds slept before the next attempt
    status_code: Optional[int] = None
    error: Optional[RequestError] = None


AttemptObserver = Callable[[RequestAttempt], None]


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def parse_retry_after(value: Optional[str], default: float = RATE_LIMIT_DEFAULT_RETRY_AFTER) -> float:
    """Seconds from a retry-after header; default when absent or unparseable.

    Negative values mean "retry now" and clamp to 0.
    """
    if value is None:
        return default
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(seconds):
        return default
    return max(seconds, 0.0)


def _error_detail(response: httpx.Response) -> str:
    """Upstream error text from a JSON error body ({message|err, activityId})."""
    try:
        data = response.json()
    except ValueError:
        return ""
    if not isinstance(data, dict):
        return ""
    parts = []
    message = data.get("message") or data.get("err")
    if message:
        parts.append(str(message))
    if data.get("activityId"):
        parts.append(f"activityId: {data['activityId']}")
    return " | ".join(parts)


def classify_response(response: httpx.Response) -> RequestError:
    """Build the error for a non-2xx, non-429 response."""
    status = response.status_code
    detail = _error_detail(response)
    suffix = f": {detail}" if detail else ""
    if status == 404:
        return NotFoundError(
            f"Resource not found or you do not have access to it (404){suffix}",
            status_code=status,
        )
    if status == 401:
        return UnauthorizedError(
            f"Invalid credential (401){suffix}",
            status_code=status,
        )
    return TransientNetworkError(
        f"API request failed with status {status}{suffix}",
        status_code=status,
    )


def classify_transport_error(exc: Exception) -> RequestError:
    """Build the error for an exception raised before any HTTP status was received."""
    message = str(exc) or exc.__class__.__name__
    lower = message.lower()
    if any(marker in lower for marker in _UNAUTHORIZED_MARKERS):
        error: RequestError = UnauthorizedError(message)
    elif any(marker in lower for marker in _NOT_FOUND_MARKERS):
        error = NotFoundError(message)
    else:
        error = TransientNetworkError(f"Network error: {message}")
    error.__cause__ = exc
    return error


# ---------------------------------------------------------------------------
# Executor
# ---------------------------------------------------------------------------


class RequestExecutor:
    """Call-site agnostic retry loop around a single HTTP request.

    Args:
        max_attempts: Total tries per call, first one included (>= 1).
        rate_limit_max_wait: Cap for the first rate-limit wait (seconds).
        default_retry_after: Used when retry-after is missing/unparseable.
        network_backoff_cap: Cap for exponential backoff after network errors.
        sleep: Awaitable sleep, injectable for tests.
    """

    def __init__(
        self,
        max_attempts: int = FIGMA_MAX_ATTEMPTS,
        *,
        rate_limit_max_wait: float = RATE_LIMIT_MAX_WAIT,
        default_retry_after: float = RATE_LIMIT_DEFAULT_RETRY_AFTER,
        network_backoff_cap: float = NETWORK_BACKOFF_CAP,
        sleep: Optional[Callable[[float], Awaitable[Any]]] = None,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts
        self.rate_limit_max_wait = rate_limit_max_wait
        self.default_retry_after = default_retry_after
        self.network_backoff_cap = network_backoff_cap
        self._sleep = sleep or asyncio.sleep

    def rate_limit_wait(self, attempt: int, retry_after: float) -> float:
        """retry-after (capped) on the first attempt, exponential afterwards."""
        if attempt == 1:
            return min(retry_after, self.rate_limit_max_wait)
        return min(2 ** (attempt - 1), self.rate_limit_max_wait)

    def network_backoff(self, attempt: int) -> float:
        return min(2 ** (attempt - 1), self.network_backoff_cap)

    @staticmethod
    def _parse_body(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(
                f"Expected a JSON body (status {response.status_code})",
                status_code=response.status_code,
            ) from e

    async def execute(
        self,
        client: httpx.AsyncClient,
        method: str,
        url: str,
        *,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
        on_attempt: Optional[AttemptObserver] = None,
    ) -> Any:
        """Send the request until it succeeds, fails terminally, or attempts run out.

        Returns the parsed JSON body of the first 2xx response.

        Raises:
            NotFoundError, UnauthorizedError: immediately, without retry.
            RateLimitedError: when the last allowed attempt is rate limited.
            TransientNetworkError: the last network-class error once attempts run out.
            MalformedResponseError: a 2xx response whose body is not JSON.
        """
        def report(record: RequestAttempt) -> None:
            if on_attempt is not None:
                on_attempt(record)


        for attempt in range(1, self.max_attempts + 1):
            logger.debug(
                "execute: %s %s (attempt %d/%d)", method, url, attempt, self.max_attempts
            )
            try:
                response = await client.request(
                    method, url, headers=headers, params=params, json=json,
                )
            except httpx.TransportError as e:
                error = classify_transport_error(e)
            else:
                status = response.status_code
                if response.is_success:
                    try:
                        body = self._parse_body(response)
                    except MalformedResponseError as e:
                        report(RequestAttempt(
                            attempt, self.max_attempts, AttemptOutcome.TERMINAL_FAILURE,
                            status_code=status, error=e,
                        ))
                        raise
                    report(RequestAttempt(
                        attempt, self.max_attempts, AttemptOutcome.SUCCESS, status_code=status,
                    ))
                    return body

                if status == 429:
                    retry_after = parse_retry_after(
                        response.headers.get("retry-after"), self.default_retry_after,
                    )
                    if attempt < self.max_attempts:
                        wait = self.rate_limit_wait(attempt, retry_after)
                        error = RateLimitedError(
                            f"Rate limit hit, retrying in {wait:g}s", status_code=status,
                        )
                        logger.info(
                            "execute: %s %s rate limited, waiting %.1fs (attempt %d/%d)",
                            method, url, wait, attempt, self.max_attempts,
                        )
                        report(RequestAttempt(
                            attempt, self.max_attempts, AttemptOutcome.RETRYABLE_FAILURE,
                            wait=wait, status_code=status, error=error,
                        ))
                        await self._sleep(wait)
                        continue
                    error = RateLimitedError(
                        f"Rate limit exceeded after {self.max_attempts} attempts. "
                        "Please wait a few minutes and try again.",
                        status_code=status,
                    )
                    report(RequestAttempt(
                        attempt, self.max_attempts, AttemptOutcome.TERMINAL_FAILURE,
                        status_code=status, error=error,
                    ))
                    raise error

                error = classify_response(response)

            if not error.retryable or attempt == self.max_attempts:
                report(RequestAttempt(
                    attempt, self.max_attempts, AttemptOutcome.TERMINAL_FAILURE,
                    status_code=error.status_code, error=error,
                ))
                raise error

            wait = self.network_backoff(attempt)
            logger.info(
                "execute: %s %s failed (%s), retrying in %.1fs (attempt %d/%d)",
                method, url, error, wait, attempt, self.max_attempts,
            )
            report(RequestAttempt(
                attempt, self.max_attempts, AttemptOutcome.RETRYABLE_FAILURE,
                wait=wait, status_code=error.status_code, error=error,
            ))
            await self._sleep(wait)
