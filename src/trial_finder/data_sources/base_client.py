"""
Base client for registry HTTP clients.

Provides: lazy aiohttp session management, rate limiting, optional retry with
exponential backoff, structured logging, and mapping of every transport
failure onto the closed ErrorCode taxonomy.
"""

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from typing import Any

import aiohttp
from pydantic import BaseModel

from trial_finder.constants import DEFAULT_MAX_RETRIES, DEFAULT_TIMEOUT
from trial_finder.models.model_errors import ErrorCode, ErrorRecord

logger = logging.getLogger("trial_finder.data_sources")


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class RetryConfig(BaseModel):
    """Retry behaviour for failed requests.  Zero retries means single-shot."""

    max_retries: int = DEFAULT_MAX_RETRIES
    base_delay: float = 1.0  # seconds
    max_delay: float = 30.0  # seconds
    backoff_factor: float = 2.0
    retryable_status_codes: set[int] = {429, 500, 502, 503, 504}


class RateLimitConfig(BaseModel):
    """Token-bucket rate limiter settings."""

    requests_per_second: float = 5.0
    burst: int = 10


class ClientConfig(BaseModel):
    """Top-level config aggregating retry and rate limit."""

    retry: RetryConfig = RetryConfig()
    rate_limit: RateLimitConfig = RateLimitConfig()
    timeout_seconds: float = DEFAULT_TIMEOUT


# ---------------------------------------------------------------------------
# Rate limiter (async token bucket)
# ---------------------------------------------------------------------------


class TokenBucketRateLimiter:
    """
    Async token-bucket rate limiter.

    Allows `burst` requests immediately, then refills at
    `requests_per_second`.  Callers await `acquire()` before
    making a request; it sleeps only when the bucket is empty.
    """

    def __init__(self, config: RateLimitConfig):
        self.rate = config.requests_per_second
        self.max_tokens = config.burst
        self.tokens = float(config.burst)
        self.last_refill = time.monotonic()
        self._lock = asyncio.Lock()

    async def acquire(self) -> None:
        async with self._lock:
            now = time.monotonic()
            elapsed = now - self.last_refill
            self.tokens = min(self.max_tokens, self.tokens + elapsed * self.rate)
            self.last_refill = now

            if self.tokens < 1.0:
                wait = (1.0 - self.tokens) / self.rate
                logger.debug("Rate limiter: sleeping %.2fs", wait)
                await asyncio.sleep(wait)
                self.tokens = 0.0
                self.last_refill = time.monotonic()
            else:
                self.tokens -= 1.0


# ---------------------------------------------------------------------------
# Request context (for structured logging)
# ---------------------------------------------------------------------------


class RequestContext(BaseModel):
    """Metadata attached to every outgoing request for logging."""

    source: str  # e.g. "clinical_trials"
    method: str  # e.g. "search_studies"
    params: dict[str, Any] = {}


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class DataSourceError(Exception):
    """Base exception for data source failures.

    ``code`` is always one of the closed ErrorCode values; raw aiohttp and
    HTTP failures are classified before this is raised.
    """

    def __init__(
        self,
        source: str,
        message: str,
        status_code: int | None = None,
        code: ErrorCode = ErrorCode.API_ERROR,
        retry_after: str | None = None,
    ):
        self.source = source
        self.message = message
        self.status_code = status_code
        self.code = code
        self.retry_after = retry_after
        super().__init__(f"[{source}] {message}")

    def to_record(self) -> ErrorRecord:
        return ErrorRecord(
            message=self.message,
            code=self.code,
            status_code=self.status_code,
            retry_after=self.retry_after,
        )


class RateLimitError(DataSourceError):
    """Raised when the registry throttles and retries are exhausted."""

    def __init__(self, source: str, message: str, retry_after: str | None = None):
        super().__init__(
            source,
            message,
            status_code=429,
            code=ErrorCode.RATE_LIMIT,
            retry_after=retry_after,
        )


class NetworkError(DataSourceError):
    """Raised when no HTTP response was received at all."""

    def __init__(self, source: str, message: str):
        super().__init__(source, message, code=ErrorCode.NETWORK)


def classify_http_error(
    source: str, status: int, body: str, retry_after: str | None = None
) -> DataSourceError:
    """Map an HTTP failure status onto a DataSourceError with an ErrorCode."""
    if status == 400:
        return DataSourceError(
            source, "Invalid request parameters", status, code=ErrorCode.VALIDATION
        )
    if status == 404:
        return DataSourceError(
            source, "Resource not found", status, code=ErrorCode.NOT_FOUND
        )
    if status == 429:
        return RateLimitError(source, "Rate limit exceeded", retry_after=retry_after)
    if status == 503:
        return DataSourceError(
            source,
            "ClinicalTrials.gov API is temporarily unavailable",
            status,
            code=ErrorCode.API_ERROR,
        )
    return DataSourceError(source, f"HTTP {status}: {body[:200]}", status)


# ---------------------------------------------------------------------------
# Base client
# ---------------------------------------------------------------------------


class BaseClient(ABC):
    """
    Abstract base for registry clients.

    Subclasses implement `_source_name` and their own typed methods that
    call `_rest_get()`.
    """

    def __init__(
        self, config: ClientConfig | None = None, max_retries: int | None = None
    ):
        self.config = config or ClientConfig()
        if max_retries is not None:
            self.config = self.config.model_copy(
                update={
                    "retry": self.config.retry.model_copy(
                        update={"max_retries": max_retries}
                    )
                }
            )
        self.rate_limiter = TokenBucketRateLimiter(self.config.rate_limit)
        self._session: aiohttp.ClientSession | None = None

    @property
    @abstractmethod
    def _source_name(self) -> str:
        """Identifier for this data source, e.g. 'clinical_trials'."""
        ...

    # -- Session management --------------------------------------------------

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.config.timeout_seconds)
            self._session = aiohttp.ClientSession(
                timeout=timeout, headers={"Accept": "application/json"}
            )
        return self._session

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.close()

    # -- Core request with retry + rate limiting -----------------------------

    def _backoff(self, attempt: int) -> float:
        retry = self.config.retry
        return min(retry.base_delay * (retry.backoff_factor**attempt), retry.max_delay)

    async def _rest_get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        *,
        context: RequestContext | None = None,
    ) -> Any:
        """
        GET a JSON document with rate limiting and optional retry.

        Parameters
        ----------
        url : str
            Full URL.
        params : dict, optional
            Query string parameters.
        context : RequestContext, optional
            Logging context.

        Raises
        ------
        DataSourceError
            With an ErrorCode for every failure: HTTP status, timeout,
            connection error, or an undecodable body.
        """
        ctx = context or RequestContext(source=self._source_name, method="unknown")
        retry = self.config.retry

        last_error: DataSourceError | None = None
        start = time.monotonic()

        for attempt in range(retry.max_retries + 1):
            try:
                await self.rate_limiter.acquire()
                session = await self._get_session()

                logger.info(
                    "Request [%s.%s] attempt=%d url=%s",
                    ctx.source,
                    ctx.method,
                    attempt + 1,
                    url,
                )

                resp = await session.get(url, params=params)

                # --- Handle HTTP errors ---
                if resp.status >= 400:
                    body = await resp.text()
                    error = classify_http_error(
                        ctx.source, resp.status, body, resp.headers.get("Retry-After")
                    )
                    if (
                        resp.status in retry.retryable_status_codes
                        and attempt < retry.max_retries
                    ):
                        logger.warning(
                            "Retryable %d from %s.%s: %s",
                            resp.status,
                            ctx.source,
                            ctx.method,
                            body[:200],
                        )
                        delay = self._backoff(attempt)
                        if error.retry_after and error.retry_after.isdigit():
                            delay = float(error.retry_after)
                        await asyncio.sleep(delay)
                        last_error = error
                        continue
                    raise error

                # --- Success ---
                try:
                    data = await resp.json(content_type=None)
                except ValueError as e:
                    raise DataSourceError(
                        ctx.source,
                        f"Undecodable response body: {e}",
                        status_code=resp.status,
                    ) from e

                logger.info(
                    "Success [%s.%s] elapsed=%.2fs",
                    ctx.source,
                    ctx.method,
                    time.monotonic() - start,
                )
                return data

            except asyncio.TimeoutError:
                elapsed = time.monotonic() - start
                last_error = NetworkError(ctx.source, f"Timeout after {elapsed:.1f}s")
                logger.warning(
                    "Timeout [%s.%s] attempt=%d elapsed=%.1fs",
                    ctx.source,
                    ctx.method,
                    attempt + 1,
                    elapsed,
                )

            except aiohttp.ClientError as e:
                last_error = NetworkError(ctx.source, f"Connection error: {e}")
                logger.warning(
                    "Connection error [%s.%s] attempt=%d: %s",
                    ctx.source,
                    ctx.method,
                    attempt + 1,
                    e,
                )

            # Exponential backoff before next attempt
            if attempt < retry.max_retries:
                await asyncio.sleep(self._backoff(attempt))

        logger.error(
            "All attempts failed [%s.%s] after %.1fs: %s",
            ctx.source,
            ctx.method,
            time.monotonic() - start,
            last_error,
        )
        raise last_error
