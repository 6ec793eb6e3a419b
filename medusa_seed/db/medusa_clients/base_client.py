"""
Base Medusa Admin API client with common functionality.

This module provides the foundation for all Medusa admin clients,
including session management, authentication, rate limiting and
request execution with retries.
"""

import asyncio
import base64
import json
import logging
import time
from typing import Any, Dict, List, Optional

import aiohttp
from aiohttp import ClientTimeout

from medusa_seed.core.config import Settings, get_settings
from medusa_seed.core.logging_config import log_api_call
from medusa_seed.utils.error_handler import ErrorCode, MedusaAPIException

logger = logging.getLogger(__name__)

# Only these methods are retried after a 5xx or a network error
IDEMPOTENT_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})


class RequestThrottle:
    """Minimum interval between consecutive requests, shared by every client using it."""

    def __init__(self, min_interval: float):
        self.min_interval = min_interval
        self.last_request_time = 0.0

    async def wait(self):
        elapsed = time.time() - self.last_request_time
        if elapsed < self.min_interval:
            await asyncio.sleep(self.min_interval - elapsed)

    def mark(self):
        self.last_request_time = time.time()


class BaseMedusaAdminClient:
    """
    Base client for Medusa Admin API operations.

    Provides connection management, authentication, rate limiting, error
    handling and pagination that all specialized clients inherit.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize the base Medusa admin client."""
        self.settings = settings or get_settings()
        self.backend_url = self.settings.MEDUSA_BACKEND_URL
        self.admin_url = self.settings.admin_api_base_url
        self.max_retries = self.settings.MEDUSA_MAX_RETRIES
        self.page_size = self.settings.MEDUSA_PAGE_SIZE

        # Session and rate limiting
        self.session: Optional[aiohttp.ClientSession] = None
        self._auth_header: Optional[str] = None
        self._throttle = RequestThrottle(self.settings.MEDUSA_MIN_REQUEST_INTERVAL)

        logger.debug(f"Initialized Medusa admin client for {self.backend_url}")

    async def __aenter__(self):
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def initialize(self):
        """
        Initialize the HTTP session and authenticate against the backend.

        Raises:
            MedusaAPIException: If initialization fails
        """
        try:
            timeout = ClientTimeout(total=self.settings.MEDUSA_REQUEST_TIMEOUT, connect=10)
            self.session = aiohttp.ClientSession(
                timeout=timeout,
                headers={
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                    "User-Agent": f"{self.settings.APP_NAME}/{self.settings.APP_VERSION}",
                },
            )

            await self.authenticate()
            logger.info(f"✅ Connected to Medusa admin API at {self.backend_url}")

        except Exception as e:
            logger.error(f"❌ Failed to initialize Medusa admin client: {e}")
            if self.session:
                await self.session.close()
                self.session = None
            if isinstance(e, MedusaAPIException):
                raise
            raise MedusaAPIException(f"Client initialization failed: {str(e)}") from e

    async def authenticate(self):
        """
        Resolve the Authorization header.

        A secret API key is sent as HTTP Basic credentials; otherwise the
        admin user logs in with email and password to obtain a bearer token.
        """
        if self.settings.MEDUSA_ADMIN_API_TOKEN:
            encoded = base64.b64encode(f"{self.settings.MEDUSA_ADMIN_API_TOKEN}:".encode()).decode()
            self._auth_header = f"Basic {encoded}"
            return

        url = f"{self.backend_url}/auth/user/emailpass"
        payload = {
            "email": self.settings.MEDUSA_ADMIN_EMAIL,
            "password": self.settings.MEDUSA_ADMIN_PASSWORD,
        }
        async with self.session.post(url, json=payload) as response:
            data = await self._read_body(response)
            if response.status != 200 or not data.get("token"):
                raise MedusaAPIException(
                    f"Authentication failed: {data.get('message', 'no token returned')}",
                    api_response_code=response.status,
                    endpoint="/auth/user/emailpass",
                    api_error_type=data.get("type"),
                )
            self._auth_header = f"Bearer {data['token']}"

    async def close(self):
        """Close the HTTP session and clean up resources."""
        if self.session:
            await self.session.close()
            self.session = None
            logger.debug("Medusa admin client closed")

    @staticmethod
    async def _read_body(response) -> Dict[str, Any]:
        text = await response.text()
        if not text:
            return {}
        try:
            return json.loads(text)
        except ValueError:
            return {"message": text}

    @staticmethod
    def _encode_params(params: Optional[Dict[str, Any]]) -> Optional[List[tuple]]:
        """Flatten query params; list values become repeated ``key[]`` entries."""
        if not params:
            return None
        encoded = []
        for key, value in params.items():
            if value is None:
                continue
            if isinstance(value, (list, tuple)):
                encoded.extend((f"{key}[]", str(item)) for item in value)
            elif isinstance(value, bool):
                encoded.append((key, "true" if value else "false"))
            else:
                encoded.append((key, str(value)))
        return encoded

    async def _request(
        self,
        method: str,
        path: str,
        payload: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        max_retries: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Execute an admin API request with rate limiting and error handling.

        Args:
            method: HTTP method
            path: Path relative to ``/admin`` (e.g. ``/regions``)
            payload: JSON body
            params: Query parameters
            max_retries: Maximum number of attempts. Server and network errors are
                only retried for idempotent methods; a create call that may have
                reached the backend is never resent.

        Returns:
            Dict: Parsed JSON response

        Raises:
            MedusaAPIException: If the request fails after retries or Medusa rejects it
        """
        if not self.session:
            raise MedusaAPIException("Client not initialized. Call initialize() first.", endpoint=path)

        attempts = max_retries or self.max_retries
        retry_on_failure = method.upper() in IDEMPOTENT_METHODS
        url = f"{self.admin_url}{path}"
        headers = {"Authorization": self._auth_header} if self._auth_header else {}
        last_exception = None

        for attempt in range(attempts):
            await self._check_rate_limit()
            started = time.time()
            try:
                async with self.session.request(
                    method,
                    url,
                    json=payload,
                    params=self._encode_params(params),
                    headers=headers,
                ) as response:
                    self._throttle.mark()
                    data = await self._read_body(response)
                    log_api_call(method, path, response.status, time.time() - started)

                    if response.status == 429:
                        retry_after = int(response.headers.get("Retry-After", 2))
                        last_exception = MedusaAPIException(
                            "Rate limit exceeded",
                            api_response_code=429,
                            endpoint=path,
                            rate_limited=True,
                            retry_after=retry_after,
                        )
                        if attempt < attempts - 1:
                            logger.warning(f"Rate limit exceeded, waiting {retry_after}s (attempt {attempt + 1})")
                            await asyncio.sleep(retry_after)
                        continue

                    if response.status >= 400:
                        exception = MedusaAPIException(
                            f"{method} {path} failed with HTTP {response.status}: "
                            f"{data.get('message', 'Unknown error')}",
                            api_response_code=response.status,
                            endpoint=path,
                            api_error_type=data.get("type"),
                        )
                        if response.status < 500 or not retry_on_failure:
                            raise exception
                        last_exception = exception
                        if attempt < attempts - 1:
                            wait_time = min(2**attempt, 10)
                            logger.warning(
                                f"Server error on {method} {path}, retrying in {wait_time}s (attempt {attempt + 1})"
                            )
                            await asyncio.sleep(wait_time)
                        continue

                    return data

            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                last_exception = MedusaAPIException(
                    f"Network error on {method} {path}: {str(e)}",
                    endpoint=path,
                    error_code=ErrorCode.MEDUSA_CONNECTION_FAILED,
                )
                if not retry_on_failure:
                    raise last_exception from e
                if attempt < attempts - 1:
                    wait_time = min(2**attempt, 10)  # Exponential backoff, max 10s
                    logger.warning(f"Network error, retrying in {wait_time}s (attempt {attempt + 1})")
                    await asyncio.sleep(wait_time)

        raise last_exception or MedusaAPIException(f"{method} {path} failed after retries", endpoint=path)

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return await self._request("GET", path, params=params)

    async def _post(
        self, path: str, payload: Optional[Dict[str, Any]] = None, params: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        return await self._request("POST", path, payload=payload or {}, params=params)

    async def _list(
        self,
        path: str,
        key: str,
        params: Optional[Dict[str, Any]] = None,
        all_pages: bool = False,
    ) -> List[Dict[str, Any]]:
        """
        List a resource collection.

        Args:
            path: Collection path (e.g. ``/sales-channels``)
            key: Response key holding the records (e.g. ``sales_channels``)
            params: Filters
            all_pages: Follow ``limit``/``offset`` pagination until ``count`` is reached

        Returns:
            List of records
        """
        query = dict(params or {})
        query.setdefault("limit", self.page_size)
        query.setdefault("offset", 0)

        records: List[Dict[str, Any]] = []
        while True:
            data = await self._get(path, params=query)
            page = data.get(key, [])
            records.extend(page)

            if not all_pages or not page:
                break
            count = data.get("count", len(records))
            if len(records) >= count:
                break
            query["offset"] = query["offset"] + len(page)

        return records

    async def _check_rate_limit(self):
        """
        Keep a minimum interval between consecutive requests.
        """
        await self._throttle.wait()

    def __str__(self):
        """String representation of the client."""
        return f"{self.__class__.__name__}(backend={self.backend_url})"

    def __repr__(self):
        """Detailed string representation of the client."""
        return (
            f"{self.__class__.__name__}("
            f"backend_url='{self.backend_url}', "
            f"initialized={self.session is not None})"
        )
