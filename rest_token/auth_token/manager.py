"""Token manager: retrieves, stores and refreshes a service token."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import aiohttp
from yarl import URL

from ..constants import DEFAULT_TOKEN_URL, TOKEN_REQUEST_TIMEOUT_SECONDS
from ..errors.handling import classify_error, log_error
from ..errors.internal import InternalError, TransportError
from .client import TokenClient, build_refresh_url
from .failure_tracker import FailureTracker
from .hook_manager import FailureHook, HookManager, UpdateHook
from .types import RefreshResult

if TYPE_CHECKING:
    from ..config.model import TokenSettings

SuccessCallback = Callable[[], Any]
FailureCallback = Callable[[Exception], Any]


class TokenManager:
    """Retrieves, stores, and refreshes an authentication token.

    The token is retrieved from ``token_url`` with HTTP Basic credentials and
    scoped to ``service_url``, which is sent as the ``url`` query parameter.

    At most one refresh request is in flight at a time. A refresh requested
    while another is pending joins it and receives the same result.
    ``is_refreshing`` reports whether a request is currently in flight.

    ``retries`` is a counter for callers implementing their own retry policy;
    the manager never changes it.
    """

    def __init__(
        self,
        *,
        token_url: str = DEFAULT_TOKEN_URL,
        service_url: str,
        username: str,
        password: str,
        http_session: aiohttp.ClientSession | None = None,
        timeout: float = TOKEN_REQUEST_TIMEOUT_SECONDS,
    ):
        """Create a token manager.

        Args:
            token_url: The URL used to obtain a token.
            service_url: The URL of the service the token is scoped to.
            username: The username credential used to obtain a token.
            password: The password credential used to obtain a token.
            http_session: Session to issue requests with. When omitted the
                manager creates its own on first refresh and closes it in
                ``close()``.
            timeout: Total seconds allowed for one token request.
        """
        self._token_url = token_url
        self._service_url = service_url
        self._username = username
        self._password = password
        self.timeout = timeout
        self.retries = 0

        self._token: str | None = None
        self._is_refreshing = False
        self._inflight: asyncio.Task[RefreshResult] | None = None
        self._last_result: RefreshResult | None = None

        self._session = http_session
        self._owns_session = http_session is None
        self._client: TokenClient | None = None
        self.hook_manager = HookManager()
        self.failures = FailureTracker()

    @classmethod
    def from_settings(
        cls,
        settings: TokenSettings,
        http_session: aiohttp.ClientSession | None = None,
    ) -> TokenManager:
        """Build a manager from validated settings."""
        return cls(
            token_url=settings.token_url,
            service_url=settings.service_url,
            username=settings.username,
            password=settings.password.get_secret_value(),
            http_session=http_session,
            timeout=settings.timeout,
        )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(token_url={self._token_url!r}, "
            f"service_url={self._service_url!r}, username={self._username!r})"
        )

    @property
    def token(self) -> str | None:
        """The most recently retrieved token, or None before the first success."""
        return self._token

    @property
    def is_refreshing(self) -> bool:
        return self._is_refreshing

    @property
    def token_url(self) -> str:
        return self._token_url

    @property
    def service_url(self) -> str:
        return self._service_url

    @property
    def username(self) -> str:
        return self._username

    @property
    def password(self) -> str:
        return self._password

    @property
    def last_result(self) -> RefreshResult | None:
        return self._last_result

    @property
    def last_error(self) -> Exception | None:
        if self._last_result is None:
            return None
        return self._last_result.error

    def build_refresh_url(self) -> URL:
        """Return the URL a refresh request is sent to."""
        return build_refresh_url(self._token_url, self._service_url)

    def register_update_hook(self, hook: UpdateHook) -> None:
        """Register a coroutine hook receiving each newly retrieved token."""
        self.hook_manager.register_update_hook(hook)

    def register_failure_hook(self, hook: FailureHook) -> None:
        """Register a coroutine hook receiving each refresh error."""
        self.hook_manager.register_failure_hook(hook)

    def refresh_token(
        self,
        failure: FailureCallback | None = None,
        success: SuccessCallback | None = None,
    ) -> asyncio.Future[RefreshResult]:
        """Refresh the authentication token without waiting for it.

        Must be called from a running event loop. Exactly one of the callbacks
        fires once the refresh completes; the returned future resolves to the
        same result. Cancelling the returned future does not cancel the
        request.

        Args:
            failure: Called with the error if the refresh fails.
            success: Called with no arguments after a new token is stored.

        Returns:
            Future resolving to the RefreshResult.
        """
        shared = self._join_or_start()
        result_future: asyncio.Future[RefreshResult] = (
            asyncio.get_running_loop().create_future()
        )

        def _deliver(task: asyncio.Task[RefreshResult]) -> None:
            result = self._result_of(task)
            self._invoke_callbacks(result, failure, success)
            if not result_future.done():
                result_future.set_result(result)

        shared.add_done_callback(_deliver)
        return result_future

    async def refresh(self) -> RefreshResult:
        """Refresh the authentication token and wait for the result.

        Transport and HTTP status failures do not raise; they are returned as
        a failed RefreshResult.
        """
        shared = self._join_or_start()
        try:
            return await asyncio.shield(shared)
        except asyncio.CancelledError:
            if shared.cancelled():
                return self._result_of(shared)
            raise

    async def close(self) -> None:
        """Cancel a pending refresh and close the session if the manager owns it."""
        task = self._inflight
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
            # A task cancelled before it started never reset the flag itself.
            self._is_refreshing = False
            self._inflight = None
        await self.hook_manager.drain()
        if self._owns_session:
            if self._session is not None and not self._session.closed:
                await self._session.close()
            self._session = None
        self._client = None

    async def __aenter__(self) -> TokenManager:
        return self

    async def __aexit__(self, _exc_type, _exc, _tb) -> None:
        await self.close()

    def _join_or_start(self) -> asyncio.Task[RefreshResult]:
        task = self._inflight
        if task is not None and not task.done():
            logging.debug(
                f"⏳ Token refresh already in flight, joining service={self._service_url}"
            )
            return task
        # Fails without a running loop before any state changes.
        loop = asyncio.get_running_loop()
        # Flag is raised before the task runs so back-to-back calls join it.
        self._is_refreshing = True
        task = loop.create_task(self._run_refresh())
        self._inflight = task
        return task

    async def _run_refresh(self) -> RefreshResult:
        context: dict[str, object] = {"service_url": self._service_url, "user": self._username}
        try:
            client = self._get_client()
            token = await client.fetch(self.build_refresh_url())
        except InternalError as e:
            self.failures.record_failure(classify_error(e))
            context["consecutive_failures"] = self.failures.consecutive
            log_error(
                "Token refresh failed", e, context=context, level=self.failures.log_level()
            )
            result = RefreshResult.failure(e)
        except Exception as e:  # noqa: BLE001
            import traceback

            self.failures.record_failure("unknown")
            logging.error(
                f"💥 Unexpected token refresh error: {type(e).__name__} user={self._username} error={str(e)} traceback={traceback.format_exc()}"
            )
            result = RefreshResult.failure(e)
        else:
            self._token = token
            self.failures.record_success()
            logging.info(
                f"✅ Token refreshed user={self._username} service={self._service_url}"
            )
            result = RefreshResult.success(token)
        finally:
            self._is_refreshing = False
            self._inflight = None

        self._last_result = result
        if result.ok:
            self.hook_manager.fire_update_hooks(result.token or "")
        else:
            self.hook_manager.fire_failure_hooks(result.error)
        return result

    def _get_client(self) -> TokenClient:
        if self._session is None or self._session.closed:
            if not self._owns_session:
                raise TransportError("HTTP session is closed")
            self._session = aiohttp.ClientSession()
            self._client = None
        if self._client is None:
            self._client = TokenClient(
                self._username, self._password, self._session, self.timeout
            )
        return self._client

    def _result_of(self, task: asyncio.Task[RefreshResult]) -> RefreshResult:
        if task.cancelled():
            return RefreshResult.failure(TransportError("Token refresh cancelled"))
        exc = task.exception()
        if exc is not None:  # pragma: no cover - _run_refresh converts errors
            return RefreshResult.failure(exc)
        return task.result()

    def _invoke_callbacks(
        self,
        result: RefreshResult,
        failure: FailureCallback | None,
        success: SuccessCallback | None,
    ) -> None:
        try:
            if result.ok:
                if success is not None:
                    success()
            elif failure is not None:
                failure(result.error)
        except Exception as e:  # noqa: BLE001
            logging.warning(
                f"⚠️ Token refresh callback error outcome={result.outcome.value} type={type(e).__name__} error={str(e)}"
            )
