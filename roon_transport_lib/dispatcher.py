"""
roon_transport_lib/dispatcher.py

Command dispatcher.

Responsibilities:
- Build one service-qualified request per call and hand it to the transport.
- Turn the transport's single reply callback into an awaitable Result.
- Normalize replies: "Success" -> ok; other reply name -> RequestFailed;
  no reply or a nameless reply -> NetworkError.

Non-responsibilities:
- Timeouts and retries (owned by the transport).
- Resolving zone/output references (done by the client before dispatch).
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Mapping
from typing import Any, Optional

from .const import REPLY_SUCCESS, SERVICE_NAME
from .errors import InvalidArgumentError, NetworkError, RequestFailed, TransportClientError
from .generators.registry import COMMANDS
from .transport import Reply, Transport
from .types import Result


class CommandDispatcher:
    """Stateless request/reply correlation over a Transport."""

    def __init__(
        self,
        transport: Transport,
        *,
        service_name: str = SERVICE_NAME,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._transport = transport
        self._service_name = service_name
        self._log = logger or logging.getLogger(__name__)

    @property
    def service_name(self) -> str:
        return self._service_name

    def method_name(self, name: str) -> str:
        return f"{self._service_name}/{name}"

    async def execute_command(self, command_key: str, /, **params: Any) -> Result[Any]:
        """Build a registered command with its generator and send it."""
        spec = COMMANDS.get(command_key)
        if spec is None:
            return Result.failure(InvalidArgumentError(f"Unknown command_key={command_key!r}"))
        try:
            body, name = spec.generator(**params)
        except (ValueError, TypeError) as exc:
            return Result.failure(InvalidArgumentError(str(exc)))
        return await self.execute(name, body, include_body=spec.include_body)

    async def execute(
        self,
        name: str,
        body: Optional[Mapping[str, Any]] = None,
        *,
        include_body: bool = False,
    ) -> Result[Any]:
        loop = asyncio.get_running_loop()
        future: asyncio.Future[Result[Any]] = loop.create_future()
        method = self.method_name(name)
        reply_lock = threading.Lock()
        replied = False

        def _resolve(result: Result[Any]) -> None:
            if not future.done():
                future.set_result(result)

        def _on_reply(reply: Optional[Reply], reply_body: Any) -> None:
            nonlocal replied
            with reply_lock:
                if replied:
                    self._log.warning("Ignoring duplicate reply for %s", method)
                    return
                replied = True
            result = self._normalize_reply(method, reply, reply_body, include_body=include_body)
            try:
                loop.call_soon_threadsafe(_resolve, result)
            except RuntimeError:
                # Loop already closed; nobody is waiting any more.
                self._log.debug("Dropping reply for %s: event loop closed", method)

        self._log.debug("Sending %s body=%s", method, body)
        try:
            self._transport.send_request(method, body, _on_reply)
        except Exception as exc:  # noqa: BLE001
            with reply_lock:
                already_replied = replied
                replied = True
            if not already_replied:
                self._log.debug("Transport failed to send %s: %s", method, exc)
                return Result.failure(NetworkError(str(exc), method=method))
        return await future

    def _normalize_reply(
        self,
        method: str,
        reply: Optional[Reply],
        body: Any,
        *,
        include_body: bool,
    ) -> Result[Any]:
        if reply is None:
            self._log.debug("No reply for %s", method)
            return Result.failure(NetworkError(method=method))
        name = getattr(reply, "name", None)
        if not isinstance(name, str) or not name:
            self._log.debug("Nameless reply for %s treated as no reply", method)
            return Result.failure(NetworkError(method=method))
        if name == REPLY_SUCCESS:
            self._log.debug("Reply %s for %s", name, method)
            return Result.success(body if include_body else None)
        error: TransportClientError = RequestFailed(name, method=method)
        self._log.debug("Reply %s for %s", name, method)
        return Result.failure(error)


__all__ = ["CommandDispatcher"]
