from __future__ import annotations

import asyncio
import logging
import threading
from http import HTTPStatus
from typing import Any, Callable, Mapping, Optional
from urllib.parse import urlsplit

from websockets.asyncio.server import ServerConnection, broadcast, serve
from websockets.exceptions import ConnectionClosed
from websockets.http11 import Request, Response

from contracts.ui_protocol import EVENT_ERROR, EVENT_HELLO, EVENT_RENDER
from runtime import CommandResult, RenderState

from .config import HEALTHZ_PATH, UIServerConfig
from .events import ReplayCache, make_event, parse_command

CommandHandler = Callable[[Mapping[str, Any]], CommandResult]


class UIServer:
    """Websocket bridge between the focus app and a browser UI.

    The server owns a private asyncio loop on a daemon thread. Render states
    are broadcast to every connected client and the latest one is replayed
    on connect. Client frames are decoded as commands and handed to
    `command_handler`.
    """

    def __init__(
        self,
        config: UIServerConfig,
        *,
        command_handler: Optional[CommandHandler] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._config = config
        self._command_handler = command_handler
        self._logger = logger or logging.getLogger("ui_server")
        self._replay = ReplayCache()
        self._clients: set[ServerConnection] = set()
        self._thread: Optional[threading.Thread] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._shutdown: Optional[asyncio.Future] = None
        self._ready = threading.Event()
        self._failure: Optional[BaseException] = None

    @property
    def host(self) -> str:
        return self._config.host

    @property
    def port(self) -> int:
        return self._config.port

    @property
    def is_running(self) -> bool:
        thread = self._thread
        return thread is not None and thread.is_alive() and self._failure is None

    def start(self, timeout_seconds: float = 5.0) -> None:
        if self.is_running:
            self._logger.warning("UI server is already running")
            return

        self._failure = None
        self._ready.clear()
        self._thread = threading.Thread(target=self._thread_main, daemon=True, name="ui-server")
        self._thread.start()

        if not self._ready.wait(timeout_seconds):
            raise RuntimeError(f"UI server did not start within {timeout_seconds:.1f}s")
        if self._failure is not None:
            raise RuntimeError(f"UI server startup failed: {self._failure}")

    def stop(self, timeout_seconds: float = 5.0) -> None:
        thread = self._thread
        if thread is None:
            return

        loop, shutdown = self._loop, self._shutdown
        if loop is not None and shutdown is not None and not loop.is_closed():
            loop.call_soon_threadsafe(_resolve, shutdown)

        thread.join(timeout=timeout_seconds)
        if thread.is_alive():
            self._logger.error("UI server thread did not stop within %.1fs", timeout_seconds)
        self._thread = None

    def publish_render(self, state: RenderState) -> None:
        """Render sink: broadcast the state and keep it for late joiners."""
        self.publish(EVENT_RENDER, **state.to_payload())

    def publish(self, event_type: str, **payload: Any) -> None:
        message = make_event(event_type, **payload)
        self._replay.remember(event_type, message)

        loop = self._loop
        if not self.is_running or loop is None:
            return
        try:
            loop.call_soon_threadsafe(self._broadcast, message)
        except RuntimeError:
            self._logger.debug("UI server loop closed; dropping %s event", event_type)

    def replay_frames(self) -> list[str]:
        return self._replay.frames()

    def handle_frame(self, frame: str | bytes) -> Optional[str]:
        """Apply one client frame; returns an error event for the sender, if any."""
        try:
            command = parse_command(frame)
        except ValueError as error:
            self._logger.warning("Ignoring malformed UI frame: %s", error)
            return make_event(EVENT_ERROR, reason="malformed_frame", message=str(error))

        if self._command_handler is None:
            self._logger.debug("No command handler; dropping %s", command)
            return None

        result = self._command_handler(command)
        if result.accepted:
            return None
        return make_event(
            EVENT_ERROR,
            command=result.command,
            reason=result.reason,
            message=result.detail,
        )

    # ----- Loop thread -----
    def _thread_main(self) -> None:
        loop = asyncio.new_event_loop()
        self._loop = loop
        try:
            loop.run_until_complete(self._serve_until_shutdown())
        except Exception as error:  # pragma: no cover - needs a real socket
            self._failure = error
            self._logger.error("UI server failed: %s", error, exc_info=True)
        finally:
            self._ready.set()
            self._loop = None
            self._shutdown = None
            loop.close()

    async def _serve_until_shutdown(self) -> None:
        self._shutdown = asyncio.get_running_loop().create_future()
        async with serve(
            self._on_connection,
            self._config.host,
            self._config.port,
            process_request=self._route_http,
            logger=self._logger,
        ):
            self._logger.info(
                "UI server listening on ws://%s:%d%s",
                self._config.host,
                self._config.port,
                self._config.websocket_path,
            )
            self._ready.set()
            await self._shutdown
        self._clients.clear()

    def _route_http(self, connection: ServerConnection, request: Request) -> Optional[Response]:
        path = urlsplit(request.path).path
        if path == self._config.websocket_path:
            return None
        if path == HEALTHZ_PATH:
            return connection.respond(HTTPStatus.OK, "ok\n")
        return connection.respond(HTTPStatus.NOT_FOUND, "not found\n")

    async def _on_connection(self, connection: ServerConnection) -> None:
        self._clients.add(connection)
        self._logger.info("Client connected: %s", connection.remote_address)
        try:
            await connection.send(make_event(EVENT_HELLO, message="UI websocket connected"))
            for message in self._replay.frames():
                await connection.send(message)
            async for frame in connection:
                reply = self.handle_frame(frame)
                if reply is not None:
                    await connection.send(reply)
        except ConnectionClosed as closed:
            self._logger.debug("Connection closed: %s", closed)
        finally:
            self._clients.discard(connection)
            self._logger.info("Client disconnected: %s", connection.remote_address)

    def _broadcast(self, message: str) -> None:
        if self._clients:
            broadcast(tuple(self._clients), message)


def _resolve(future: asyncio.Future) -> None:
    if not future.done():
        future.set_result(None)
