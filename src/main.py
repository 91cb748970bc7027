import logging
import signal
import sys
import time
from dataclasses import dataclass
from typing import Optional

from app_config import AppConfig, AppConfigurationError, load_app_config
from notifications import DesktopNotificationScheduler, NullNotificationScheduler
from persistence import BackgroundWriter, JsonFileKeyValueStore, PersistenceGateway
from pomodoro import SessionDurations
from runtime import CommandDispatcher, FocusApp, RenderState
from server import ServerConfigurationError, UIServer, UIServerConfig


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure logging for the application."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger("pomodoro_focus")


@dataclass
class Runtime:
    """Long-lived services owned by `main()` and released on shutdown."""
    app: FocusApp
    writer: BackgroundWriter
    ui_server: Optional[UIServer] = None

    def shutdown(self) -> None:
        self.app.close()
        if self.ui_server is not None:
            self.ui_server.stop()
        self.writer.flush(timeout_seconds=5.0)
        self.writer.shutdown()


def build_runtime(config: AppConfig, logger: logging.Logger) -> Runtime:
    """Wire storage, notifications, the app, and the optional UI bridge."""
    writer = BackgroundWriter(logger=logging.getLogger("persistence"))
    gateway = PersistenceGateway(
        JsonFileKeyValueStore(config.storage.path),
        writer=writer,
    )

    if config.notifications.enabled:
        notifier = DesktopNotificationScheduler(
            app_name=config.notifications.app_name,
            timeout_seconds=config.notifications.timeout_seconds,
        )
    else:
        logger.info("Desktop notifications disabled")
        notifier = NullNotificationScheduler()

    app = FocusApp(
        gateway=gateway,
        durations=SessionDurations.from_settings(config.timer),
        notifier=notifier,
    )
    app.subscribe(_log_render_state)

    ui_config = UIServerConfig.from_settings(config.ui_server)
    ui_server = None
    if ui_config.enabled:
        dispatcher = CommandDispatcher(app)
        ui_server = UIServer(ui_config, command_handler=dispatcher.dispatch)
        app.subscribe(ui_server.publish_render)
        ui_server.start()

    return Runtime(app=app, writer=writer, ui_server=ui_server)


def _log_render_state(state: RenderState) -> None:
    logging.getLogger("render").debug(
        "%s %s active=%s daily=%d tasks=%d",
        state.session_label,
        state.formatted_time,
        state.active,
        state.daily_count,
        len(state.tasks),
    )


def main() -> int:
    logger = setup_logging()

    try:
        config = load_app_config()
    except AppConfigurationError as error:
        logger.error("Configuration error: %s", error)
        return 1

    logging.getLogger().setLevel(config.logging.level)
    logger.info("Loaded configuration from %s", config.source_file)

    try:
        runtime = build_runtime(config, logger)
    except (ServerConfigurationError, RuntimeError) as error:
        logger.error("Startup failed: %s", error)
        return 1

    shutdown = False

    def handle_signal(signum, frame) -> None:
        del frame
        nonlocal shutdown
        logger.info("Signal %s received, stopping.", signal.Signals(signum).name)
        shutdown = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        while not shutdown:
            time.sleep(0.2)
    except KeyboardInterrupt:
        logger.info("Stopping by user request.")
    finally:
        runtime.shutdown()

    return 0


if __name__ == "__main__":
    sys.exit(main())
