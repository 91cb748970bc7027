from .app import FocusApp
from .commands import CommandDispatcher, CommandResult
from .render import RenderPublisher, RenderSink, RenderState
from .ticker import RepeatingTicker, TickerLike

__all__ = [
    "CommandDispatcher",
    "CommandResult",
    "FocusApp",
    "RenderPublisher",
    "RenderSink",
    "RenderState",
    "RepeatingTicker",
    "TickerLike",
]
