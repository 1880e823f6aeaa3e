#!filepath: console_timer/__init__.py

from .utils.logger import Logging, logs, init_logging
from .utils.errors import TimerError, UnknownTimer
from .observability.timer import TimerRegistry, duration_to_ms, format_duration
from .observability.instrumentation import Instrumentation, NoOpInstrumentation
from .config import AppConfig

__version__ = "0.1.0"

__all__ = [
    "logs", "Logging", "init_logging",
    "TimerError", "UnknownTimer",
    "TimerRegistry", "duration_to_ms", "format_duration",
    "Instrumentation", "NoOpInstrumentation",
    "AppConfig",
]
