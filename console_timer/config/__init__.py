from .app_config import AppConfig
from .log_config import LogConfig
from .timer_config import TimerConfig

__all__ = ["AppConfig", "LogConfig", "TimerConfig"]
