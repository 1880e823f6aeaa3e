#!filepath: console_timer/utils/logger.py
import sys
from functools import wraps
from time import perf_counter
from typing import Callable, Optional

from loguru import logger


class Logging:
    """
    日志模块（loguru 封装）
    ---------------------------------------
    - 默认不改动全局 logger（库被 import 时不抢占 sink）
    - configure() 显式配置：stderr + 可选按日期切割的文件日志
    - 包含函数级日志装饰器 catch
    ---------------------------------------
    """

    def __init__(
        self,
        log_dir: Optional[str] = None,
        rotation: str = "1 day",
        retention: str = "30 days",
        log_level: str = "WARNING",
    ):
        self.log_dir = log_dir
        self.rotation = rotation
        self.retention = retention
        self.level = log_level
        self.configured = False

    def configure(self) -> None:
        """
        配置全局 logger（覆盖已有 sink）
        """
        logger.remove()

        logger.add(
            sink=sys.stderr,
            level=self.level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}",
        )

        if self.log_dir:
            logger.add(
                sink=f"{self.log_dir}/{{time:YYYY-MM-DD}}.log",
                rotation=self.rotation,
                retention=self.retention,
                level=self.level,
                format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}",
                enqueue=True,
                backtrace=True,
                diagnose=True,
            )

        self.configured = True
        logger.debug("Logger initialized: level={} dir={}", self.level, self.log_dir)

    # ----------- 日志方法 -----------
    def debug(self, msg: str, *args, **kwargs):
        logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        logger.error(msg, *args, **kwargs)

    def exception(self, msg: str, *args, **kwargs):
        logger.exception(msg, *args, **kwargs)

    # ---------- 日志装饰器 ----------
    def catch(self, msg: str = "Exception occurred", log_time: bool = False) -> Callable:
        """
        记录异常后重新抛出；log_time=True 时额外记录耗时（DEBUG）。
        """

        def decorator(func: Callable):
            @wraps(func)
            def wrapper(*args, **kwargs):
                start = perf_counter()

                try:
                    result = func(*args, **kwargs)
                except Exception:
                    logger.exception(f"[ERROR] {func.__name__}: {msg}")
                    raise

                if log_time:
                    cost = perf_counter() - start
                    logger.debug(f"[TIME] {func.__name__} took {cost:.4f}s")

                return result

            return wrapper

        return decorator


# 默认全局 logs（未配置 sink，由 init_logging 显式配置）
logs = Logging()


def init_logging(config) -> Logging:
    """
    按 LogConfig 重新配置全局 logs。
    """
    logs.log_dir = config.dir
    logs.rotation = config.rotation
    logs.retention = config.retention
    logs.level = config.level
    logs.configure()
    return logs
