#!filepath: console_timer/observability/timer.py
import sys
import time
from typing import Callable, Dict, Optional, TextIO, Tuple

from console_timer.utils.errors import UnknownTimer
from console_timer.utils.logger import logs


def duration_to_ms(seconds: float) -> float:
    """秒 → 毫秒（保留小数，不截断）"""
    return seconds * 1000.0


def format_duration(name: str, ms: float, message: Optional[str] = None) -> str:
    line = f"{name}: {ms:.2f}ms"
    if message:
        line += f" - {message}"
    return line


class TimerRegistry:
    """
    命名计时器注册表（console.time 风格）
    - start(name)          开始 / 重置
    - sample(name, emit)   读取耗时，计时器继续运行
    - stop(name, emit)     读取耗时并结束计时器
    返回值均为毫秒（float）。

    不做内部加锁：多线程共享时由调用方自行加锁。
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.perf_counter,
        stream: Optional[TextIO] = None,
    ):
        self.clock = clock
        self.stream = stream
        # name -> 单调时钟起点（秒）
        self.entries: Dict[str, float] = {}

    def start(self, name: str) -> None:
        if not name:
            raise ValueError("Timer name must be a non-empty string")
        # 重复 start 直接覆盖（last-start-wins）
        self.entries.pop(name, None)
        self.entries[name] = self.clock()
        logs.debug(f"[Timer] start {name}")

    def sample(self, name: str, emit: bool = True, message: Optional[str] = None) -> float:
        """中间读数；message 附加在输出行尾：name: X.XXms - message"""
        if name not in self.entries:
            raise UnknownTimer(name)
        ms = self._elapsed_ms(name)
        logs.debug(f"[Timer] sample {name} = {ms:.3f}ms")
        if emit:
            self._emit(name, ms, message)
        return ms

    def stop(self, name: str, emit: bool = True) -> float:
        if name not in self.entries:
            raise UnknownTimer(name)
        ms = self._elapsed_ms(name)
        del self.entries[name]
        logs.debug(f"[Timer] stop {name} = {ms:.3f}ms")
        if emit:
            self._emit(name, ms)
        return ms

    # console API 命名
    time = start
    time_log = sample
    time_end = stop

    def active(self) -> Tuple[str, ...]:
        """Names of running timers, in start order."""
        return tuple(self.entries)

    def clear(self) -> None:
        self.entries.clear()

    def __contains__(self, name: object) -> bool:
        return name in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def _elapsed_ms(self, name: str) -> float:
        return duration_to_ms(self.clock() - self.entries[name])

    def _emit(self, name: str, ms: float, message: Optional[str] = None) -> None:
        # stderr 在调用时解析，便于重定向
        stream = self.stream if self.stream is not None else sys.stderr
        print(format_duration(name, ms, message), file=stream)
