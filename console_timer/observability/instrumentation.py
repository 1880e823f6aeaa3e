#!filepath: console_timer/observability/instrumentation.py
from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from functools import wraps
from typing import Callable, Dict, Optional

from console_timer.observability.timer import TimerRegistry


@dataclass
class Instrumentation:
    """
    基于同一个 TimerRegistry 的作用域计时。

    - timer(name)  : with 块计时，退出时 stop（异常也会 stop）
                     同名嵌套 / 递归只由最外层计时
    - sample(name) : with 块内的中间读数
    - timed(name)  : 函数装饰器
    - last         : 每个名字最近一次的最终耗时（ms），不做累计
    """

    enabled: bool = True
    emit: bool = True
    registry: TimerRegistry = field(default_factory=TimerRegistry)

    def __post_init__(self):
        self.last: Dict[str, float] = {}
        # name -> 嵌套深度，只有最外层 scope 负责 start/stop
        self._depth: Dict[str, int] = {}

    @classmethod
    def from_config(cls, config, registry: Optional[TimerRegistry] = None) -> "Instrumentation":
        return cls(
            enabled=config.enabled,
            emit=config.emit,
            registry=registry if registry is not None else TimerRegistry(),
        )

    def _emit(self, emit: Optional[bool]) -> bool:
        return self.emit if emit is None else emit

    def timer(self, name: str, *, emit: Optional[bool] = None):
        inst = self

        @contextmanager
        def _ctx():
            if not inst.enabled:
                yield
                return

            depth = inst._depth.get(name, 0)
            if depth == 0:
                inst.registry.start(name)
            inst._depth[name] = depth + 1
            try:
                yield
            finally:
                if depth == 0:
                    del inst._depth[name]
                    # 计时器可能已被外部 stop/clear，此时不覆盖 body 的异常
                    if name in inst.registry:
                        inst.last[name] = inst.registry.stop(name, emit=inst._emit(emit))
                else:
                    inst._depth[name] = depth

        return _ctx()

    def sample(self, name: str, emit: Optional[bool] = None, message: Optional[str] = None) -> float:
        if not self.enabled:
            return 0.0
        return self.registry.sample(name, emit=self._emit(emit), message=message)

    def timed(self, name: Optional[str] = None, *, emit: Optional[bool] = None) -> Callable:
        def decorator(func: Callable):
            label = name or func.__qualname__

            @wraps(func)
            def wrapper(*args, **kwargs):
                with self.timer(label, emit=emit):
                    return func(*args, **kwargs)

            return wrapper

        return decorator


# -------------------------------------------------------------
# No-op Instrumentation（禁用计时）
# -------------------------------------------------------------
class NoOpInstrumentation:
    """计时关闭时使用，接口与 Instrumentation 一致。"""

    enabled = False

    def __init__(self):
        self.last: Dict[str, float] = {}

    def timer(self, name: str, *, emit: Optional[bool] = None):
        return _NoOpTimer()

    def sample(self, name: str, emit: Optional[bool] = None, message: Optional[str] = None) -> float:
        return 0.0

    def timed(self, name: Optional[str] = None, *, emit: Optional[bool] = None) -> Callable:
        def decorator(func: Callable):
            return func

        return decorator


class _NoOpTimer:
    def __enter__(self):
        pass

    def __exit__(self, exc_type, exc, tb):
        pass
