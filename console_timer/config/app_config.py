#!filepath: console_timer/config/app_config.py
import os

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel

from .log_config import LogConfig
from .timer_config import TimerConfig


def default_config_path() -> str:
    """包内默认配置：console_timer/config/base.yml"""
    return os.path.join(os.path.dirname(os.path.abspath(__file__)), "base.yml")


# 环境变量 → (section, key)
ENV_OVERRIDES = {
    "CONSOLE_TIMER_LOG_LEVEL": ("log", "level"),
    "CONSOLE_TIMER_LOG_DIR": ("log", "dir"),
    "CONSOLE_TIMER_ENABLED": ("timer", "enabled"),
    "CONSOLE_TIMER_EMIT": ("timer", "emit"),
}


class AppConfig(BaseModel):
    log: LogConfig = LogConfig()
    timer: TimerConfig = TimerConfig()

    @classmethod
    def load(cls, path: str | None = None) -> "AppConfig":
        """
        加载 YAML 配置 + .env
        - 默认使用包内 base.yml
        - .env 从当前工作目录读取（不覆盖已存在的环境变量）
        - CONSOLE_TIMER_* 环境变量覆盖 YAML
        """
        load_dotenv(os.path.join(os.getcwd(), ".env"))

        if path is None:
            path = default_config_path()

        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        for env_key, (section, key) in ENV_OVERRIDES.items():
            value = os.getenv(env_key)
            if value is not None:
                # 空 section（`timer:`）在 YAML 中解析为 None
                raw[section] = raw.get(section) or {}
                raw[section][key] = value

        return cls(**raw)
