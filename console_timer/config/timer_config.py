#!filepath: console_timer/config/timer_config.py
from pydantic import BaseModel


class TimerConfig(BaseModel):
    enabled: bool = True
    emit: bool = True
