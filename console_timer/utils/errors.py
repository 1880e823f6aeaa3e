# console_timer/utils/errors.py
class TimerError(RuntimeError):
    """Base error for console_timer."""


class UnknownTimer(TimerError, LookupError):
    """
    Raised when sample/stop is called for a name with no running timer:
    - never started
    - already stopped
    This is a caller bug, so it is always raised, never swallowed.
    """

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Timer '{name}' does not exist")
