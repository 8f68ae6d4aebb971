from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable


class TimerHandle(ABC):
    @property
    @abstractmethod
    def cancelled(self) -> bool:
        ...

    @abstractmethod
    def cancel(self) -> None:
        """Stop the timer. Safe to call more than once."""
        ...


class Clock(ABC):
    @abstractmethod
    def now(self) -> datetime:
        ...

    @abstractmethod
    def call_later(self, delay_s: float, fn: Callable[[], None]) -> TimerHandle:
        """Run fn once after delay_s seconds."""
        ...

    @abstractmethod
    def call_every(self, period_s: float, fn: Callable[[], None]) -> TimerHandle:
        """Run fn every period_s seconds until the handle is cancelled. First run is one period out."""
        ...
