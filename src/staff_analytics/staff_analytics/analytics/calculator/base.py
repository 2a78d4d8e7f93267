from __future__ import annotations

from abc import ABC, abstractmethod


class OvertimeCalculator(ABC):
    """Calculator interface (Strategy Pattern for overtime rules)."""

    @property
    @abstractmethod
    def standard_minutes(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def overtime_minutes(self, minutes_worked: int) -> int:
        raise NotImplementedError
