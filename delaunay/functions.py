"""Real-valued functions of one real variable."""

from __future__ import annotations

from abc import ABC, abstractmethod


class Function(ABC):
    """A callable mapping a float to a float."""

    @abstractmethod
    def __call__(self, x: float) -> float:
        """Evaluate the function at ``x``."""


class QuadraticFunction(Function):
    """The polynomial ``a*x**2 + b*x + c``; defaults to ``x**2``."""

    def __init__(self, a: float = 1.0, b: float = 0.0, c: float = 0.0) -> None:
        self.coefficients: tuple[float, float, float] = (a, b, c)

    def __call__(self, x: float) -> float:
        a, b, c = self.coefficients
        return a * x * x + b * x + c

    def set_coefficients(self, a: float, b: float, c: float) -> None:
        """Replace the three coefficients."""
        self.coefficients = (a, b, c)

    def __repr__(self) -> str:
        a, b, c = self.coefficients
        return f"QuadraticFunction({a!r}, {b!r}, {c!r})"