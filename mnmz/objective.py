"""
objective.py

Інтерфейси цільових функцій та обгортка з підрахунком викликів.

Ідея:
    - Алгоритми мінімізації приймають будь-який callable, що задовольняє
      один із протоколів:
        * ScalarObjective       - x: float -> float
        * DerivativeObjective   - x: float -> (f(x), f'(x))
        * VectorObjective       - x: np.ndarray -> float
    - Самі алгоритми нічого не кешують і не рахують. Якщо потрібна
      кількість викликів (зведена таблиця, тести), функцію обгортають
      у CountingObjective.

Використання:
    counted = CountingObjective(poly2)
    brent_search(counted, 10.0, 20.0)
    counted.func_evals
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Protocol, Tuple, runtime_checkable

import numpy as np

from .functions import ArrayLike


# ---------------------------------------------------------------------------
# Протоколи (capability-інтерфейси)
# ---------------------------------------------------------------------------

@runtime_checkable
class ScalarObjective(Protocol):
    def __call__(self, x: float) -> float: ...


@runtime_checkable
class DerivativeObjective(Protocol):
    def __call__(self, x: float) -> Tuple[float, float]: ...


@runtime_checkable
class VectorObjective(Protocol):
    def __call__(self, x: ArrayLike) -> float: ...


# ---------------------------------------------------------------------------
# Обгортка з лічильником викликів
# ---------------------------------------------------------------------------

class CountingObjective:
    """
    Обгортка над цільовою функцією, що рахує кількість викликів.

    Параметри:
        func       - функція, яку обгортаємо (скалярна, з похідною чи векторна);
        derivative - окрема похідна f'(x); якщо задана, виклик повертає
                     пару (f(x), f'(x)) і цю пару рахуємо як один виклик;
        vector     - якщо True, аргумент приводиться до np.ndarray(float),
                     а результат - до float.

    Атрибути:
        func_evals - кількість викликів цільової функції з моменту reset().
    """

    def __init__(
        self,
        func: Callable[..., Any],
        derivative: Optional[Callable[[float], float]] = None,
        vector: bool = False,
    ) -> None:
        self.func = func
        self.derivative = derivative
        self.vector = vector
        self.func_evals: int = 0

    def reset(self) -> None:
        """Скинути лічильник перед новим запуском."""
        self.func_evals = 0

    def __call__(self, x):
        self.func_evals += 1

        if self.vector:
            return float(self.func(np.asarray(x, dtype=float)))

        if self.derivative is not None:
            return self.func(x), self.derivative(x)

        return self.func(x)

    def __repr__(self) -> str:
        name = getattr(self.func, "__name__", repr(self.func))
        return f"CountingObjective({name}, func_evals={self.func_evals})"


__all__ = [
    "ScalarObjective",
    "DerivativeObjective",
    "VectorObjective",
    "CountingObjective",
]
