"""
functions.py

Типи цільових функцій та набір еталонних функцій для перевірки методів
мінімізації.

Формат:
    - одномірні функції: float -> float;
    - одномірні функції з похідною: float -> (f(x), f'(x));
    - багатовимірні функції: numpy.ndarray форми (n,) -> float.

Еталонні функції:
    poly2, poly2_df         - (x - 1)(x - 2), мінімум у x = 1.5
    cosine, cosine_df       - cos(x), мінімум у x = π (після брекетингу з (0.01, 1))
    saw                     - x^3 для x >= 0, -x/1000 для x < 0 (злам у мінімумі 0)
    quartic_bowl            - x^2 + y^4, мінімум у (0, 0)
    shifted_paraboloid      - x^2 + y^2 - 2x, мінімум у (1, 0)

Реєстр FUNCTIONS дозволяє вибирати функцію за ключем (тести, порівняльні таблиці).
"""

from __future__ import annotations

from dataclasses import dataclass
from math import cos, pi, sin
from typing import Callable, Dict, Optional, Tuple

import numpy as np

ArrayLike = np.ndarray
Scalar1DFunction = Callable[[float], float]
ValueAndDerivative = Callable[[float], Tuple[float, float]]
ScalarFunction = Callable[[ArrayLike], float]
VectorFunction = Callable[[ArrayLike], ArrayLike]


# ---------------------------------------------------------------------------
# Одномірні функції
# ---------------------------------------------------------------------------

def poly2(x: float) -> float:
    """(x - 1)(x - 2): корені 1 та 2, мінімум у 1.5."""
    return (x - 1.0) * (x - 2.0)


def poly2_df(x: float) -> Tuple[float, float]:
    """poly2 разом з похідною 2x - 3."""
    return (x - 1.0) * (x - 2.0), 2.0 * x - 3.0


def cosine(x: float) -> float:
    return cos(x)


def cosine_df(x: float) -> Tuple[float, float]:
    return cos(x), -sin(x)


def saw(x: float) -> float:
    """
    Негладка функція зі зламом у мінімумі:
        x^3       для x >= 0
        -x / 1000 для x < 0
    """
    if x >= 0.0:
        return x * x * x
    return -x / 1000.0


# ---------------------------------------------------------------------------
# Багатовимірні функції
# x = [x1, x2]
# ---------------------------------------------------------------------------

def quartic_bowl(x: ArrayLike) -> float:
    """
    f(x1, x2) = x1^2 + x2^4

    Додатна всюди, окрім початку координат, тож (0, 0) - мінімум.
    """
    x1, x2 = np.asarray(x, dtype=float)
    return float(x1 ** 2 + x2 ** 4)


def shifted_paraboloid(x: ArrayLike) -> float:
    """f(x1, x2) = x1^2 + x2^2 - 2*x1, мінімум у (1, 0) зі значенням -1."""
    x1, x2 = np.asarray(x, dtype=float)
    return float(x1 ** 2 + x2 ** 2 - 2.0 * x1)


def grad_shifted_paraboloid(x: ArrayLike) -> ArrayLike:
    x1, x2 = np.asarray(x, dtype=float)
    return np.array([2.0 * x1 - 2.0, 2.0 * x2], dtype=float)


# ---------------------------------------------------------------------------
# Реєстр функцій
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TargetFunction:
    """
    Опис еталонної функції.

    Атрибути:
        key     - короткий ідентифікатор ("poly2", "saw", ...)
        name    - формула для таблиць і повідомлень
        func    - сама функція
        func_df - функція, що повертає (f(x), f'(x)), якщо є
        x_min   - відомий мінімум (float або кортеж координат)
    """
    key: str
    name: str
    func: Callable
    func_df: Optional[ValueAndDerivative] = None
    x_min: object = None


FUNCTIONS: Dict[str, TargetFunction] = {
    "poly2": TargetFunction(
        key="poly2",
        name="f(x) = (x - 1)(x - 2)",
        func=poly2,
        func_df=poly2_df,
        x_min=1.5,
    ),
    "cosine": TargetFunction(
        key="cosine",
        name="f(x) = cos(x)",
        func=cosine,
        func_df=cosine_df,
        x_min=pi,
    ),
    "saw": TargetFunction(
        key="saw",
        name="f(x) = x^3 (x >= 0), -x/1000 (x < 0)",
        func=saw,
        x_min=0.0,
    ),
    "quartic_bowl": TargetFunction(
        key="quartic_bowl",
        name="f(x1, x2) = x1^2 + x2^4",
        func=quartic_bowl,
        x_min=(0.0, 0.0),
    ),
    "shifted_paraboloid": TargetFunction(
        key="shifted_paraboloid",
        name="f(x1, x2) = x1^2 + x2^2 - 2*x1",
        func=shifted_paraboloid,
        x_min=(1.0, 0.0),
    ),
}

__all__ = [
    "ArrayLike",
    "Scalar1DFunction",
    "ValueAndDerivative",
    "ScalarFunction",
    "VectorFunction",
    "poly2", "poly2_df",
    "cosine", "cosine_df",
    "saw",
    "quartic_bowl",
    "shifted_paraboloid",
    "grad_shifted_paraboloid",
    "TargetFunction",
    "FUNCTIONS",
]
