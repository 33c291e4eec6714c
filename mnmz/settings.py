"""
settings.py

Числові константи та нормалізація параметрів, спільні для всіх методів.

    MIN_TOLERANCE          - найменша допустима точність 1D-пошуку.
                             Приблизно sqrt(машинної точності double):
                             з розкладу Тейлора f(x + ε) ≈ f(x) + f''(x) ε² / 2
                             видно, що точніше за ~sqrt(eps) мінімум не локалізувати.
    DEFAULT_MAX_ITERATIONS - ліміт ітерацій 1D-пошуку, якщо передано 0.
    MAX_ITERATIONS_LIMIT   - верхня межа ліміту ітерацій 1D-пошуку.
    SIMPLEX_MIN_TOLERANCE  - найменша допустима відносна точність симплекс-методу.
"""

from __future__ import annotations

from math import isfinite

MIN_TOLERANCE: float = 3.0e-8
DEFAULT_MAX_ITERATIONS: int = 500
MAX_ITERATIONS_LIMIT: int = 1000
SIMPLEX_MIN_TOLERANCE: float = 1.0e-10


def resolve_tolerance(tol: float) -> float:
    """Точність 1D-пошуку, обмежена знизу MIN_TOLERANCE."""
    return max(float(tol), MIN_TOLERANCE)


def resolve_simplex_tolerance(ftol: float) -> float:
    return max(float(ftol), SIMPLEX_MIN_TOLERANCE)


def resolve_max_iterations(max_iter: int) -> int:
    """
    Ліміт ітерацій 1D-пошуку:
        0            -> DEFAULT_MAX_ITERATIONS
        1 .. 1000    -> без змін
        > 1000       -> MAX_ITERATIONS_LIMIT
    """
    max_iter = int(max_iter)
    if max_iter < 0:
        raise ValueError(f"max_iter не може бути від'ємним, отримано: {max_iter}")
    if max_iter < 1:
        return DEFAULT_MAX_ITERATIONS
    return min(max_iter, MAX_ITERATIONS_LIMIT)


def validate_interval(a: float, b: float) -> None:
    """
    Перевірити початкові абсциси 1D-пошуку.

    Порядок a, b не важливий, але точки мають бути скінченними та різними:
    інакше напрямок спуску не визначений і арифметика дає NaN.
    """
    if not (isfinite(a) and isfinite(b)):
        raise ValueError(f"Початкові точки мають бути скінченними, отримано: a={a}, b={b}")
    if a == b:
        raise ValueError(f"Початкові точки мають бути різними, отримано: a = b = {a}")


__all__ = [
    "MIN_TOLERANCE",
    "DEFAULT_MAX_ITERATIONS",
    "MAX_ITERATIONS_LIMIT",
    "SIMPLEX_MIN_TOLERANCE",
    "resolve_tolerance",
    "resolve_simplex_tolerance",
    "resolve_max_iterations",
    "validate_interval",
]
