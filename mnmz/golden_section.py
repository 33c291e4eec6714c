"""
golden_section.py

Метод золотого перерізу для пошуку мінімуму функції одного аргументу.

Ідея:
    - спочатку find_bracket() дає трійку a, b, c з f(b) < f(a), f(b) < f(c);
    - тримаємо чотири точки x0, x1, x2, x3; більший із двох зовнішніх
      відрізків ділимо в пропорції золотого перерізу R = 0.61803399;
    - на кожній ітерації одне обчислення функції, інтервал стискається
      в R разів;
    - зупинка, коли |x3 - x0| <= tol * (|x1| + |x2|).

Для негладких функцій (злам у мінімумі, особливо в нулі) критерій
вище може ніколи не виконатися, тому є ще ліміт ітерацій та примусовий
вихід після 10 ітерацій, коли і ширина інтервалу, і різниця значень у
внутрішніх точках менші за tol.
"""

from __future__ import annotations

import logging
from typing import Tuple

from .bracket import BracketResult, find_bracket, shift2, shift3
from .objective import ScalarObjective
from .settings import resolve_max_iterations, resolve_tolerance

logger = logging.getLogger(__name__)

# Золоті пропорції
R: float = 0.61803399
C: float = 1.0 - R

# Після скількох ітерацій дозволено примусовий вихід
FORCED_EXIT_ITERATIONS: int = 10


def _run(
    func: ScalarObjective,
    a: float,
    b: float,
    tol: float,
    max_iter: int,
) -> Tuple[float, float, int, str, BracketResult]:
    tol = resolve_tolerance(tol)
    max_iter = resolve_max_iterations(max_iter)

    bracket = find_bracket(func, a, b)
    a = bracket.a
    b = bracket.b
    c = bracket.c

    x0 = a
    x3 = c

    # x0..x1 - менший відрізок, нова точка - у більшому
    if abs(c - b) > abs(b - a):
        x1 = b
        x2 = b + C * (c - b)
    else:
        x2 = b
        x1 = b - C * (b - a)

    # Функцію в кінцевих точках ніколи не обчислюємо
    f1 = func(x1)
    f2 = func(x2)

    iterations = 1
    stopped_by = "tol"

    while abs(x3 - x0) > tol * (abs(x1) + abs(x2)):
        if iterations >= max_iter:
            stopped_by = "max_iter"
            break

        if (
            iterations > FORCED_EXIT_ITERATIONS
            and abs(x3 - x0) < tol
            and abs(f1 - f2) < tol
        ):
            stopped_by = "forced_exit"
            break

        if f2 < f1:
            x0, x1, x2 = shift3(x0, x1, x2, R * x2 + C * x3)
            f1, f2 = shift2(f1, f2, func(x2))
        else:
            x3, x2, x1 = shift3(x3, x2, x1, R * x1 + C * x0)
            f2, f1 = shift2(f2, f1, func(x1))

        iterations += 1

    if stopped_by == "max_iter":
        logger.info("golden_section_search: iteration limit %d reached", max_iter)
    else:
        logger.debug("golden_section_search: stopped by %s after %d iterations", stopped_by, iterations)

    # Повертаємо кращу з двох внутрішніх точок
    if f1 < f2:
        return x1, f1, iterations, stopped_by, bracket
    return x2, f2, iterations, stopped_by, bracket


def golden_section_search(
    func: ScalarObjective,
    a: float,
    b: float,
    tol: float = 0.0,
    max_iter: int = 0,
) -> Tuple[float, float, int]:
    """
    Знайти мінімум func методом золотого перерізу.

    Parameters
    ----------
    func : Callable[[float], float]
        Цільова функція.
    a, b : float
        Дві різні початкові точки для брекетингу (порядок довільний).
    tol : float
        Бажана відносна точність; обмежується знизу 3e-8.
    max_iter : int
        Ліміт ітерацій; 0 означає 500, більше 1000 обрізається до 1000.

    Returns
    -------
    (xmin, fmin, iterations)
    """
    xmin, fmin, iterations, _, _ = _run(func, a, b, tol, max_iter)
    return xmin, fmin, iterations


__all__ = [
    "R",
    "C",
    "golden_section_search",
]
