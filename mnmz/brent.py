"""
brent.py

Метод Брента для пошуку мінімуму функції одного аргументу (без похідної).

Поєднує обернену параболічну інтерполяцію через три найкращі точки з
кроками золотого перерізу, коли парабола ненадійна.

Позначення стану (LineSearchState):
    a, b       - поточний інтервал, a < b
    x, w, v    - найкраща, друга та третя найкращі точки
    fx, fw, fv - значення функції в них
    d, e       - останній та передостанній кроки
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from math import copysign
from typing import Optional, Tuple

from .bracket import BracketResult, find_bracket, shift3
from .objective import ScalarObjective
from .settings import resolve_max_iterations, resolve_tolerance

logger = logging.getLogger(__name__)

# Частка золотого перерізу для кроку в більший відрізок
CGOLD: float = 1.0 - 0.61803399

# Захищає від спроби досягти відносної точності для мінімуму, що дорівнює нулю
ZEPS: float = sys.float_info.epsilon * 1.0e-3

# Після скількох ітерацій дозволено примусовий вихід
FORCED_EXIT_ITERATIONS: int = 100


@dataclass
class LineSearchState:
    a: float
    b: float
    x: float
    w: float
    v: float
    fx: float
    fw: float
    fv: float
    d: float = 0.0
    e: float = 0.0

    def accept(self, u: float, fu: float) -> None:
        """
        Оновити інтервал і точки x, w, v після обчислення f(u).
        """
        if fu <= self.fx:
            if u >= self.x:
                self.a = self.x
            else:
                self.b = self.x
            self.v, self.w, self.x = shift3(self.v, self.w, self.x, u)
            self.fv, self.fw, self.fx = shift3(self.fv, self.fw, self.fx, fu)
        else:
            if u < self.x:
                self.a = u
            else:
                self.b = u
            if fu <= self.fw or self.w == self.x:
                self.v, self.w = self.w, u
                self.fv, self.fw = self.fw, fu
            elif fu <= self.fv or self.v == self.x or self.v == self.w:
                self.v = u
                self.fv = fu


def _golden_step(state: LineSearchState, xm: float) -> None:
    # Крок золотого перерізу в більший із двох відрізків
    state.e = state.a - state.x if state.x >= xm else state.b - state.x
    state.d = CGOLD * state.e


def _trial_step(state: LineSearchState, xm: float, tol1: float, tol2: float) -> None:
    """Вибрати наступний крок d: параболічний, якщо прийнятний, інакше золотий."""
    if abs(state.e) <= tol1:
        _golden_step(state, xm)
        return

    x, w, v = state.x, state.w, state.v
    fx, fw, fv = state.fx, state.fw, state.fv

    # Пробна парабола через x, w, v
    r = (x - w) * (fx - fv)
    q = (x - v) * (fx - fw)
    p = (x - v) * q - (x - w) * r
    q = 2.0 * (q - r)
    if q > 0.0:
        p = -p
    q = abs(q)

    etemp = state.e
    state.e = state.d

    if abs(p) >= abs(0.5 * q * etemp) or p <= q * (state.a - x) or p >= q * (state.b - x):
        _golden_step(state, xm)
        return

    # Параболічний крок
    state.d = p / q
    u = x + state.d
    if u - state.a < tol2 or state.b - u < tol2:
        state.d = copysign(tol1, xm - x)


def _evaluate_step(
    state: LineSearchState,
    func: ScalarObjective,
    tol1: float,
) -> Optional[Tuple[float, float]]:
    """
    Обчислити func у точці u = x + d. Крок, коротший за tol1, замінюється
    мінімальним кроком tol1; якщо він веде вгору, повертає None.
    """
    if abs(state.d) >= tol1:
        u = state.x + state.d
        return u, func(u)

    u = state.x + copysign(tol1, state.d)
    fu = func(u)
    # Мінімальний крок униз веде вгору - готово
    if fu > state.fx:
        return None
    return u, fu


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

    # a і b мають бути впорядковані, абсциси брекетингу - не обов'язково
    state = LineSearchState(
        a=bracket.lower,
        b=bracket.upper,
        x=bracket.b,
        w=bracket.b,
        v=bracket.b,
        fx=bracket.fb,
        fw=bracket.fb,
        fv=bracket.fb,
    )

    iterations = 0
    stopped_by = "max_iter"

    while iterations < max_iter:
        xm = 0.5 * (state.a + state.b)
        tol1 = tol * abs(state.x) + ZEPS
        tol2 = 2.0 * tol1

        if abs(state.x - xm) <= tol2 - 0.5 * (state.b - state.a):
            stopped_by = "tol"
            break

        if iterations > FORCED_EXIT_ITERATIONS and abs(state.b - state.a) < tol:
            stopped_by = "forced_exit"
            break

        _trial_step(state, xm, tol1, tol2)

        trial = _evaluate_step(state, func, tol1)
        if trial is None:
            stopped_by = "uphill"
            break

        state.accept(*trial)
        iterations += 1

    if stopped_by == "max_iter":
        logger.info("brent_search: iteration limit %d reached", max_iter)
    else:
        logger.debug("brent_search: stopped by %s after %d iterations", stopped_by, iterations)

    return state.x, state.fx, iterations, stopped_by, bracket


def brent_search(
    func: ScalarObjective,
    a: float,
    b: float,
    tol: float = 0.0,
    max_iter: int = 0,
) -> Tuple[float, float, int]:
    """
    Знайти мінімум func методом Брента.

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
    "CGOLD",
    "ZEPS",
    "LineSearchState",
    "brent_search",
]
