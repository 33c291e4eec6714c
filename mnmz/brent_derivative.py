"""
brent_derivative.py

Метод Брента з першою похідною.

Каркас той самий, що в brent.py (інтервал [a, b], точки x, w, v, кроки d, e),
але пробний крок будується методом січних за похідними в x, w, v, а
запасний варіант - бісекція в бік, куди вказує похідна в x (а не золотий
переріз).

Цільова функція повертає пару (f(x), f'(x)).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from math import copysign
from typing import Optional, Tuple

from .bracket import BracketResult, find_bracket, move3
from .brent import ZEPS
from .objective import DerivativeObjective
from .settings import resolve_max_iterations, resolve_tolerance

logger = logging.getLogger(__name__)


@dataclass
class DerivativeLineSearchState:
    """
    Стан пошуку: інтервал a < b, найкращі точки x, w, v, значення
    fx, fw, fv, похідні dx, dw, dv та останні кроки d, e.
    """
    a: float
    b: float
    x: float
    w: float
    v: float
    fx: float
    fw: float
    fv: float
    dx: float
    dw: float
    dv: float
    d: float = 0.0
    e: float = 0.0

    def accept(self, u: float, fu: float, du: float) -> None:
        if fu <= self.fx:
            if u >= self.x:
                self.a = self.x
            else:
                self.b = self.x
            self.v, self.fv, self.dv = move3(self.w, self.fw, self.dw)
            self.w, self.fw, self.dw = move3(self.x, self.fx, self.dx)
            self.x, self.fx, self.dx = move3(u, fu, du)
        else:
            if u < self.x:
                self.a = u
            else:
                self.b = u
            if fu <= self.fw or self.w == self.x:
                self.v, self.fv, self.dv = move3(self.w, self.fw, self.dw)
                self.w, self.fw, self.dw = move3(u, fu, du)
            elif fu < self.fv or self.v == self.x or self.v == self.w:
                self.v, self.fv, self.dv = move3(u, fu, du)


def _bisect_step(state: DerivativeLineSearchState) -> None:
    # Відрізок обираємо за знаком похідної
    state.e = state.a - state.x if state.dx >= 0.0 else state.b - state.x
    state.d = 0.5 * state.e


def _trial_step(state: DerivativeLineSearchState, xm: float, tol1: float, tol2: float) -> None:
    if abs(state.e) <= tol1:
        _bisect_step(state)
        return

    a, b = state.a, state.b
    x, dx = state.x, state.dx

    # Початкові значення поза інтервалом
    d1 = 2.0 * (b - a)
    d2 = d1
    # Січна через одну точку
    if state.dw != dx:
        d1 = (state.w - x) * dx / (dx - state.dw)
    if state.dv != dx:
        d2 = (state.v - x) * dx / (dx - state.dv)

    # Крок має лишатися всередині інтервалу і йти туди,
    # куди вказує похідна в x
    u1 = x + d1
    u2 = x + d2
    ok1 = (a - u1) * (u1 - b) > 0.0 and dx * d1 <= 0.0
    ok2 = (a - u2) * (u2 - b) > 0.0 and dx * d2 <= 0.0

    olde = state.e
    state.e = state.d

    if not (ok1 or ok2):
        _bisect_step(state)
        return

    if ok1 and ok2:
        d = d1 if abs(d1) < abs(d2) else d2
    elif ok1:
        d = d1
    else:
        d = d2

    if abs(d) > abs(0.5 * olde):
        # Бісекція, а не золотий переріз
        _bisect_step(state)
        return

    state.d = d
    u = x + d
    if u - a < tol2 or b - u < tol2:
        state.d = copysign(tol1, xm - x)


def _evaluate_step(
    state: DerivativeLineSearchState,
    func: DerivativeObjective,
    tol1: float,
) -> Optional[Tuple[float, float, float]]:
    """
    Обчислити (u, f(u), f'(u)) для u = x + d; None, якщо мінімальний
    крок tol1 веде вгору.
    """
    if abs(state.d) >= tol1:
        u = state.x + state.d
        fu, _ = func(u)
    else:
        u = state.x + copysign(tol1, state.d)
        fu, _ = func(u)
        # Мінімальний крок униз веде вгору - готово
        if fu > state.fx:
            return None

    # Похідна в новій точці
    _, du = func(u)
    return u, fu, du


def _run(
    func: DerivativeObjective,
    a: float,
    b: float,
    tol: float,
    max_iter: int,
) -> Tuple[float, float, int, str, BracketResult]:
    tol = resolve_tolerance(tol)
    max_iter = resolve_max_iterations(max_iter)

    bracket = find_bracket(lambda t: func(t)[0], a, b)

    x = bracket.b
    fx, dx = func(x)
    state = DerivativeLineSearchState(
        a=bracket.lower,
        b=bracket.upper,
        x=x, w=x, v=x,
        fx=fx, fw=fx, fv=fx,
        dx=dx, dw=dx, dv=dx,
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

        _trial_step(state, xm, tol1, tol2)

        trial = _evaluate_step(state, func, tol1)
        if trial is None:
            stopped_by = "uphill"
            break

        state.accept(*trial)
        iterations += 1

    if stopped_by == "max_iter":
        logger.info("brent_df_search: iteration limit %d reached", max_iter)
    else:
        logger.debug("brent_df_search: stopped by %s after %d iterations", stopped_by, iterations)

    return state.x, state.fx, iterations, stopped_by, bracket


def brent_df_search(
    func: DerivativeObjective,
    a: float,
    b: float,
    tol: float = 0.0,
    max_iter: int = 0,
) -> Tuple[float, float, int]:
    """
    Знайти мінімум методом Брента з використанням першої похідної.

    Parameters
    ----------
    func : Callable[[float], Tuple[float, float]]
        Повертає (f(x), f'(x)).
    a, b : float
        Дві різні початкові точки для брекетингу (порядок довільний).
    tol : float
        Бажана відносна точність; обмежується знизу 3e-8.
    max_iter : int
        Ліміт ітерацій; 0 означає 500, більше 1000 обрізається до 1000.

    Returns
    -------
    (xmin, fmin, iterations)

    Notes
    -----
    Після обчислення f(u) похідна в u береться окремим викликом func(u),
    тож на звичайній ітерації функція викликається двічі в одній точці.
    """
    xmin, fmin, iterations, _, _ = _run(func, a, b, tol, max_iter)
    return xmin, fmin, iterations


__all__ = [
    "DerivativeLineSearchState",
    "brent_df_search",
]
