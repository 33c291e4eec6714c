"""
nelder_mead.py

Симплекс-метод Нелдера–Міда (downhill simplex, amoeba) для багатовимірної
мінімізації без похідних.

Метод оперує симплексом з (n + 1) вершин у n-вимірному просторі.

Основні кроки ітерації:
    1. Визначення найкращої (ilo), найгіршої (ihi) та другої найгіршої (inhi)
       вершин.
    2. Перевірка відносного розмаху значень rtol < ftol.
    3. Відбиття (reflection) найгіршої вершини через центроїд решти.
    4. За потреби — розширення (expansion), одномірний контракт (contraction)
       або стиснення всього симплекса (shrink) до найкращої вершини.

Сума координат усіх вершин (psum) оновлюється інкрементально при кожній
заміні вершини і перераховується повністю лише після стиснення.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

import numpy as np

from .functions import ArrayLike
from .objective import CountingObjective, VectorObjective
from .settings import DEFAULT_MAX_ITERATIONS, resolve_simplex_tolerance

logger = logging.getLogger(__name__)

# Запобігає діленню на нуль, коли обидва значення дорівнюють нулю
TINY: float = 1.0e-10

# Коефіцієнти пробних кроків
REFLECTION: float = -1.0
EXPANSION: float = 2.0
CONTRACTION: float = 0.5


# ---------------------------------------------------------------------------
# Симплекс
# ---------------------------------------------------------------------------

@dataclass
class Simplex:
    """
    Поточний симплекс.

    Атрибути:
        vertices - матриця (ndim + 1, ndim), рядок i - вершина i
        values   - значення функції у вершинах, форма (ndim + 1,)
        psum     - покоординатна сума всіх вершин, форма (ndim,)
    """
    vertices: np.ndarray
    values: np.ndarray
    psum: np.ndarray

    @classmethod
    def from_point(cls, func: VectorObjective, point: ArrayLike, step: float) -> "Simplex":
        """
        Побудувати початковий симплекс: вершина 0 - сама точка,
        вершина i зміщена на step уздовж осі i - 1.
        """
        point = np.asarray(point, dtype=float)
        ndim = point.size

        vertices = np.tile(point, (ndim + 1, 1))
        for i in range(1, ndim + 1):
            vertices[i, i - 1] += step

        values = np.array([func(vertices[i]) for i in range(ndim + 1)], dtype=float)

        return cls(vertices=vertices, values=values, psum=vertices.sum(axis=0))

    @property
    def ndim(self) -> int:
        return self.vertices.shape[1]

    def rank(self) -> Tuple[int, int, int]:
        """Повернути індекси (ilo, ihi, inhi): найкраща, найгірша, друга найгірша."""
        y = self.values

        ilo = 0
        if y[0] > y[1]:
            ihi, inhi = 0, 1
        else:
            ihi, inhi = 1, 0

        for i in range(self.ndim + 1):
            if y[i] <= y[ilo]:
                ilo = i
            if y[i] > y[ihi]:
                inhi = ihi
                ihi = i
            elif y[i] > y[inhi] and i != ihi:
                inhi = i

        return ilo, ihi, inhi

    def fractional_range(self, ilo: int, ihi: int) -> float:
        """Відносний розмах значень між найгіршою та найкращою вершинами."""
        y_hi = self.values[ihi]
        y_lo = self.values[ilo]
        return 2.0 * abs(y_hi - y_lo) / (abs(y_hi) + abs(y_lo) + TINY)

    def try_vertex(self, func: VectorObjective, ihi: int, fac: float) -> float:
        """
        Екстраполювати вершину ihi через центроїд решти з коефіцієнтом fac
        і замінити її, якщо пробна точка краща.
        """
        ndim = self.ndim
        fac1 = (1.0 - fac) / ndim
        fac2 = fac1 - fac

        ptry = self.psum * fac1 - self.vertices[ihi] * fac2
        ytry = func(ptry)

        if ytry < self.values[ihi]:
            self.values[ihi] = ytry
            self.psum += ptry - self.vertices[ihi]
            self.vertices[ihi] = ptry

        return ytry

    def shrink(self, func: VectorObjective, ilo: int) -> None:
        """Стиснути симплекс удвічі до найкращої вершини ilo."""
        best = self.vertices[ilo].copy()
        for i in range(self.ndim + 1):
            if i != ilo:
                self.vertices[i] = 0.5 * (self.vertices[i] + best)
                self.values[i] = func(self.vertices[i])
        self.psum = self.vertices.sum(axis=0)

    def swap_best_first(self, ilo: int) -> None:
        if ilo != 0:
            self.vertices[[0, ilo]] = self.vertices[[ilo, 0]]
            self.values[[0, ilo]] = self.values[[ilo, 0]]


# ---------------------------------------------------------------------------
# Основний алгоритм
# ---------------------------------------------------------------------------

def _validate_start(point: np.ndarray, step: float) -> None:
    if point.ndim != 1 or point.size == 0:
        raise ValueError(
            f"Початкова точка має бути непорожнім вектором, отримано форму {point.shape}"
        )
    if not np.all(np.isfinite(point)):
        raise ValueError("Початкова точка містить нескінченні або NaN координати")
    if not np.isfinite(step) or step == 0.0:
        raise ValueError(f"Крок симплекса має бути скінченним і ненульовим, отримано: {step}")


def _run(
    func: VectorObjective,
    point: ArrayLike,
    step: float,
    ftol: float,
    max_iter: int,
) -> Tuple[Simplex, int, str]:
    point = np.asarray(point, dtype=float)
    step = float(step)
    _validate_start(point, step)

    if max_iter < 0:
        raise ValueError(f"max_iter не може бути від'ємним, отримано: {max_iter}")

    ftol = resolve_simplex_tolerance(ftol)

    simplex = Simplex.from_point(func, point, step)
    y = simplex.values
    iterations = 0

    while True:
        ilo, ihi, inhi = simplex.rank()

        if simplex.fractional_range(ilo, ihi) < ftol:
            simplex.swap_best_first(ilo)
            return simplex, iterations, "ftol"

        if iterations >= max_iter:
            simplex.swap_best_first(ilo)
            return simplex, iterations, "max_iter"

        iterations += 1

        # Відбиття найгіршої вершини
        ytry = simplex.try_vertex(func, ihi, REFLECTION)

        if ytry <= y[ilo]:
            # Краще за найкращу - пробуємо розширення
            simplex.try_vertex(func, ihi, EXPANSION)

        elif ytry >= y[inhi]:
            # Гірше за другу найгіршу - одномірний контракт
            ysave = y[ihi]
            ytry = simplex.try_vertex(func, ihi, CONTRACTION)
            if ytry >= ysave:
                # Не вдалося позбутися найгіршої точки - стискаємо
                simplex.shrink(func, ilo)
                logger.debug("amoeba: shrink around vertex %d at iteration %d", ilo, iterations)


def amoeba(
    func: VectorObjective,
    point: ArrayLike,
    step: float,
    ftol: float = 0.0,
    max_iter: int = DEFAULT_MAX_ITERATIONS,
) -> Tuple[np.ndarray, float, int]:
    """
    Мінімізація func(x), x - вектор розмірності ndim, методом Нелдера–Міда.

    Parameters
    ----------
    func : Callable[[np.ndarray], float]
        Цільова функція.
    point : array_like
        Початкова точка P0; вершини симплекса Pi = P0 + step * e_i.
    step : float
        Зміщення вздовж кожної координатної осі.
    ftol : float
        Відносна точність за значенням функції; обмежується знизу 1e-10.
    max_iter : int
        Ліміт ітерацій (без обрізання).

    Returns
    -------
    (xmin, fmin, iterations)
        xmin - копія найкращої вершини.
    """
    simplex, iterations, stopped_by = _run(func, point, step, ftol, max_iter)

    if stopped_by == "max_iter":
        logger.info("amoeba: iteration limit %d reached", max_iter)
    else:
        logger.debug("amoeba: converged after %d iterations", iterations)

    return simplex.vertices[0].copy(), float(simplex.values[0]), iterations


# ---------------------------------------------------------------------------
# Обгортка з підрахунком викликів
# ---------------------------------------------------------------------------

@dataclass
class SimplexResult:
    """
    Результат мінімізації симплекс-методом.

    Атрибути:
        x          - знайдена точка мінімуму
        f          - значення функції в ній
        iterations - кількість ітерацій
        func_evals - кількість викликів цільової функції
        stopped_by - "ftol" або "max_iter"
        meta       - кінцевий симплекс та його значення
    """
    x: np.ndarray
    f: float
    iterations: int
    func_evals: int
    stopped_by: str
    meta: Dict[str, Any] = field(default_factory=dict)


def nelder_mead_minimize(
    func: VectorObjective,
    x0: ArrayLike,
    step: float = 1.0,
    ftol: float = 0.0,
    max_iter: int = DEFAULT_MAX_ITERATIONS,
) -> SimplexResult:
    """
    Те саме, що amoeba(), але повертає SimplexResult з кількістю викликів
    функції, причиною зупинки та кінцевим симплексом.
    """
    counted = CountingObjective(func, vector=True)
    simplex, iterations, stopped_by = _run(counted, x0, step, ftol, max_iter)

    if stopped_by == "max_iter":
        logger.info("nelder_mead_minimize: iteration limit %d reached", max_iter)

    return SimplexResult(
        x=simplex.vertices[0].copy(),
        f=float(simplex.values[0]),
        iterations=iterations,
        func_evals=counted.func_evals,
        stopped_by=stopped_by,
        meta={
            "method": "nelder_mead",
            "simplex": simplex.vertices.copy(),
            "values": simplex.values.copy(),
        },
    )


__all__ = [
    "Simplex",
    "SimplexResult",
    "amoeba",
    "nelder_mead_minimize",
]
