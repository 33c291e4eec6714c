"""
line_search.py

Єдиний інтерфейс одномірного пошуку мінімуму.

Ідея:
    - Усі 1D-методи пакета (золотий переріз, Брент, Брент з похідною)
      повертають кортеж (xmin, fmin, iterations). Тут вони доступні за
      назвою через line_search_1d(...), який додатково рахує виклики
      функції, фіксує причину зупинки та знайдений брекетинг.
    - Для багатовимірної функції f пошук уздовж напрямку p_k з точки x_k
      зводиться до φ(α) = f(x_k + α p_k); make_phi() та
      make_phi_with_derivative() будують таку φ.

Підтримувані методи:
    1) метод золотого перерізу;
    2) метод Брента;
    3) метод Брента з першою похідною.

Публічний інтерфейс:
    - LineSearchResult        – результат 1D-пошуку;
    - line_search_1d(...)     – виклик конкретного методу;
    - константи LINE_SEARCH_* – імена методів;
    - make_phi, make_phi_with_derivative.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

import numpy as np

from .brent import _run as _brent_run
from .brent_derivative import _run as _brent_df_run
from .functions import ArrayLike, Scalar1DFunction, ScalarFunction, VectorFunction
from .golden_section import _run as _golden_section_run
from .objective import CountingObjective
from .settings import resolve_max_iterations

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Константи для типів методів лінійного пошуку
# ---------------------------------------------------------------------------

LINE_SEARCH_DEFAULT = "default"  # те саме, що Брент
LINE_SEARCH_GOLDEN_SECTION = "golden_section"
LINE_SEARCH_BRENT = "brent"
LINE_SEARCH_BRENT_DERIVATIVE = "brent_derivative"

LineSearchMethod = str

LINE_SEARCH_METHODS = (
    LINE_SEARCH_DEFAULT,
    LINE_SEARCH_GOLDEN_SECTION,
    LINE_SEARCH_BRENT,
    LINE_SEARCH_BRENT_DERIVATIVE,
)


# ---------------------------------------------------------------------------
# Результат одномірного пошуку
# ---------------------------------------------------------------------------

@dataclass
class LineSearchResult:
    """
    Результат роботи процедури одномірного пошуку.

    Атрибути:
        alpha       - знайдена точка мінімуму α*;
        phi_value   - значення φ(α*);
        iterations  - кількість ітерацій 1D-алгоритму;
        func_evals  - кількість викликів φ (разом з брекетингом);
        stopped_by  - "tol", "max_iter", "forced_exit" або "uphill";
        meta        - службова інформація (метод, брекетинг).
    """
    alpha: float
    phi_value: float
    iterations: int
    func_evals: int
    stopped_by: str
    meta: Dict[str, Any] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Публічний інтерфейс line search
# ---------------------------------------------------------------------------

def line_search_1d(
    phi: Callable[[float], Any],
    a: float,
    b: float,
    method: LineSearchMethod = LINE_SEARCH_DEFAULT,
    tol: float = 0.0,
    max_iter: int = 0,
    options: Optional[Dict[str, Any]] = None,
) -> LineSearchResult:
    """
    Виконати одномірний пошук мінімуму φ(α), стартуючи з точок a, b.

    Parameters
    ----------
    phi : Callable
        Цільова функція одного аргументу. Для методу "brent_derivative"
        вона має повертати (φ(α), φ'(α)), якщо похідна не передана
        окремо через options["dphi"].
    a, b : float
        Дві різні початкові точки брекетингу (порядок довільний).
    method : LineSearchMethod
        "default", "golden_section", "brent" або "brent_derivative".
    tol : float
        Бажана відносна точність (не менше 3e-8).
    max_iter : int
        Ліміт ітерацій (0 = 500, максимум 1000).
    options : Optional[dict]
        dphi : Callable[[float], float]
            Окрема похідна φ'(α) для "brent_derivative".

    Returns
    -------
    LineSearchResult
    """
    if method not in LINE_SEARCH_METHODS:
        raise ValueError(
            f"Невідомий метод лінійного пошуку: '{method}'. "
            f"Доступні: {', '.join(LINE_SEARCH_METHODS)}"
        )

    options = options or {}
    limit = resolve_max_iterations(max_iter)

    if method == LINE_SEARCH_BRENT_DERIVATIVE:
        counted = CountingObjective(phi, derivative=options.get("dphi"))
        run = _brent_df_run
    elif method == LINE_SEARCH_GOLDEN_SECTION:
        counted = CountingObjective(phi)
        run = _golden_section_run
    else:
        counted = CountingObjective(phi)
        run = _brent_run

    alpha, value, iterations, stopped_by, bracket = run(counted, a, b, tol, max_iter)
    logger.debug("line_search_1d(%s): %s after %d iterations", method, stopped_by, iterations)

    return LineSearchResult(
        alpha=float(alpha),
        phi_value=float(value),
        iterations=iterations,
        func_evals=counted.func_evals,
        stopped_by=stopped_by,
        meta={
            "method": method,
            "bracket": bracket,
            "max_iter": limit,
        },
    )


# ---------------------------------------------------------------------------
# Пошук уздовж напрямку
# ---------------------------------------------------------------------------

def make_phi(func: ScalarFunction, x_k: ArrayLike, p_k: ArrayLike) -> Scalar1DFunction:
    """Побудувати φ(α) = f(x_k + α p_k)."""
    x_k = np.asarray(x_k, dtype=float)
    p_k = np.asarray(p_k, dtype=float)

    def phi(alpha: float) -> float:
        return float(func(x_k + alpha * p_k))

    return phi


def make_phi_with_derivative(
    func: ScalarFunction,
    grad: VectorFunction,
    x_k: ArrayLike,
    p_k: ArrayLike,
) -> Callable[[float], Tuple[float, float]]:
    """
    Побудувати α -> (φ(α), φ'(α)), де φ'(α) = ∇f(x_k + α p_k)^T p_k.
    """
    x_k = np.asarray(x_k, dtype=float)
    p_k = np.asarray(p_k, dtype=float)

    def phi(alpha: float) -> Tuple[float, float]:
        x = x_k + alpha * p_k
        return float(func(x)), float(np.dot(np.asarray(grad(x), dtype=float), p_k))

    return phi


__all__ = [
    "LINE_SEARCH_DEFAULT",
    "LINE_SEARCH_GOLDEN_SECTION",
    "LINE_SEARCH_BRENT",
    "LINE_SEARCH_BRENT_DERIVATIVE",
    "LINE_SEARCH_METHODS",
    "LineSearchMethod",
    "LineSearchResult",
    "line_search_1d",
    "make_phi",
    "make_phi_with_derivative",
]
