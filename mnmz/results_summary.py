"""
results_summary.py

Зведена таблиця результатів кількох методів мінімізації для однієї
цільової функції (наприклад, порівняння кількості ітерацій золотого
перерізу, Брента та Брента з похідною).

Приймає:
    - LineSearchResult (alpha, phi_value, ...);
    - SimplexResult (x, f, ...);
    - звичайний кортеж (xmin, fmin, iterations), як повертають
      golden_section_search(), brent_search(), brent_df_search(), amoeba().
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import numpy as np


@dataclass
class SummaryRun:
    """Один рядок зведення."""
    method_name: str
    x_star: Any
    f_star: float
    n_iter: int
    func_evals: Optional[int] = None
    stopped_by: Optional[str] = None


def _as_run(method_name: str, result: Any) -> SummaryRun:
    if isinstance(result, tuple):
        x_star, f_star, n_iter = result
        return SummaryRun(method_name, x_star, float(f_star), int(n_iter))

    if hasattr(result, "alpha"):
        x_star = result.alpha
        f_star = result.phi_value
    else:
        x_star = result.x
        f_star = result.f

    return SummaryRun(
        method_name=method_name,
        x_star=x_star,
        f_star=float(f_star),
        n_iter=int(result.iterations),
        func_evals=getattr(result, "func_evals", None),
        stopped_by=getattr(result, "stopped_by", None),
    )


@dataclass
class ResultsSummary:
    """
    Зведення результатів роботи кількох методів мінімізації.

    Приклад використання:
        summary = ResultsSummary()
        summary.add_run("golden", golden_section_search(poly2, 10.0, 20.0))
        summary.add_run("brent", line_search_1d(poly2, 10.0, 20.0, method="brent"))
        rows = summary.as_rows()
    """
    runs: List[SummaryRun] = field(default_factory=list)

    def add_run(self, method_name: str, result: Any) -> None:
        """Додати результат одного методу до зведення."""
        self.runs.append(_as_run(method_name, result))

    # ------------------------------------------------------------------
    # Перетворення в "табличний" вигляд
    # ------------------------------------------------------------------

    def as_rows(self) -> List[Dict[str, Any]]:
        """
        Повернути список dict-рядків з полями:
            method, x_star, f_star, n_iter, func_evals, stopped_by
        """
        rows: List[Dict[str, Any]] = []

        for run in self.runs:
            x_star = run.x_star
            if isinstance(x_star, np.ndarray):
                x_star = x_star.tolist()
            else:
                x_star = float(x_star)

            rows.append(
                {
                    "method": run.method_name,
                    "x_star": x_star,
                    "f_star": run.f_star,
                    "n_iter": run.n_iter,
                    "func_evals": run.func_evals,
                    "stopped_by": run.stopped_by,
                }
            )

        return rows

    def iterations_by_method(self) -> Dict[str, int]:
        return {run.method_name: run.n_iter for run in self.runs}

    # ------------------------------------------------------------------
    # Вибір "найкращого" методу
    # ------------------------------------------------------------------

    def best_by_f(self) -> Optional[SummaryRun]:
        """
        Повернути run з найменшим значенням f_star (None, якщо зведення порожнє).
        """
        best_run = None
        for run in self.runs:
            if best_run is None or run.f_star < best_run.f_star:
                best_run = run
        return best_run

    def fastest(self) -> Optional[Tuple[str, int]]:
        """Метод з найменшою кількістю ітерацій: (назва, ітерації)."""
        if not self.runs:
            return None
        run = min(self.runs, key=lambda r: r.n_iter)
        return run.method_name, run.n_iter

    # ------------------------------------------------------------------
    # Опційно: повернути pandas.DataFrame
    # ------------------------------------------------------------------

    def to_dataframe(self):
        """
        Повернути pandas.DataFrame зі зведеною таблицею.

        Вимога: встановлений пакет pandas.
        """
        try:
            import pandas as pd  # type: ignore
        except ImportError as exc:  # pragma: no cover
            raise RuntimeError(
                "Для використання ResultsSummary.to_dataframe() "
                "потрібно встановити пакет 'pandas'."
            ) from exc

        return pd.DataFrame(self.as_rows())


__all__ = ["SummaryRun", "ResultsSummary"]
