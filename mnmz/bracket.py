"""
bracket.py

Брекетинг мінімуму: пошук трійки точок a, b, c, таких що f(b) не більше
за f(a) і f(c). Для неперервної унімодальної функції мінімум тоді лежить
між a і c.

Алгоритм (Numerical Recipes, mnbrak):
    1. Порівнюємо f(a), f(b) і, якщо треба, міняємо точки місцями, щоб
       рухатися вниз від a до b.
    2. Перше наближення c = b + GOLD * (b - a).
    3. Поки f(b) > f(c): параболічна екстраполяція через a, b, c дає u,
       крок обмежений ulim = b + GLIMIT * (c - b); за невдалої параболи
       беремо типове збільшення u = c + GOLD * (c - b). Зсуваємо трійку
       на одну позицію вперед і повторюємо.

Також тут живуть допоміжні функції зсуву (shift2, shift3, move3), якими
користуються всі 1D-методи. Вони нічого не змінюють на місці, а повертають
новий кортеж:
    a, b, c = shift3(a, b, c, d)    # a <- b, b <- c, c <- d
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from math import copysign
from typing import Tuple

from .objective import ScalarObjective
from .settings import validate_interval

logger = logging.getLogger(__name__)

# Типовий коефіцієнт збільшення інтервалів (золотий перетин)
GOLD: float = 1.618034

# Максимальне збільшення для параболічного кроку
GLIMIT: float = 100.0

# Запобігає діленню на нуль у параболічній екстраполяції
TINY: float = 1.0e-20


# ---------------------------------------------------------------------------
# Допоміжні функції зсуву
# ---------------------------------------------------------------------------

def shift2(a: float, b: float, c: float) -> Tuple[float, float]:
    """a <- b, b <- c."""
    return b, c


def shift3(a: float, b: float, c: float, d: float) -> Tuple[float, float, float]:
    """a <- b, b <- c, c <- d."""
    return b, c, d


def move3(d: float, e: float, f: float) -> Tuple[float, float, float]:
    """Присвоїти трійку (a, b, c) <- (d, e, f) одним виразом."""
    return d, e, f


# ---------------------------------------------------------------------------
# Результат брекетингу
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BracketResult:
    """
    Трійка точок, що брекетує мінімум.

    Атрибути:
        a, b, c    - абсциси; b - внутрішня точка, a і c НЕ впорядковані
        fa, fb, fc - значення функції в цих точках (fb <= fa, fb <= fc)
        iterations - кількість ітерацій (1 = лише початкове наближення c)
    """
    a: float
    b: float
    c: float
    fa: float
    fb: float
    fc: float
    iterations: int

    @property
    def lower(self) -> float:
        """Ліва межа інтервалу min(a, c)."""
        return min(self.a, self.c)

    @property
    def upper(self) -> float:
        """Права межа інтервалу max(a, c)."""
        return max(self.a, self.c)


def find_bracket(func: ScalarObjective, a: float, b: float) -> BracketResult:
    """
    Знайти трійку, що брекетує мінімум функції func.

    Parameters
    ----------
    func : Callable[[float], float]
        Цільова функція одного аргументу.
    a, b : float
        Дві різні початкові точки (у довільному порядку).

    Returns
    -------
    BracketResult
        Трійка (a, b, c), значення (fa, fb, fc) та кількість ітерацій.

    Raises
    ------
    ValueError
        Якщо a == b або одна з точок не скінченна.
    """
    a = float(a)
    b = float(b)
    validate_interval(a, b)

    fa = func(a)
    fb = func(b)

    # Міняємо ролі a і b, щоб рухатися вниз у напрямку від a до b
    if fb > fa:
        a, b = b, a
        fa, fb = fb, fa

    # Перше наближення для c
    c = b + GOLD * (b - a)
    fc = func(c)

    iterations = 1

    while fb > fc:
        # Параболічна екстраполяція через a, b, c
        r = (b - a) * (fb - fc)
        q = (b - c) * (fb - fa)
        q_r = copysign(max(abs(q - r), TINY), q - r)
        u = b - ((b - c) * q - (b - a) * r) / (2.0 * q_r)
        ulim = b + GLIMIT * (c - b)

        if (b - u) * (u - c) > 0.0:
            # Парабола між b і c
            fu = func(u)
            if fu < fc:
                # Мінімум між b і c
                logger.debug("find_bracket: parabolic point between b and c, %d iterations", iterations)
                return BracketResult(b, u, c, fb, fu, fc, iterations)
            if fu > fb:
                # Мінімум між a і u
                logger.debug("find_bracket: parabolic point closes bracket, %d iterations", iterations)
                return BracketResult(a, b, u, fa, fb, fu, iterations)
            # Парабола не допомогла, типове збільшення
            u = c + GOLD * (c - b)
            fu = func(u)

        elif (c - u) * (u - ulim) > 0.0:
            # Парабола між c і допустимою межею
            fu = func(u)
            if fu < fc:
                b, c, u = shift3(b, c, u, u + GOLD * (u - c))
                fb, fc, fu = shift3(fb, fc, fu, func(u))

        elif (u - ulim) * (ulim - c) >= 0.0:
            # Обмежуємо u максимально допустимим значенням
            u = ulim
            fu = func(u)

        else:
            # Відкидаємо параболу, типове збільшення
            u = c + GOLD * (c - b)
            fu = func(u)

        # Відкидаємо найстарішу точку
        a, b, c = shift3(a, b, c, u)
        fa, fb, fc = shift3(fa, fb, fc, fu)

        iterations += 1

    logger.debug("find_bracket: [%g, %g, %g] after %d iterations", a, b, c, iterations)

    return BracketResult(a, b, c, fa, fb, fc, iterations)


__all__ = [
    "GOLD",
    "GLIMIT",
    "TINY",
    "shift2",
    "shift3",
    "move3",
    "BracketResult",
    "find_bracket",
]
