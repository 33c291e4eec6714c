import math

import numpy as np
import pytest

from mnmz.functions import poly2, quartic_bowl
from mnmz.objective import CountingObjective, DerivativeObjective, ScalarObjective, VectorObjective
from mnmz.settings import (
    DEFAULT_MAX_ITERATIONS,
    MAX_ITERATIONS_LIMIT,
    MIN_TOLERANCE,
    SIMPLEX_MIN_TOLERANCE,
    resolve_max_iterations,
    resolve_simplex_tolerance,
    resolve_tolerance,
    validate_interval,
)


def test_plain_functions_satisfy_protocols():
    assert isinstance(poly2, ScalarObjective)
    assert isinstance(lambda x: (x, 1.0), DerivativeObjective)
    assert isinstance(quartic_bowl, VectorObjective)


def test_counting_objective_counts_and_resets():
    counted = CountingObjective(poly2)

    assert counted(1.0) == 0.0
    assert counted(3.0) == 2.0
    assert counted.func_evals == 2

    counted.reset()
    assert counted.func_evals == 0


def test_counting_objective_pairs_value_and_derivative():
    counted = CountingObjective(math.cos, derivative=lambda x: -math.sin(x))

    value, derivative = counted(0.0)

    assert (value, derivative) == (1.0, -0.0)
    assert counted.func_evals == 1


def test_counting_objective_vector_mode():
    counted = CountingObjective(quartic_bowl, vector=True)

    assert counted([1, 2]) == 17.0
    assert isinstance(counted(np.array([0.0, 0.0])), float)
    assert "quartic_bowl" in repr(counted)


@pytest.mark.parametrize(
    "given, expected",
    [(0.0, MIN_TOLERANCE), (-1.0, MIN_TOLERANCE), (1.0e-3, 1.0e-3)],
)
def test_resolve_tolerance(given, expected):
    assert resolve_tolerance(given) == expected


def test_resolve_simplex_tolerance():
    assert resolve_simplex_tolerance(0.0) == SIMPLEX_MIN_TOLERANCE
    assert resolve_simplex_tolerance(1.0e-8) == 1.0e-8


@pytest.mark.parametrize(
    "given, expected",
    [(0, DEFAULT_MAX_ITERATIONS), (1, 1), (750, 750), (1000, 1000), (5000, MAX_ITERATIONS_LIMIT)],
)
def test_resolve_max_iterations(given, expected):
    assert resolve_max_iterations(given) == expected


def test_negative_max_iterations_is_rejected():
    with pytest.raises(ValueError, match="-3"):
        resolve_max_iterations(-3)


def test_validate_interval():
    validate_interval(20.0, 10.0)

    with pytest.raises(ValueError):
        validate_interval(2.0, 2.0)
    with pytest.raises(ValueError):
        validate_interval(-math.inf, 2.0)
