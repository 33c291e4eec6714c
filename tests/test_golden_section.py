import logging
import math

import pytest

from mnmz.bracket import find_bracket
from mnmz.functions import cosine, poly2, saw
from mnmz.golden_section import golden_section_search
from mnmz.objective import CountingObjective


RANGES = [
    (10.0, 20.0),
    (20.0, 10.0),
    (-10.0, 0.0),
    (-2000.0, -1000.0),
    (-10_000.0, 30_000.0),
    (0.0001, 0.0002),
    (-0.00001, 1.4999),
]


@pytest.mark.parametrize("a, b", RANGES)
def test_poly2_minimum(a, b):
    xmin, fmin, iterations = golden_section_search(poly2, a, b, 0.0, 0)

    assert xmin == pytest.approx(1.5, rel=1e-8)
    assert fmin == pytest.approx(-0.25)
    assert 1 <= iterations < 500


def test_cosine_minimum_is_pi():
    xmin, fmin, _ = golden_section_search(cosine, 0.01, 1.0)

    assert xmin == pytest.approx(math.pi, rel=1e-8)
    assert fmin == pytest.approx(-1.0)


@pytest.mark.parametrize("a, b", RANGES)
def test_saw_terminates_at_kink(a, b):
    xmin, _, iterations = golden_section_search(saw, a, b, 1.0e-5, 0)

    assert xmin == pytest.approx(0.0, abs=1.0e-5)
    assert iterations < 500


def test_iteration_cap_returns_best_estimate():
    xmin, fmin, iterations = golden_section_search(poly2, -10_000.0, 30_000.0, 0.0, 3)

    assert iterations == 3
    assert fmin == poly2(xmin)


def test_iteration_cap_is_logged(caplog):
    with caplog.at_level(logging.INFO, logger="mnmz.golden_section"):
        golden_section_search(poly2, 10.0, 20.0, 0.0, 2)

    assert "iteration limit 2 reached" in caplog.text


def test_looser_tolerance_needs_fewer_iterations():
    _, _, tight = golden_section_search(poly2, 10.0, 20.0, 0.0)
    _, _, loose = golden_section_search(poly2, 10.0, 20.0, 1.0e-3)

    assert loose < tight


def test_one_evaluation_per_iteration():
    counted = CountingObjective(poly2)
    _, _, iterations = golden_section_search(counted, 10.0, 20.0)
    bracket_evals = CountingObjective(poly2)
    find_bracket(bracket_evals, 10.0, 20.0)

    # two seed evaluations, then one per further iteration
    assert counted.func_evals == bracket_evals.func_evals + 2 + (iterations - 1)


def test_rerun_from_converged_point():
    xmin, _, iterations = golden_section_search(poly2, 10.0, 20.0)
    again, _, rerun_iterations = golden_section_search(poly2, xmin, xmin + 1.0e-3)

    # a fresh interval is refined from scratch, only a shorter way
    assert again == pytest.approx(xmin, rel=1e-7)
    assert rerun_iterations < iterations


def test_negative_iteration_cap_is_rejected():
    with pytest.raises(ValueError):
        golden_section_search(poly2, 10.0, 20.0, 0.0, -1)
