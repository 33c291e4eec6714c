import math

import numpy as np
import pytest

from mnmz.bracket import BracketResult, find_bracket
from mnmz.functions import (
    cosine,
    cosine_df,
    grad_shifted_paraboloid,
    poly2,
    saw,
    shifted_paraboloid,
)
from mnmz.golden_section import golden_section_search
from mnmz.line_search import (
    LINE_SEARCH_BRENT,
    LINE_SEARCH_BRENT_DERIVATIVE,
    LINE_SEARCH_DEFAULT,
    LINE_SEARCH_GOLDEN_SECTION,
    LineSearchResult,
    line_search_1d,
    make_phi,
    make_phi_with_derivative,
)


SAW_RANGES = [
    (10.0, 20.0),
    (20.0, 10.0),
    (-10.0, 0.0),
    (-2000.0, -1000.0),
    (-10_000.0, 30_000.0),
    (0.0001, 0.0002),
    (-0.00001, 1.4999),
]


@pytest.mark.parametrize(
    "method",
    [LINE_SEARCH_DEFAULT, LINE_SEARCH_BRENT, LINE_SEARCH_GOLDEN_SECTION],
)
def test_value_only_methods(method):
    result = line_search_1d(poly2, 10.0, 20.0, method=method)

    assert isinstance(result, LineSearchResult)
    assert result.alpha == pytest.approx(1.5, rel=1e-8)
    assert result.phi_value == pytest.approx(-0.25)
    assert result.stopped_by in ("tol", "uphill")
    assert result.meta["method"] == method
    assert result.func_evals > result.iterations


def test_derivative_method_with_combined_callable():
    result = line_search_1d(cosine_df, 0.01, 1.0, method=LINE_SEARCH_BRENT_DERIVATIVE)

    assert result.alpha == pytest.approx(math.pi, rel=1e-8)
    assert result.phi_value == pytest.approx(-1.0)


def test_derivative_method_with_separate_derivative():
    result = line_search_1d(
        cosine,
        0.01,
        1.0,
        method=LINE_SEARCH_BRENT_DERIVATIVE,
        options={"dphi": lambda x: -math.sin(x)},
    )

    assert result.alpha == pytest.approx(math.pi, rel=1e-8)
    assert result.meta["bracket"].lower < math.pi < result.meta["bracket"].upper


def test_bracket_is_reported():
    result = line_search_1d(poly2, -2000.0, -1000.0)
    bracket = result.meta["bracket"]

    assert isinstance(bracket, BracketResult)
    assert bracket.fb < bracket.fa
    assert bracket.fb < bracket.fc


def test_iteration_cap_is_reported():
    result = line_search_1d(poly2, -10_000.0, 30_000.0, method=LINE_SEARCH_BRENT, max_iter=2)

    assert result.iterations == 2
    assert result.stopped_by == "max_iter"
    assert result.meta["max_iter"] == 2


def test_golden_section_converging_at_the_cap_reports_tol():
    _, _, natural = golden_section_search(poly2, 10.0, 20.0)

    result = line_search_1d(poly2, 10.0, 20.0, method=LINE_SEARCH_GOLDEN_SECTION, max_iter=natural)

    assert result.iterations == natural
    assert result.stopped_by == "tol"
    assert result.alpha == pytest.approx(1.5, rel=1e-8)


def test_golden_section_one_short_of_convergence_reports_max_iter():
    _, _, natural = golden_section_search(poly2, 10.0, 20.0)

    result = line_search_1d(poly2, 10.0, 20.0, method=LINE_SEARCH_GOLDEN_SECTION, max_iter=natural - 1)

    assert result.iterations == natural - 1
    assert result.stopped_by == "max_iter"


def test_forced_exit_reason_is_passed_through():
    reasons = {}
    for a, b in SAW_RANGES:
        result = line_search_1d(saw, a, b, method=LINE_SEARCH_BRENT, tol=1.0e-5)
        reasons[(a, b)] = (result.stopped_by, result.iterations)

    forced = [iterations for stopped_by, iterations in reasons.values() if stopped_by == "forced_exit"]
    assert forced
    assert set(forced) == {101}


def test_bracket_is_the_one_the_search_started_from():
    bracket = find_bracket(poly2, 10.0, 20.0)

    result = line_search_1d(poly2, 10.0, 20.0, method=LINE_SEARCH_GOLDEN_SECTION)

    assert result.meta["bracket"] == bracket


def test_unknown_method_is_rejected():
    with pytest.raises(ValueError, match="armijo"):
        line_search_1d(poly2, 0.0, 1.0, method="armijo")


def test_directional_search_along_axis():
    # φ(α) = f((3, 0) + α(-1, 0)) has its minimum at α = 2
    phi = make_phi(shifted_paraboloid, [3.0, 0.0], [-1.0, 0.0])

    result = line_search_1d(phi, 0.0, 1.0)

    assert result.alpha == pytest.approx(2.0, rel=1e-8)
    assert result.phi_value == pytest.approx(-1.0)


def test_directional_search_with_derivative():
    x_k = np.array([10.0, 10.0])
    p_k = -grad_shifted_paraboloid(x_k)
    phi = make_phi_with_derivative(shifted_paraboloid, grad_shifted_paraboloid, x_k, p_k)

    result = line_search_1d(phi, 0.0, 0.1, method=LINE_SEARCH_BRENT_DERIVATIVE)

    # the steepest-descent step of a round paraboloid lands on its minimum
    assert result.alpha == pytest.approx(0.5, rel=1e-8)
    assert x_k + result.alpha * p_k == pytest.approx([1.0, 0.0], abs=1e-6)


def test_phi_derivative_matches_finite_difference():
    x_k = np.array([2.0, -1.0])
    p_k = np.array([0.5, 1.0])
    phi = make_phi_with_derivative(shifted_paraboloid, grad_shifted_paraboloid, x_k, p_k)

    h = 1.0e-6
    numeric = (phi(0.3 + h)[0] - phi(0.3 - h)[0]) / (2.0 * h)

    assert phi(0.3)[1] == pytest.approx(numeric, rel=1e-6)
