import pytest

from mnmz.brent import brent_search
from mnmz.functions import FUNCTIONS, poly2, shifted_paraboloid
from mnmz.golden_section import golden_section_search
from mnmz.line_search import line_search_1d
from mnmz.nelder_mead import nelder_mead_minimize
from mnmz.results_summary import ResultsSummary


@pytest.fixture
def summary():
    summary = ResultsSummary()
    summary.add_run("golden", golden_section_search(poly2, 10.0, 20.0))
    summary.add_run("brent", line_search_1d(poly2, 10.0, 20.0, method="brent"))
    summary.add_run("simplex", nelder_mead_minimize(shifted_paraboloid, [10.0, 10.0], 0.1, 1.0e-9, 100))
    return summary


def test_rows_have_common_columns(summary):
    rows = summary.as_rows()

    assert [row["method"] for row in rows] == ["golden", "brent", "simplex"]
    assert rows[0]["x_star"] == pytest.approx(1.5)
    assert rows[0]["func_evals"] is None
    assert rows[1]["stopped_by"] in ("tol", "uphill")
    assert rows[1]["func_evals"] > 0
    assert rows[2]["x_star"] == pytest.approx([1.0, 0.0], abs=1e-4)


def test_best_by_f(summary):
    assert summary.best_by_f().method_name == "simplex"


def test_empty_summary():
    summary = ResultsSummary()

    assert summary.best_by_f() is None
    assert summary.fastest() is None
    assert summary.as_rows() == []


def test_brent_needs_fewer_iterations_than_golden_section():
    summary = ResultsSummary()
    summary.add_run("golden", golden_section_search(poly2, -10.0, 0.0))
    summary.add_run("brent", brent_search(poly2, -10.0, 0.0))

    assert summary.fastest()[0] == "brent"
    counts = summary.iterations_by_method()
    assert counts["brent"] < counts["golden"]


def test_to_dataframe(summary):
    pytest.importorskip("pandas")

    frame = summary.to_dataframe()

    assert list(frame["method"]) == ["golden", "brent", "simplex"]
    assert set(frame.columns) >= {"x_star", "f_star", "n_iter", "func_evals", "stopped_by"}


def test_registry_minima_are_consistent():
    for key, target in FUNCTIONS.items():
        assert target.key == key
        if target.func_df is not None:
            value, _ = target.func_df(target.x_min)
            assert value == pytest.approx(target.func(target.x_min))
