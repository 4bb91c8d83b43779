import numpy as np
import pytest
from pytest import approx

from beam_calc.engine.diagrams import MomentProfile, ProfileSample
from beam_calc.engine.statics import solve
from beam_calc.engine.validate import validate
from beam_calc.sections.response import max_deflection
from beam_calc.sections.section_model import SectionModel


@pytest.mark.parametrize("support", ["simply_supported", "cantilever"])
def test_profile_maximum_matches_closed_form(support):
    spec = validate(5.0, 10.0, support)
    st = solve(spec)
    prof = MomentProfile(spec, n_points=101)

    moments = [s.moment for s in prof]
    assert max(moments) == approx(st.max_moment)
    assert prof.eval_M(st.x_max_moment) == approx(st.max_moment)


def test_profile_is_restartable_and_finite():
    prof = MomentProfile(validate(5.0, 10.0, "simply_supported"), n_points=11)

    first = list(prof)
    second = list(prof)
    assert first == second
    assert len(first) == len(prof) == 11
    assert isinstance(first[0], ProfileSample)
    assert first[0].x == 0.0
    assert first[-1].x == approx(5.0)


def test_simply_supported_shear_and_moment():
    prof = MomentProfile(validate(4.0, 3.0, "simply_supported"))

    assert prof.eval_V(0.0) == approx(6.0)
    assert prof.eval_V(4.0) == approx(-6.0)
    assert prof.eval_V(2.0) == approx(0.0)
    assert prof.eval_M(0.0) == approx(0.0)
    assert prof.eval_M(4.0) == approx(0.0, abs=1e-12)
    assert prof.eval_M(1.0) == approx(6.0 * 1.0 - 3.0 / 2.0)


def test_cantilever_moment_grows_towards_fixed_end():
    prof = MomentProfile(validate(5.0, 10.0, "cantilever"), n_points=51)
    x, V, M = prof.sample()

    # x=0 empotramiento, x=L extremo libre
    assert M[0] == approx(125.0)
    assert M[-1] == approx(0.0, abs=1e-12)
    assert np.all(np.diff(M) <= 1e-12)
    assert V[0] == approx(50.0)
    assert V[-1] == approx(0.0, abs=1e-12)


@pytest.mark.parametrize("support, x_peak", [("simply_supported", 2.5), ("cantilever", 5.0)])
def test_elastic_curve_peak_matches_max_deflection(support, x_peak):
    section = SectionModel()
    spec = validate(5.0, 1000.0, support)
    prof = MomentProfile(spec)

    assert prof.eval_deflection(x_peak, section) == approx(max_deflection(spec, section))
    assert prof.eval_deflection(0.0, section) == approx(0.0, abs=1e-15)
    _, v = prof.sample_deflection(section)
    assert float(np.max(v)) == approx(max_deflection(spec, section))


def test_profile_requires_two_points():
    with pytest.raises(ValueError):
        MomentProfile(validate(1.0, 1.0, "cantilever"), n_points=1)
