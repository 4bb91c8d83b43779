import math

import pytest

from beam_calc.domain.beam import BeamSpec, SupportType
from beam_calc.domain.errors import BeamCalcError, InvalidGeometry, InvalidLoad, UnknownSupportType
from beam_calc.engine.validate import parse_support_type, validate


def test_valid_input_builds_spec():
    spec = validate(5, 10, "simply_supported")
    assert spec == BeamSpec(length=5.0, load=10.0, support_type=SupportType.SIMPLY_SUPPORTED)
    assert isinstance(spec.length, float)


@pytest.mark.parametrize("length", [0, -1, -0.0, math.inf, math.nan, None, "5", True])
def test_bad_length_is_invalid_geometry(length):
    with pytest.raises(InvalidGeometry):
        validate(length, 10.0, "cantilever")


@pytest.mark.parametrize("load", [math.inf, -math.inf, math.nan, None, "10", False])
def test_bad_load_is_invalid_load(load):
    with pytest.raises(InvalidLoad):
        validate(5.0, load, "cantilever")


def test_negative_load_allowed_by_default():
    spec = validate(5.0, -10.0, "cantilever")
    assert spec.load == -10.0


def test_negative_load_rejected_when_policy_forbids():
    with pytest.raises(InvalidLoad):
        validate(5.0, -10.0, "cantilever", allow_negative_load=False)
    # cero sigue siendo válido
    assert validate(5.0, 0.0, "cantilever", allow_negative_load=False).load == 0.0


@pytest.mark.parametrize("value", ["fixed_fixed", "", None, 3, "propped"])
def test_unknown_support_type(value):
    with pytest.raises(UnknownSupportType):
        validate(5.0, 10.0, value)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("simply_supported", SupportType.SIMPLY_SUPPORTED),
        ("Simply Supported", SupportType.SIMPLY_SUPPORTED),
        (" simply-supported ", SupportType.SIMPLY_SUPPORTED),
        ("CANTILEVER", SupportType.CANTILEVER),
        (SupportType.CANTILEVER, SupportType.CANTILEVER),
    ],
)
def test_support_type_normalization(raw, expected):
    assert parse_support_type(raw) is expected


def test_geometry_checked_before_support_type():
    with pytest.raises(InvalidGeometry):
        validate(-1.0, 10.0, "fixed_fixed")


def test_errors_carry_stable_codes():
    with pytest.raises(BeamCalcError) as ei:
        validate(5.0, 10.0, "fixed_fixed")
    assert ei.value.code == "unknown_support_type"
    assert "fixed_fixed" in ei.value.message


def test_length_whose_fourth_power_overflows_is_invalid_geometry():
    with pytest.raises(InvalidGeometry):
        validate(1e80, 1.0, "simply_supported")


def test_moment_that_overflows_is_invalid_load():
    with pytest.raises(InvalidLoad):
        validate(1e70, 1e300, "cantilever")
