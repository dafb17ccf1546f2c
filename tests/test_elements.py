# tests/test_elements.py

import math

import pytest
from lunaphase.reference import elements as el


def test_meeus_example_49a_elements():
    """
    Jean Meeus, Astronomical Algorithms (2nd Ed), Example 49.a.
    New moon of 1977 February, k = -283.
    """
    k = -283
    fa = el.orbital_elements(k)

    assert fa.T == pytest.approx(-0.22881, abs=1e-5)
    assert fa.E == pytest.approx(1.0005753, abs=1e-7)

    assert fa.M_deg == pytest.approx(45.7375, abs=1e-4)
    assert fa.Mp_deg == pytest.approx(95.3722, abs=1e-4)
    assert fa.F_deg == pytest.approx(120.9584, abs=1e-4)
    assert fa.Omega_deg == pytest.approx(207.3176, abs=1e-4)

def test_meeus_example_49a_mean_phase():
    assert el.jde_mean_phase(-283) == pytest.approx(2443192.94102, abs=1e-5)

def test_reference_epoch():
    assert el.jde_mean_phase(0) == pytest.approx(2451550.09766, abs=1e-9)
    fa = el.orbital_elements(0)
    assert fa.T == 0.0
    assert fa.E == 1.0
    assert fa.M_deg == pytest.approx(2.5534, abs=1e-9)
    assert fa.Mp_deg == pytest.approx(201.5643, abs=1e-9)
    assert fa.F_deg == pytest.approx(160.7108, abs=1e-9)
    assert fa.Omega_deg == pytest.approx(124.7746, abs=1e-9)

def test_angles_are_wrapped():
    for k in (-12000.75, -283, -0.25, 0.5, 17.25, 544.75, 9999.5):
        fa = el.orbital_elements(k)
        for x in (fa.M, fa.Mp, fa.F, fa.Omega):
            assert 0.0 <= x < 2.0 * math.pi

def test_wrap_deg():
    assert el.wrap_deg(-10.0) == pytest.approx(350.0)
    assert el.wrap_deg(720.5) == pytest.approx(0.5)
    assert el.wrap_deg(0.0) == 0.0
    assert math.isnan(el.wrap_deg(float("inf")))
    assert math.isnan(el.wrap_deg(float("nan")))

def test_mean_phase_step_is_synodic_month():
    for k in (-500, 0, 500):
        step = el.jde_mean_phase(k + 1) - el.jde_mean_phase(k)
        assert step == pytest.approx(29.530588861, abs=1e-5)

def test_wrap_deg_tiny_negative():
    for x in (-1e-14, -1e-300, -5e-324, -720.0 - 1e-13):
        y = el.wrap_deg(x)
        assert 0.0 <= y < 360.0
    assert el.wrap_deg(-1e-14) == 0.0
