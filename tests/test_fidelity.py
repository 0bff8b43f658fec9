import numpy as np
import pytest

from heralded_entanglement.core.amplitudes import analytical_components
from heralded_entanglement.core.fidelity import (
    loss_infidelity,
    purification_yield,
    two_photon_infidelity,
)

def test_no_pump_no_infidelity():
    assert loss_infidelity([0.0], 1e3, 1e8, 1e-7)[0] == pytest.approx(0.0, abs=1e-12)

def test_loss_infidelity_matches_closed_form():
    c0, c1 = analytical_components(1.1e-6, 1e6, 1e8)
    expected = 1 - (abs(c0) ** 2 + abs(c1) ** 2)
    assert loss_infidelity([1e6], 1e3, 1e8, 1e-7, 1e-6)[0] == pytest.approx(expected)

def test_loss_infidelity_grows_with_pump():
    photon_numbers = np.logspace(0, 7, 71)
    infidelity = loss_infidelity(photon_numbers, 1e3, 1e8, 1e-7)
    assert infidelity.shape == photon_numbers.shape
    assert np.all(np.diff(infidelity) > 0)

def test_reset_time_adds_infidelity():
    photon_numbers = np.logspace(0, 9.5, 96)
    without_reset = loss_infidelity(photon_numbers, 1e3, 1e8, 1e-7)
    with_reset = loss_infidelity(photon_numbers, 1e3, 1e8, 1e-7, 1e-6)
    assert np.all(with_reset >= without_reset - 1e-12)
    assert np.all((with_reset >= 0) & (with_reset <= 1))

def test_two_photon_infidelity():
    assert two_photon_infidelity(1.0, 0.0) == 0.0
    assert two_photon_infidelity(0.5, -0.5j) == pytest.approx(0.5)
    c0, c1 = analytical_components(np.linspace(0, 2e-7, 50), 1e6, 1e8)
    probability = two_photon_infidelity(c0, c1)
    assert np.all((probability >= 0) & (probability < 1e-3))

def test_purification_yield():
    assert purification_yield(0.0) == pytest.approx(1.0)
    eps = 0.01
    entropy = -(0.99 * np.log2(0.99) + 2 * eps * np.log2(eps))
    assert purification_yield(eps) == pytest.approx(1 - entropy)
    yields = purification_yield(np.linspace(0, 0.1, 11))
    assert np.all(np.diff(yields) < 0)
