from types import SimpleNamespace

import numpy as np
import pytest

from heralded_entanglement.core import integrator
from heralded_entanglement.core.amplitudes import analytical_components, hamiltonian
from heralded_entanglement.core.integrator import IntegrationError, integrate_schrodinger

@pytest.mark.parametrize("g", [1e6, 2e7, 5e7])
def test_matches_closed_form(g):
    gamma_e = 1e8
    t_final = 20 / gamma_e
    t, states = integrate_schrodinger(hamiltonian(g, gamma_e), t_final=t_final, num_points=501)
    c0, c1 = analytical_components(t, g, gamma_e)
    assert states.shape == (501, 2)
    assert np.max(np.abs(states[:, 0] - c0)) < 1e-4
    assert np.max(np.abs(states[:, 1] - c1)) < 1e-4

def test_default_initial_state_is_first_basis_state():
    t, states = integrate_schrodinger(np.zeros((2, 2)), t_final=1.0, num_points=11)
    np.testing.assert_allclose(states, np.tile([1.0, 0.0], (11, 1)))
    assert t[0] == 0.0 and t[-1] == pytest.approx(1.0)

def test_hermitian_hamiltonian_preserves_norm():
    H = np.array([[0.0, 1.0], [1.0, 0.5]])
    psi0 = np.array([1.0, 1.0j]) / np.sqrt(2)
    _, states = integrate_schrodinger(H, psi0, t_final=10.0, num_points=101, rtol=1e-10, atol=1e-12)
    np.testing.assert_allclose(np.sum(np.abs(states) ** 2, axis=1), 1.0, atol=1e-8)

def test_rabi_oscillation():
    H = np.array([[0.0, 1.0], [1.0, 0.0]])
    _, states = integrate_schrodinger(H, t_final=np.pi / 2, num_points=3, rtol=1e-10, atol=1e-12)
    assert abs(states[-1, 1]) == pytest.approx(1.0, abs=1e-8)

def test_rejects_mismatched_shapes():
    with pytest.raises(ValueError):
        integrate_schrodinger(np.eye(3), np.array([1.0, 0.0]), t_final=1.0)

def test_rejects_non_positive_time():
    with pytest.raises(ValueError):
        integrate_schrodinger(np.eye(2), t_final=0.0)

def test_solver_failure_raises(monkeypatch):
    def failing_solver(*args, **kwargs):
        return SimpleNamespace(success=False, message="step size too small", t=None, y=None)

    monkeypatch.setattr(integrator, "solve_ivp", failing_solver)
    with pytest.raises(IntegrationError, match="step size too small"):
        integrate_schrodinger(np.eye(2), t_final=1.0)

def test_default_tolerances_track_closed_form():
    g, gamma_e = 5e7, 1e8
    t, states = integrate_schrodinger(hamiltonian(g, gamma_e), t_final=20 / gamma_e, num_points=201)
    c0, c1 = analytical_components(t, g, gamma_e)
    np.testing.assert_allclose(states[:, 0], c0, atol=1e-6)
    np.testing.assert_allclose(states[:, 1], c1, atol=1e-6)
