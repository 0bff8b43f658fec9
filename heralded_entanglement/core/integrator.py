"""Numerical integration of the conditional Schrodinger equation."""

import logging
from typing import Optional, Tuple

import numpy as np
from scipy.integrate import solve_ivp

logger = logging.getLogger(__name__)

class IntegrationError(RuntimeError):
    """Raised when the ODE solver does not reach the final time."""

def schrodinger_rhs(t, psi, H):
    return -1j * (H @ psi)

def integrate_schrodinger(
    H: np.ndarray,
    psi0: Optional[np.ndarray] = None,
    t_final: float = 1.0,
    num_points: int = 1001,
    max_step: Optional[float] = None,
    method: str = "DOP853",
    rtol: float = 1e-7,
    atol: float = 1e-9,
) -> Tuple[np.ndarray, np.ndarray]:
    """Integrate d psi/dt = -i H psi from ``psi0`` over [0, t_final].

    Works for any square (not necessarily Hermitian) ``H``. The state starts
    in the first basis state unless ``psi0`` is given.

    Returns:
        Tuple of (times, states) with ``states`` of shape (num_points, dim)
    """
    H = np.asarray(H, dtype=np.complex128)
    if psi0 is None:
        psi0 = np.zeros(H.shape[0], dtype=np.complex128)
        psi0[0] = 1.0
    psi0 = np.asarray(psi0, dtype=np.complex128)
    if H.shape != (psi0.size, psi0.size):
        raise ValueError(f"Hamiltonian of shape {H.shape} does not act on a state of size {psi0.size}")
    if t_final <= 0:
        raise ValueError("t_final must be positive")
    if max_step is None:
        max_step = t_final / 1000

    t_eval = np.linspace(0.0, t_final, num_points)
    logger.debug("Integrating %d-level system up to t=%.3e s (max_step=%.3e s)",
                 psi0.size, t_final, max_step)
    sol = solve_ivp(schrodinger_rhs, (0.0, t_final), psi0, method=method,
                    t_eval=t_eval, args=(H,), max_step=max_step, rtol=rtol, atol=atol)
    if not sol.success:
        raise IntegrationError(f"ODE integration failed: {sol.message}")
    return sol.t, sol.y.T
