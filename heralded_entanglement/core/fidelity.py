"""Infidelity measures of heralded Bell pairs."""

import numpy as np
from scipy.special import xlogy

from .amplitudes import analytical_components, coupling_rate

def loss_infidelity(photon_numbers, g0, gamma_e, pulse_duration, reset_time=0.0):
    """1 - <psi|psi> at t = pulse_duration + reset_time, swept over pump photon number."""
    g = np.real(coupling_rate(g0, np.asarray(photon_numbers, dtype=np.float64)))
    c0, c1 = analytical_components(pulse_duration + reset_time, g, gamma_e)
    return 1 - (np.abs(c0) ** 2 + np.abs(c1) ** 2)

def two_photon_infidelity(c0, c1):
    """Probability |c1|^2 / (|c0|^2 + |c1|^2) that both resonators hold a photon."""
    p0 = np.abs(c0) ** 2
    p1 = np.abs(c1) ** 2
    return p1 / (p0 + p1)

def purification_yield(eps):
    """Hashing yield 1 - S(eps) of rho = (1-eps)|A><A| + eps|B><B| + eps|C><C|.

    S is the entropy in bits; the eps -> 0 limit is handled by xlogy.
    """
    eps = np.asarray(eps, dtype=np.float64)
    entropy = -(xlogy(1 - eps, 1 - eps) + 2 * xlogy(eps, eps)) / np.log(2)
    return (1 - entropy)[()]
