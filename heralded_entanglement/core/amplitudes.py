"""Closed-form conditional evolution of the pumped transducer.

Restricted to the two-state subspace {|00>, |11>} (blue-detuned pump) or
{|01>, |10>} (red-detuned pump), the non-Hermitian Hamiltonian

    H = [[0, g], [g*, -i gamma_e / 2]]        (units of hbar)

evolves |psi(0)> = (1, 0) into

    c0(t) = exp(-gamma_e t / 4) [ (gamma_e / 4g') sinh(g't) + cosh(g't) ]
    c1(t) = -i exp(-gamma_e t / 4) (g / g') sinh(g't)

with g' = sqrt(gamma_e^2 / 16 - |g|^2). g' is real when g < gamma_e / 4 and
purely imaginary otherwise, so everything is evaluated in complex arithmetic.
"""

import numpy as np

def coupling_rate(g0, n_p):
    """Pump-enhanced coupling g = g0 sqrt(<n_p>)."""
    return g0 * np.sqrt(n_p)

def g_prime(g, gamma_e):
    """Complex square root sqrt(gamma_e^2/16 - |g|^2), scalar or array."""
    radicand = np.asarray(gamma_e ** 2 / 16 - np.abs(g) ** 2, dtype=np.complex128)
    return np.sqrt(radicand)[()]

def hamiltonian(g, gamma_e) -> np.ndarray:
    """2x2 non-Hermitian Hamiltonian of the conditional evolution, in units of hbar."""
    return np.array([[0.0, g],
                     [np.conj(g), -0.5j * gamma_e]], dtype=np.complex128)

def analytical_components(t, g, gamma_e):
    """Evaluate (c0, c1) for times ``t`` and couplings ``g``.

    ``t`` and ``g`` broadcast against each other, so either can be swept.
    The damping factor is folded into the hyperbolic functions, which keeps
    the evaluation finite for long times, and the exceptional point g' = 0
    uses the limit sinh(g't)/g' -> t.
    """
    t = np.asarray(t, dtype=np.float64)
    g = np.asarray(g)
    gp = np.asarray(g_prime(g, gamma_e))
    damping = -gamma_e / 4

    grow = np.exp((damping + gp) * t)
    shrink = np.exp((damping - gp) * t)
    cosh_part = 0.5 * (grow + shrink)
    with np.errstate(divide="ignore", invalid="ignore"):
        sinh_part = 0.5 * (grow - shrink) / gp
    # exceptional point
    sinh_part = np.where(gp == 0, t * np.exp(damping * t), sinh_part)

    c0 = gamma_e / 4 * sinh_part + cosh_part
    c1 = -1j * g * sinh_part
    return c0[()], c1[()]
