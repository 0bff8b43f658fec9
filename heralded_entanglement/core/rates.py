"""Detection and entanglement-generation rates of the heralding protocol."""

import numpy as np

from .amplitudes import g_prime
from ..models import CouplingRegime

def detection_rate(g0, n_p, gamma_e, gamma_i=0.0):
    """Rate r0 of heralding clicks.

    r0 = 4 g0^2 <n_p> gamma_e / (gamma_e + gamma_i)^2, i.e. the Poissonian rate
    4|g|^2 / gamma reduced by the detection efficiency gamma_e / (gamma_e + gamma_i).
    """
    return 4 * g0 ** 2 * np.asarray(n_p) * gamma_e / (gamma_e + gamma_i) ** 2

def pump_photon_number(power_over_hbar_omega, gamma_e, gamma_i=0.0):
    """<n_p> = 4 gamma_e / (gamma_e + gamma_i)^2 * P / (hbar omega)."""
    return 4 * gamma_e / (gamma_e + gamma_i) ** 2 * np.asarray(power_over_hbar_omega)

def log_power_span(log_n_p, gamma_e, gamma_i=0.0):
    """log10(P / hbar omega) needed to reach each log10 <n_p>."""
    return -np.log10(4 * gamma_e / (gamma_e + gamma_i) ** 2) + np.asarray(log_n_p)

def photon_number_log_span(g0, step=0.1):
    """Default sweep of log10 <n_p>, wide enough to show the rate roll-off for ``g0``."""
    if g0 < 2e5:
        start = 6.0
    elif g0 < 1e7:
        start = 0.0
    else:
        start = -10.0
    return np.arange(start, 9.5 + step / 2, step)

def classify_regime(g, gamma_e) -> CouplingRegime:
    """Qualitative label for how well g << gamma_e holds."""
    ratio = np.abs(g) / gamma_e
    if ratio > 0.25:
        return CouplingRegime.OSCILLATORY
    elif ratio > 0.1:
        return CouplingRegime.OUTSIDE
    elif ratio > 0.01:
        return CouplingRegime.BEGINNING_TO_BREAK
    return CouplingRegime.RESPECTING

def entanglement_rate(
    log_range,
    gamma_e,
    gamma_i,
    g0,
    pulse_duration,
    reset_time,
    power=False,
    more_events=False,
    logy=False,
    purification=False,
):
    """Bell-pair generation rate r_e over a logarithmic sweep.

    Args:
        log_range: log10 of the pump photon number, or of P / (hbar omega) when ``power`` is set
        gamma_e, gamma_i: extrinsic and intrinsic optical loss rates (1/s)
        g0: single-photon coupling rate (1/s)
        pulse_duration: pump pulse length Delta t (s)
        reset_time: microwave reset time t_r after each attempt (s)
        power: interpret ``log_range`` as pump power in photons per second
        more_events: rate of two-click events instead of single clicks
        logy: return log10 of the rate
        purification: halve the rate to pay for one round of purification

    Returns:
        Array of rates (1/s), or their log10
    """
    swept = 10 ** np.asarray(log_range, dtype=np.float64)
    n_p = pump_photon_number(swept, gamma_e, gamma_i) if power else swept
    r0 = detection_rate(g0, n_p, gamma_e, gamma_i)

    dt = pulse_duration
    if more_events:
        rate = 2 * r0 ** 2 * np.exp(-r0 * dt) * dt ** 2 / 2 / (dt + reset_time)
    else:
        rate = 2 * r0 * np.exp(-r0 * dt) * dt / (dt + reset_time)

    if purification:
        rate = rate / 2

    if logy:
        with np.errstate(divide="ignore"):
            return np.log10(rate)
    return rate

def poissonian_survival(t, g, gamma_e):
    """Probability of no click by time t for a Poissonian process of rate 4|g|^2/gamma_e."""
    return np.exp(-4 * np.abs(g) ** 2 / gamma_e * np.asarray(t))

def survival_approximation(t, g, gamma_e):
    """Slowest-mode estimate exp((2g' - gamma_e/2) t) of <psi|psi>; complex when g' is."""
    return np.exp((2 * g_prime(g, gamma_e) - gamma_e / 2) * np.asarray(t))
