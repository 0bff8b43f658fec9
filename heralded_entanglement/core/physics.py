"""Heralding calculations for a pumped electro-optic transducer."""

import logging
from dataclasses import asdict, replace
from typing import Dict, Any, Optional

import numpy as np

from ..models import (
    TransducerParameters,
    Trajectory,
    SimulationResult,
    CouplingRegime,
)
from .amplitudes import analytical_components, hamiltonian
from .integrator import integrate_schrodinger
from .rates import (
    classify_regime,
    detection_rate,
    entanglement_rate,
    log_power_span,
    photon_number_log_span,
    poissonian_survival,
    survival_approximation,
)
from .fidelity import loss_infidelity, purification_yield, two_photon_infidelity

logger = logging.getLogger(__name__)

# Maximum amplitude mismatch tolerated between the closed form and the ODE solver
AGREEMENT_TOLERANCE = 1e-4
# Longest window, in periods of Im(g'), handed to the ODE solver
MAX_OSCILLATION_PERIODS = 500

class HeraldingCalculator:
    """Main class for computing heralded entanglement observables.

    Every method is a pure function of ``self.params``; use
    :meth:`with_parameters` to recompute after changing a parameter.
    """

    def __init__(self, params: TransducerParameters):
        self.params = params

    def with_parameters(self, **changes) -> "HeraldingCalculator":
        """Return a calculator for the same system with some parameters replaced."""
        return HeraldingCalculator(replace(self.params, **changes))

    @property
    def regime(self) -> CouplingRegime:
        return classify_regime(self.params.g, self.params.gamma_e)

    def detection_rate(self) -> float:
        p = self.params
        return float(detection_rate(p.g0, p.n_p, p.gamma_e, p.gamma_i))

    def summary(self) -> Dict[str, Any]:
        """Derived quantities at the current operating point."""
        p = self.params
        return {
            'g': p.g,
            'n_p': p.n_p,
            'g_prime': p.g_prime,
            'g0': p.g0,
            'gamma_e': p.gamma_e,
            'time_interval': p.time_interval,
            'coupling_ratio': p.coupling_ratio,
            'regime': self.regime,
            'detection_rate': self.detection_rate(),
        }

    def _parameters_dict(self) -> Dict[str, Any]:
        return asdict(self.params)

    def analytical_trajectory(self, num_points: int = 1001) -> Trajectory:
        p = self.params
        t = np.linspace(0.0, p.time_interval, num_points)
        c0, c1 = analytical_components(t, p.g, p.gamma_e)
        return Trajectory(t, np.asarray(c0), np.asarray(c1), method="analytical")

    def numerical_trajectory(
        self,
        num_points: int = 1001,
        max_step: Optional[float] = None,
        rtol: float = 1e-7,
        atol: float = 1e-9,
    ) -> Trajectory:
        p = self.params
        H = hamiltonian(p.g, p.gamma_e)
        t, states = integrate_schrodinger(H, t_final=p.time_interval, num_points=num_points,
                                          max_step=max_step, rtol=rtol, atol=atol)
        return Trajectory(t, states[:, 0], states[:, 1], method="numerical")

    def oscillation_periods(self) -> float:
        """Number of periods of Im(g') the time window spans; zero when g' is real."""
        p = self.params
        return float(abs(np.imag(p.g_prime)) * p.time_interval / np.pi)

    def simulate_state_evolution(
        self,
        num_points: int = 1001,
        rtol: float = 1e-7,
        atol: float = 1e-9,
    ) -> SimulationResult:
        """Evolve the state analytically and numerically over the time window.

        The numerical cross-check is skipped when the window spans more than
        ``MAX_OSCILLATION_PERIODS`` periods; the result then carries only the
        closed-form trajectory and ``max_deviation`` is None.
        """
        p = self.params
        logger.info("Simulating state evolution: g=%.3e 1/s, gamma_e=%.3e 1/s (%s)",
                    p.g, p.gamma_e, self.regime.value)

        # Closed-form solution
        analytical = self.analytical_trajectory(num_points)
        t = analytical.times

        data = {
            'times': t,
            'c0_analytical': analytical.c0,
            'c1_analytical': analytical.c1,
            'norm_analytical': analytical.norm,
            'poissonian_survival': poissonian_survival(t, p.g, p.gamma_e),
            'survival_approximation': survival_approximation(t, p.g, p.gamma_e),
            'two_photon_analytical': two_photon_infidelity(analytical.c0, analytical.c1),
        }

        # Numerical cross-check
        periods = self.oscillation_periods()
        deviation = None
        if periods > MAX_OSCILLATION_PERIODS:
            logger.warning("Skipping numerical integration: window spans %.0f oscillation periods", periods)
        else:
            numerical = self.numerical_trajectory(num_points, rtol=rtol, atol=atol)
            deviation = float(max(np.max(np.abs(analytical.c0 - numerical.c0)),
                                  np.max(np.abs(analytical.c1 - numerical.c1))))
            if deviation > AGREEMENT_TOLERANCE:
                logger.warning("Analytical and numerical amplitudes differ by %.2e", deviation)
            data.update({
                'c0_numerical': numerical.c0,
                'c1_numerical': numerical.c1,
                'norm_numerical': numerical.norm,
                'two_photon_numerical': two_photon_infidelity(numerical.c0, numerical.c1),
            })

        return SimulationResult(
            parameters=self._parameters_dict(),
            data=data,
            metadata={
                'max_deviation': deviation,
                'numerical_skipped': deviation is None,
                'oscillation_periods': periods,
                'basis': list(p.detuning.basis),
                **self.summary(),
            }
        )

    def sweep_entanglement_rate(self, log_rate: bool = False, step: float = 0.1) -> SimulationResult:
        """Entanglement rate against the pump photon number.

        Besides the rate at the current loss ratio, the sweep includes the
        gamma_i = gamma_e and gamma_i = 0 guides at equal photon number and at
        equal pump power, the purified rate, and the rate including two-click
        events. ``pump_power`` is P / (hbar omega) for each photon number.
        """
        p = self.params
        log_n_p = photon_number_log_span(p.g0, step)
        logger.info("Sweeping entanglement rate over %d photon numbers", log_n_p.size)

        # Sweep at the current loss ratio and its guides
        common = dict(g0=p.g0, pulse_duration=p.pulse_duration, reset_time=p.reset_time)
        rate = entanglement_rate(log_n_p, p.gamma_e, p.gamma_i, **common)
        rate_max = entanglement_rate(log_n_p, p.gamma_e, p.gamma_e, **common)
        rate_lossless = entanglement_rate(log_n_p, p.gamma_e, 0.0, **common)
        rate_purified = entanglement_rate(log_n_p, p.gamma_e, p.gamma_i, purification=True, **common)
        rate_two_clicks = entanglement_rate(log_n_p, p.gamma_e, 0.0, more_events=True, **common)
        rate_any = rate + rate_two_clicks

        # Same pump powers, other loss ratios
        log_p = log_power_span(log_n_p, p.gamma_e, p.gamma_i)
        power_rate_max = entanglement_rate(log_p, p.gamma_e, p.gamma_e, power=True, **common)
        power_rate_lossless = entanglement_rate(log_p, p.gamma_e, 0.0, power=True, **common)

        data = {
            'photon_numbers': 10 ** log_n_p,
            'pump_power': 10 ** log_p,
            'rate': rate,
            'rate_max': rate_max,
            'rate_lossless': rate_lossless,
            'rate_purified': rate_purified,
            'rate_one_or_two_clicks': rate_any,
            'power_rate_max': power_rate_max,
            'power_rate_lossless': power_rate_lossless,
        }
        if log_rate:
            with np.errstate(divide="ignore"):
                for key in ('rate', 'rate_max', 'rate_lossless', 'rate_purified', 'rate_one_or_two_clicks',
                            'power_rate_max', 'power_rate_lossless'):
                    data[key] = np.log10(data[key])

        return SimulationResult(
            parameters=self._parameters_dict(),
            data=data,
            metadata={'log_rate': log_rate, 'regime': self.regime, 'coupling_ratio': p.coupling_ratio}
        )

    def sweep_infidelity(self, log_scale: bool = True, step: float = 0.1) -> SimulationResult:
        """Loss infidelity after one pulse, with and without the reset time.

        Also reports the purification yield 1 - S(eps) for the infidelity
        including the reset time.
        """
        p = self.params
        photon_numbers = 10 ** photon_number_log_span(p.g0, step)
        with_reset = loss_infidelity(photon_numbers, p.g0, p.gamma_e, p.pulse_duration, p.reset_time)
        return SimulationResult(
            parameters=self._parameters_dict(),
            data={
                'photon_numbers': photon_numbers,
                'infidelity': loss_infidelity(photon_numbers, p.g0, p.gamma_e, p.pulse_duration),
                'infidelity_with_reset': with_reset,
                'purification_yield': purification_yield(np.clip(with_reset, 0.0, 1.0)),
            },
            metadata={'log_scale': log_scale, 'regime': self.regime, 'coupling_ratio': p.coupling_ratio}
        )
