"""Core data models for heralded entanglement calculations."""

from dataclasses import dataclass, field
from typing import Tuple, Dict, Any
import numpy as np
from enum import Enum

from ..core.amplitudes import coupling_rate, g_prime

MHz = 1e6
kHz = 1e3

class Detuning(str, Enum):
    BLUE = "blue"
    RED = "red"

    @property
    def basis(self) -> Tuple[str, str]:
        """Fock states |n_a n_b> spanning the conditional evolution."""
        if self is Detuning.BLUE:
            return ("|00>", "|11>")
        return ("|01>", "|10>")

    @property
    def bell_pair(self) -> str:
        """Microwave Bell pair heralded by a click."""
        if self is Detuning.BLUE:
            return "|01> ± |10>"
        return "|00> ± |11>"

class CouplingRegime(str, Enum):
    RESPECTING = "respecting regime"
    BEGINNING_TO_BREAK = "beginning to break"
    OUTSIDE = "outside regime"
    OSCILLATORY = "oscillatory, g' imaginary"

@dataclass
class TransducerParameters:
    """Parameters of a pumped electro-optic transducer and its heralding protocol.

    All rates are in s^-1 and all times in seconds.
    """
    g0: float  # single-photon nonlinear interaction rate
    n_p: float  # mean photon number in the pump mode
    gamma_e: float  # extrinsic loss rate of the optical mode
    gamma_i: float = 0.0  # intrinsic loss rate of the optical mode
    pulse_duration: float = 1e-7
    reset_time: float = 1e-6
    detuning: Detuning = Detuning.BLUE

    def __post_init__(self):
        self.detuning = Detuning(self.detuning)
        for name in ("g0", "n_p", "gamma_i", "pulse_duration", "reset_time"):
            value = getattr(self, name)
            if not np.isfinite(value) or value < 0:
                raise ValueError(f"{name} must be a non-negative finite number, got {value!r}")
        if not np.isfinite(self.gamma_e) or self.gamma_e <= 0:
            raise ValueError(f"gamma_e must be positive, got {self.gamma_e!r}")

    @classmethod
    def from_log_scales(
        cls,
        log10_g0_khz: float = 0.0,
        log10_n_p: float = 6.0,
        log10_gamma_e_mhz: float = 2.0,
        gamma_i_ratio: float = 1.0,
        pulse_duration_100ns: float = 1.0,
        reset_time: float = 1e-6,
        detuning: Detuning = Detuning.BLUE,
    ) -> "TransducerParameters":
        """Build parameters from the logarithmic scales used to explore them interactively."""
        gamma_e = 10 ** log10_gamma_e_mhz * MHz
        return cls(
            g0=10 ** log10_g0_khz * kHz,
            n_p=10 ** log10_n_p,
            gamma_e=gamma_e,
            gamma_i=gamma_i_ratio * gamma_e,
            pulse_duration=pulse_duration_100ns * 1e-7,
            reset_time=reset_time,
            detuning=detuning,
        )

    @property
    def g(self) -> float:
        return float(coupling_rate(self.g0, self.n_p))

    @property
    def g_prime(self) -> complex:
        return complex(g_prime(self.g, self.gamma_e))

    @property
    def coupling_ratio(self) -> float:
        return self.g / self.gamma_e

    @property
    def time_interval(self) -> float:
        """Window over which trajectories are evaluated (20 extrinsic lifetimes)."""
        return 20.0 / self.gamma_e

@dataclass
class Trajectory:
    """Amplitudes of the two basis states sampled in time."""
    times: np.ndarray
    c0: np.ndarray
    c1: np.ndarray
    method: str = "analytical"

    @property
    def populations(self) -> Tuple[np.ndarray, np.ndarray]:
        return np.abs(self.c0) ** 2, np.abs(self.c1) ** 2

    @property
    def norm(self) -> np.ndarray:
        """<psi|psi>, the probability that no photon has been detected yet."""
        p0, p1 = self.populations
        return p0 + p1

def _finite_list(values: np.ndarray):
    """``values.tolist()`` with NaN and infinities replaced by None."""
    if values.dtype.kind == 'f':
        return np.where(np.isfinite(values), values, None).tolist()
    return values.tolist()

def _serialise(value):
    # JSON has no NaN or infinity; non-finite numbers become null
    if isinstance(value, np.ndarray):
        if np.iscomplexobj(value):
            return {"real": _finite_list(value.real), "imag": _finite_list(value.imag)}
        return _finite_list(value)
    if isinstance(value, (complex, np.complexfloating)):
        return {"real": _serialise(float(value.real)), "imag": _serialise(float(value.imag))}
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and not np.isfinite(value):
        return None
    return value

@dataclass
class SimulationResult:
    """Container for simulation results and analysis."""
    parameters: Dict[str, Any]
    data: Dict[str, np.ndarray]
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to a serializable dictionary."""
        return {
            "parameters": {k: _serialise(v) for k, v in self.parameters.items()},
            "data": {k: _serialise(v) for k, v in self.data.items()},
            "metadata": {k: _serialise(v) for k, v in self.metadata.items()}
        }
