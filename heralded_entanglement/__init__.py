"""Heralded microwave-optical entanglement package.

This package computes the conditional evolution, heralding rates and
infidelities of microwave Bell pairs generated through a pumped
electro-optic transducer and an optical photodetector.
"""

__version__ = "0.1.0"

from .models import (
    Detuning,
    CouplingRegime,
    TransducerParameters,
    Trajectory,
    SimulationResult
)

from .core.physics import HeraldingCalculator
from .core.integrator import IntegrationError
from .config import ConfigManager, get_default_config
from .visualization.plotting import (
    plot_state_components,
    plot_survival_probability,
    plot_entanglement_rate,
    plot_infidelity,
    plot_two_photon_infidelity
)

__all__ = [
    'Detuning',
    'CouplingRegime',
    'TransducerParameters',
    'Trajectory',
    'SimulationResult',
    'HeraldingCalculator',
    'IntegrationError',
    'ConfigManager',
    'get_default_config',
    'plot_state_components',
    'plot_survival_probability',
    'plot_entanglement_rate',
    'plot_infidelity',
    'plot_two_photon_infidelity'
]
