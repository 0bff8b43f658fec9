import matplotlib

matplotlib.use("Agg")

import pytest

from heralded_entanglement import TransducerParameters, HeraldingCalculator

@pytest.fixture
def default_params():
    """Typical hardware: g0 = 1 kHz, n_p = 1e6, gamma_e = gamma_i = 100 MHz."""
    return TransducerParameters.from_log_scales()

@pytest.fixture
def calculator(default_params):
    return HeraldingCalculator(default_params)
