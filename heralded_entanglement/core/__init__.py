"""Numerical core: amplitudes, integration, rates and fidelities."""
