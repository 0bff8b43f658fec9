"""Visualization tools for heralded entanglement calculations."""

from typing import Optional, Tuple
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from matplotlib.axes import Axes

from ..models import SimulationResult, CouplingRegime

US = 1e-6

def _figure(ax: Optional[Axes], figsize: Tuple[float, float]) -> Tuple[Figure, Axes]:
    if ax is None:
        return plt.subplots(figsize=figsize)
    return ax.figure, ax

def _regime_box(ax: Axes, metadata) -> None:
    regime = metadata.get('regime')
    if regime is None:
        return
    ax.text(
        0.02, 0.98,
        f"g/γₑ = {metadata.get('coupling_ratio', 0):.3g}\n{CouplingRegime(regime).value}",
        transform=ax.transAxes,
        verticalalignment='top',
        bbox=dict(boxstyle='round', facecolor='white', alpha=0.8)
    )

def plot_state_components(
    result: SimulationResult,
    figsize: Tuple[float, float] = (10, 6),
) -> Tuple[Figure, np.ndarray]:
    """Plot |c0| and |c1| against time, analytical and numerical.

    Args:
        result: Result of ``HeraldingCalculator.simulate_state_evolution``
        figsize: Figure size (width, height) in inches

    Returns:
        Tuple of (figure, array of two axes)
    """
    fig, axes = plt.subplots(2, 1, sharex=True, figsize=figsize)
    # Convert to µs for plotting
    t = result.data['times'] / US
    basis = result.metadata.get('basis', ['|00>', '|11>'])

    for i, (ax, label) in enumerate(zip(axes, basis)):
        ax.plot(t, np.abs(result.data[f'c{i}_analytical']), color=f'C{i}',
                label=f'$|c_{i}|$ analytical')
        if f'c{i}_numerical' in result.data:
            ax.plot(t, np.abs(result.data[f'c{i}_numerical']), color=f'C{i}', linewidth=3,
                    linestyle='--', label=f'$|c_{i}|$ numerical')
        ax.set_ylabel(f'Amplitude of {label}')
        ax.legend(loc='best')
        ax.grid(True, alpha=0.3)

    axes[-1].set_xlabel('Time (µs)')
    return fig, axes

def plot_survival_probability(
    result: SimulationResult,
    show_approximation: bool = False,
    ax: Optional[Axes] = None,
    figsize: Tuple[float, float] = (10, 6),
) -> Tuple[Figure, Axes]:
    """Plot the probability that the photon remains undetected.

    The Poissonian estimate exp(-4|g|^2 t / gamma_e) is always drawn;
    ``show_approximation`` adds exp((2g' - gamma_e/2) t), including its
    imaginary part when g' is imaginary.
    """
    fig, ax = _figure(ax, figsize)
    # Convert to µs for plotting
    t = result.data['times'] / US

    ax.plot(t, result.data['poissonian_survival'], color='C0', linewidth=1,
            label='Poissonian approximation')
    if show_approximation:
        approx = result.data['survival_approximation']
        ax.plot(t, np.real(approx), color='C0', linestyle='--', linewidth=1,
                label='Approximation [real part]')
        if np.real(result.metadata.get('g_prime', 1.0)) == 0:
            ax.plot(t, np.imag(approx), color='C0', linestyle='-.', linewidth=1,
                    label='Approximation [imaginary part]')
    if 'norm_numerical' in result.data:
        ax.plot(t, result.data['norm_numerical'], color='C1', linestyle='--', linewidth=1,
                label=r'$\langle\psi(t)|\psi(t)\rangle$ (numerical)')
    ax.plot(t, result.data['norm_analytical'], color='C1', linewidth=1,
            label=r'$\langle\psi(t)|\psi(t)\rangle$ (analytical)')

    ax.set_xlabel('Time (µs)')
    ax.set_ylabel('Probability')
    ax.set_title('Probability that the photon remains undetected')
    ax.legend(loc='upper right')
    ax.grid(True, alpha=0.3)
    _regime_box(ax, result.metadata)
    return fig, ax

def plot_entanglement_rate(
    result: SimulationResult,
    guide: bool = False,
    ax: Optional[Axes] = None,
    figsize: Tuple[float, float] = (10, 6),
) -> Tuple[Figure, Axes]:
    """Plot the entanglement rate against the pump photon number.

    A secondary axis on top shows the pump power P / (hbar omega) giving each
    photon number at the loss ratio of ``result``.

    Args:
        result: Result of ``HeraldingCalculator.sweep_entanglement_rate``
        guide: Also draw the gamma_i = gamma_e and gamma_i = 0 curves, at the
            same photon number and at the same pump power
        ax: Optional matplotlib axes to plot on
        figsize: Figure size (width, height) in inches

    Returns:
        Tuple of (figure, axes) containing the plot
    """
    fig, ax = _figure(ax, figsize)
    n_p = result.data['photon_numbers']
    log_rate = result.metadata.get('log_rate', False)

    if guide:
        ax.plot(n_p, result.data['rate_max'], color='C1', label='$r_e$ (γₑ = γᵢ)')
        ax.plot(n_p, result.data['rate_lossless'], color='C1', linestyle='--', label='$r_e$ (γᵢ = 0)')
        if 'power_rate_max' in result.data:
            ax.plot(n_p, result.data['power_rate_max'], color='C3', linestyle=':',
                    label='$r_e$ (γₑ = γᵢ, same power)')
            ax.plot(n_p, result.data['power_rate_lossless'], color='C3', linestyle='-.',
                    label='$r_e$ (γᵢ = 0, same power)')
    ax.plot(n_p, result.data['rate'], color='C0', label='$r_e$ [1 click event]')
    ax.plot(n_p, result.data['rate_one_or_two_clicks'], color='C0', linestyle='--',
            label='$r_e$ [1 or 2 click events]')
    ax.plot(n_p, result.data['rate_purified'], color='C2', linestyle='-.',
            label='$r_e$ (+ purification)')

    ax.set_xscale('log')
    if log_rate:
        finite = result.data['rate_max'][np.isfinite(result.data['rate_max'])]
        if finite.size and finite.max() > 0:
            ax.set_ylim(0, finite.max())
        ax.set_ylabel('log₁₀ entanglement rate (Hz)')
    else:
        ax.set_ylabel('Entanglement rate (Hz)')
    ax.set_xlabel('Number of photons in the pump mode')

    # Pump power axis: <n_p> = 4 gamma_e / (gamma_e + gamma_i)^2 * P / (hbar omega)
    gamma_e = result.parameters['gamma_e']
    gamma_i = result.parameters.get('gamma_i', 0.0)
    factor = 4 * gamma_e / (gamma_e + gamma_i) ** 2
    power_ax = ax.secondary_xaxis('top', functions=(lambda n: n / factor, lambda P: P * factor))
    power_ax.set_xlabel('Power / ħω (1/s)')

    ax.set_title('Entanglement Rate')
    ax.legend(loc='lower left')
    ax.grid(True, alpha=0.3)
    return fig, ax

def plot_infidelity(
    result: SimulationResult,
    ax: Optional[Axes] = None,
    figsize: Tuple[float, float] = (10, 6),
) -> Tuple[Figure, Axes]:
    """Plot the loss infidelity against the pump photon number."""
    fig, ax = _figure(ax, figsize)
    n_p = result.data['photon_numbers']

    ax.plot(n_p, result.data['infidelity'], label='Infidelity ($t_r = 0$)')
    ax.plot(n_p, result.data['infidelity_with_reset'], label='Infidelity')

    ax.set_xscale('log')
    if result.metadata.get('log_scale', True):
        ax.set_yscale('log')
        ax.set_ylim(1e-4, 1)
    ax.set_xlabel('Number of photons in the pump mode')
    ax.set_ylabel('Infidelity')
    ax.set_title('Infidelity vs number of pump photons')
    ax.legend(loc='lower right')
    ax.grid(True, alpha=0.3)
    return fig, ax

def plot_two_photon_infidelity(
    result: SimulationResult,
    ax: Optional[Axes] = None,
    figsize: Tuple[float, float] = (10, 6),
) -> Tuple[Figure, Axes]:
    """Plot the probability of a photon in both resonators against time."""
    fig, ax = _figure(ax, figsize)
    t = result.data['times'] / US

    ax.plot(t, result.data['two_photon_analytical'], label='Analytical')
    if 'two_photon_numerical' in result.data:
        ax.plot(t, result.data['two_photon_numerical'], linestyle='--', label='Numerical')

    ax.set_xlabel('Time (µs)')
    ax.set_ylabel('$|c_1|^2 / (|c_0|^2 + |c_1|^2)$')
    ax.set_title('Two-photon-excitations infidelity')
    ax.legend(loc='lower right')
    ax.grid(True, alpha=0.3)
    _regime_box(ax, result.metadata)
    return fig, ax
