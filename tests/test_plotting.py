import matplotlib.pyplot as plt
import pytest

from heralded_entanglement import (
    HeraldingCalculator,
    TransducerParameters,
    plot_entanglement_rate,
    plot_infidelity,
    plot_state_components,
    plot_survival_probability,
    plot_two_photon_infidelity,
)

@pytest.fixture
def evolution(calculator):
    return calculator.simulate_state_evolution(num_points=101)

@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close('all')

def test_plot_state_components(evolution):
    fig, axes = plot_state_components(evolution)
    assert len(axes) == 2
    assert len(axes[0].get_lines()) == 2
    assert axes[1].get_xlabel() == 'Time (µs)'

def test_plot_survival_probability(evolution):
    fig, ax = plot_survival_probability(evolution)
    assert len(ax.get_lines()) == 3
    fig, ax = plot_survival_probability(evolution, show_approximation=True)
    assert len(ax.get_lines()) == 4

def test_survival_approximation_shows_imaginary_part_when_oscillatory():
    params = TransducerParameters(g0=1e3, n_p=9e10, gamma_e=1e8)
    evolution = HeraldingCalculator(params).simulate_state_evolution(num_points=101)
    fig, ax = plot_survival_probability(evolution, show_approximation=True)
    assert len(ax.get_lines()) == 5

def test_plot_on_existing_axes(evolution):
    fig, ax = plt.subplots()
    returned_fig, returned_ax = plot_two_photon_infidelity(evolution, ax=ax)
    assert returned_fig is fig and returned_ax is ax
    assert len(ax.get_lines()) == 2

@pytest.mark.parametrize("log_rate", [False, True])
def test_plot_entanglement_rate(calculator, log_rate):
    rates = calculator.sweep_entanglement_rate(log_rate=log_rate)
    fig, ax = plot_entanglement_rate(rates, guide=True)
    assert len(ax.get_lines()) == 7
    assert ax.get_xscale() == 'log'
    fig, ax = plot_entanglement_rate(rates)
    assert len(ax.get_lines()) == 3

def test_plot_infidelity(calculator):
    fig, ax = plot_infidelity(calculator.sweep_infidelity(log_scale=True))
    assert ax.get_yscale() == 'log'
    fig, ax = plot_infidelity(calculator.sweep_infidelity(log_scale=False))
    assert ax.get_yscale() == 'linear'

def test_entanglement_rate_has_pump_power_axis(calculator):
    rates = calculator.with_parameters(gamma_i=3e8).sweep_entanglement_rate()
    fig, ax = plot_entanglement_rate(rates)
    assert len(ax.child_axes) == 1
    power_ax = ax.child_axes[0]
    assert power_ax.get_xlabel() == 'Power / ħω (1/s)'

    fig.canvas.draw()
    low, high = sorted(power_ax.get_xlim())
    power = rates.data['pump_power']
    assert low <= power.min() * (1 + 1e-9)
    assert high >= power.max() * (1 - 1e-9)

def test_plots_without_numerical_trajectory():
    params = TransducerParameters(g0=1e6, n_p=1e6, gamma_e=1e5)
    evolution = HeraldingCalculator(params).simulate_state_evolution(num_points=101)
    assert evolution.metadata['numerical_skipped']

    fig, axes = plot_state_components(evolution)
    assert len(axes[0].get_lines()) == 1
    fig, ax = plot_survival_probability(evolution)
    assert len(ax.get_lines()) == 2
    fig, ax = plot_two_photon_infidelity(evolution)
    assert len(ax.get_lines()) == 1
