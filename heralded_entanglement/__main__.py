"""Command-line interface for heralded entanglement calculations."""

import argparse
import json
import logging
from dataclasses import replace
from pathlib import Path
import matplotlib.pyplot as plt

from .core.physics import HeraldingCalculator
from .config import ConfigManager, get_default_config
from .models import Detuning, MHz, kHz
from .visualization.plotting import (
    plot_state_components,
    plot_survival_probability,
    plot_entanglement_rate,
    plot_infidelity,
    plot_two_photon_infidelity
)

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Heralded Entanglement Calculator')

    # Input/output arguments
    parser.add_argument('-c', '--config', type=str, help='Path to configuration file')
    parser.add_argument('-o', '--output', type=str, default='results',
                        help='Output directory for results')

    # Operating point, on the same scales as the interactive sliders
    parser.add_argument('--log10-g0-khz', type=float, help='log10 of g0 in kHz')
    parser.add_argument('--log10-np', type=float, help='log10 of the pump photon number')
    parser.add_argument('--log10-gamma-e-mhz', type=float, help='log10 of gamma_e in MHz')
    parser.add_argument('--gamma-ratio', type=float, help='gamma_i / gamma_e')
    parser.add_argument('--pulse-100ns', type=float, help='Pump pulse duration in units of 0.1 µs')
    parser.add_argument('--detuning', choices=[d.value for d in Detuning], help='Pump detuning')

    parser.add_argument('--plot', action='store_true', help='Generate plots')
    parser.add_argument('--save', action='store_true', help='Save results to file')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log calculation details')
    return parser

def apply_overrides(params, args):
    """Replace transducer parameters given on the command line."""
    changes = {}
    if args.log10_g0_khz is not None:
        changes['g0'] = 10 ** args.log10_g0_khz * kHz
    if args.log10_np is not None:
        changes['n_p'] = 10 ** args.log10_np
    if args.log10_gamma_e_mhz is not None:
        changes['gamma_e'] = 10 ** args.log10_gamma_e_mhz * MHz
    if args.gamma_ratio is not None:
        changes['gamma_i'] = args.gamma_ratio * changes.get('gamma_e', params.gamma_e)
    if args.pulse_100ns is not None:
        changes['pulse_duration'] = args.pulse_100ns * 1e-7
    if args.detuning is not None:
        changes['detuning'] = Detuning(args.detuning)
    return replace(params, **changes) if changes else params

def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s')

    # Load configuration
    if args.config:
        config = ConfigManager.load_config(args.config)
    else:
        print("Using default configuration")
        config = get_default_config()

    # Create output directory
    output_dir = Path(args.output)
    output_dir.mkdir(parents=True, exist_ok=True)

    try:
        params = ConfigManager.from_dict(config)
        transducer = apply_overrides(params['transducer'], args)
        calculator = HeraldingCalculator(transducer)
        sim = params['simulation']
        sweep = params['sweep']

        # Report operating point
        summary = calculator.summary()
        print("Operating point:")
        print(f"  g       = {summary['g'] / kHz:.4g} kHz")
        print(f"  n_p     = {summary['n_p']:.4g}")
        print(f"  g'      = {summary['g_prime'] / MHz:.4g} MHz")
        print(f"  gamma_e = {summary['gamma_e'] / MHz:.4g} MHz")
        print(f"  window  = [0, {summary['time_interval'] / 1e-6:.4g}] µs")
        print(f"  g/gamma_e = {summary['coupling_ratio']:.4g} ({summary['regime'].value})")
        print(f"  r0      = {summary['detection_rate']:.4g} Hz")

        # Run calculations
        evolution = calculator.simulate_state_evolution(sim['num_points'], rtol=sim['rtol'], atol=sim['atol'])
        rates = calculator.sweep_entanglement_rate(log_rate=sweep['log_rate'], step=sweep['step'])
        infidelity = calculator.sweep_infidelity(log_scale=sweep['log_rate'], step=sweep['step'])
        deviation = evolution.metadata['max_deviation']
        if deviation is None:
            print(f"Numerical cross-check skipped ({evolution.metadata['oscillation_periods']:.0f} oscillation periods)")
        else:
            print(f"Max analytical/numerical deviation: {deviation:.2e}")

        # Save results if requested
        if args.save:
            result_file = output_dir / 'heralding_results.json'
            with open(result_file, 'w') as f:
                json.dump({
                    'config': ConfigManager.to_dict({**params, 'transducer': transducer}),
                    'state_evolution': evolution.to_dict(),
                    'entanglement_rate': rates.to_dict(),
                    'infidelity': infidelity.to_dict()
                }, f, indent=2, allow_nan=False)
            print(f"Results saved to {result_file}")

        # Generate plots if requested
        if args.plot or (args.config and sim.get('make_plots', False)):
            print("Generating plots...")

            plots_dir = output_dir / 'plots'
            plots_dir.mkdir(exist_ok=True)

            figures = {
                'state_components.png': plot_state_components(evolution)[0],
                'survival_probability.png': plot_survival_probability(evolution, show_approximation=True)[0],
                'two_photon_infidelity.png': plot_two_photon_infidelity(evolution)[0],
                'entanglement_rate.png': plot_entanglement_rate(rates, guide=True)[0],
                'infidelity.png': plot_infidelity(infidelity)[0],
            }
            for name, fig in figures.items():
                fig.savefig(plots_dir / name, dpi=300, bbox_inches='tight')

            plt.close('all')
            print(f"Plots saved to {plots_dir}")

        print("Calculation completed successfully!")

    except Exception as e:
        print(f"Error during calculation: {str(e)}")
        raise

if __name__ == "__main__":
    main()
