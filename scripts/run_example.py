#!/usr/bin/env python3
"""
Utility script to exercise the engine from the command line.

Usage:
    python scripts/run_example.py evolve chemotaxis
    python scripts/run_example.py evolve omega_turn --mode experiment --num-trials 10
    python scripts/run_example.py tune foraging --num-configs 30
    python scripts/run_example.py simulate chemotaxis --stimulus smell_food --seed 1
    python scripts/run_example.py validate touch_reflex_head --drop ALML
"""

import argparse
import json
import logging
from pathlib import Path

from wormevo import (Config,
                     Experiment,
                     REFERENCE_CONNECTOME,
                     ReferenceValidator,
                     SignalPropagationSimulator,
                     Stimulus,
                     StimulusKind,
                     TargetBehavior,
                     Trial)

CONFIG_DIR = Path(__file__).parent.parent / 'examples' / 'configs'

TARGETS  = [t.value for t in TargetBehavior]
PATHWAYS = [p.key for p in REFERENCE_CONNECTOME.pathways]

def _load_config(args) -> Config:
    path = args.config or CONFIG_DIR / f'config_{args.target}.ini'
    return Config(str(path)).validate()

def evolve(args):
    config = _load_config(args)
    print(f"Evolving weights for '{args.target}'...")
    print(f"Mode: {args.mode}")

    if args.mode == 'trial':
        trial = Trial(config, args.target, seed=args.seed)
        trial.run(num_jobs=args.num_jobs)
    else:
        experiment = Experiment(config, num_trials=args.num_trials, base_seed=args.seed or 0, target=args.target)
        experiment.run(num_jobs_trials=args.num_jobs, num_jobs_fitness=1)

def tune(args):
    # Optuna is only needed here
    from wormevo.optimization import HyperparameterTuner

    tuner = HyperparameterTuner(_load_config(args),
                                num_trials_per_eval = args.num_trials,
                                target              = args.target,
                                base_seed           = args.seed or 0,
                                sampler_seed        = args.seed)
    tuner.tune(num_configs=args.num_configs, num_parallel_configs=args.num_jobs)
    tuner.print_summary()
    if args.output:
        tuner.save_best_config(args.output)
        print(f"Best configuration written to {args.output}")

def _pathway_circuit(args):
    circuit = REFERENCE_CONNECTOME.build_pathway_circuit(args.pathway)
    for neuron_id in args.drop:
        circuit = circuit.without_neuron(neuron_id)
    return circuit

def simulate(args):
    circuit   = _pathway_circuit(args)
    stimulus  = Stimulus(StimulusKind.parse(args.stimulus), args.strength)
    simulator = SignalPropagationSimulator(Config(args.config) if args.config else None)
    result    = simulator.simulate(circuit, stimulus, rng=args.seed)
    print(json.dumps(result.to_dict(), indent=2))

def validate(args):
    circuit   = _pathway_circuit(args)
    validator = ReferenceValidator()
    report    = validator.validate(circuit).to_dict()
    report['recommendations'] = [f"{r.source} → {r.target} ({r.reason})"
                                 for r in validator.recommended_connections(circuit)]
    print(json.dumps(report, indent=2, ensure_ascii=False))

def main():
    parser = argparse.ArgumentParser(description='Run the C. elegans circuit engine')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    commands = parser.add_subparsers(dest='command', required=True)

    p = commands.add_parser('evolve', help='Evolve a weight vector for a target behavior')
    p.add_argument('target', choices=TARGETS)
    p.add_argument('--config', help='INI file (default: examples/configs/config_<target>.ini)')
    p.add_argument('--mode', choices=['trial', 'experiment'], default='trial',
                   help='Run single trial or full experiment')
    p.add_argument('--num-trials', type=int, default=10, help='Number of trials for experiment mode')
    p.add_argument('--num-jobs', type=int, default=1, help='Number of parallel jobs')
    p.add_argument('--seed', type=int, default=None)
    p.set_defaults(func=evolve)

    p = commands.add_parser('tune', help='Tune the GA hyperparameters with Optuna')
    p.add_argument('target', choices=TARGETS)
    p.add_argument('--config', help='Base INI file (default: examples/configs/config_<target>.ini)')
    p.add_argument('--num-configs', type=int, default=20, help='Number of configurations to evaluate')
    p.add_argument('--num-trials', type=int, default=3, help='Trials per configuration')
    p.add_argument('--num-jobs', type=int, default=1, help='Configurations evaluated in parallel')
    p.add_argument('--seed', type=int, default=None)
    p.add_argument('--output', help='Where to save the best configuration')
    p.set_defaults(func=tune)

    for name, func, text in (('simulate', simulate, 'Simulate a reference pathway circuit'),
                             ('validate', validate, 'Validate a reference pathway circuit')):
        p = commands.add_parser(name, help=text)
        p.add_argument('pathway', choices=PATHWAYS)
        p.add_argument('--drop', action='append', default=[], metavar='NEURON',
                       help='Remove a neuron from the circuit (repeatable)')
        p.add_argument('--config', help='INI file with a [SIMULATION] section')
        p.add_argument('--seed', type=int, default=None)
        if name == 'simulate':
            p.add_argument('--stimulus', choices=[k.value for k in StimulusKind], default='touch_head')
            p.add_argument('--strength', type=float, default=1.0)
        p.set_defaults(func=func)

    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(asctime)s %(name)s %(levelname)s: %(message)s')
    args.func(args)


if __name__ == '__main__':
    main()
