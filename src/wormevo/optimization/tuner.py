"""
Hyperparameter tuner for the genetic algorithm.

This module provides HyperparameterTuner, a wrapper around an Optuna study
(TPE sampler, maximize) whose objective runs one or more seeded trials with the
suggested configuration and returns the mean best fitness they reach.
"""

import copy
import logging
from statistics import mean
from typing     import Any, Callable

import optuna   # type: ignore
from optuna import Study, Trial as OptunaTrial  # type: ignore

from wormevo.fitness                   import TargetBehavior
from wormevo.optimization.search_space import SearchSpace, default_search_space
from wormevo.run                       import Config, Trial

logger = logging.getLogger(__name__)

class HyperparameterTuner:
    """
    Bayesian optimization of GA hyperparameters.

    Each Optuna trial copies the base configuration, applies the suggested
    values and runs 'num_trials_per_eval' trials seeded with 'base_seed',
    'base_seed + 1', ... The objective is the mean of their best fitness
    values. Suggestions that make the configuration invalid (for example an
    elitism count larger than the population) are pruned.

    Example:

        >>> tuner = HyperparameterTuner(Config('config_chemotaxis.ini'), num_trials_per_eval=3)
        >>> tuner.tune(num_configs=40)
        >>> best_config = tuner.get_best_config()
    """

    def __init__(self,
                 config             : Config | str | None         = None,
                 search_space       : SearchSpace | None          = None,
                 num_trials_per_eval: int                         = 1,
                 target             : TargetBehavior | str | None = None,
                 base_seed          : int                         = 0,
                 num_workers_fitness: int                         = 1,
                 sampler_seed       : int | None                  = None,
                 study_name         : str | None                  = None,
                 storage            : str | None                  = None):
        """
        Parameters:
            config:              Base configuration, or path to its INI file; defaults if None
            search_space:        Parameters to tune; 'default_search_space()' if None
            num_trials_per_eval: Number of trials to run per hyperparameter set
            target:              Behavior to optimize for; 'config.target_behavior' if None
            base_seed:           Seed of the first trial of every evaluation
            num_workers_fitness: Number of parallel processes for fitness evaluation of children
            sampler_seed:        Seed of the TPE sampler, for reproducible studies
            study_name:          Name for the Optuna study (for persistence)
            storage:             Database URL for study persistence (e.g., 'sqlite:///tuning.db')
        """
        if num_trials_per_eval < 1:
            raise ValueError(f"num_trials_per_eval must be at least 1, got {num_trials_per_eval}")

        self.base_config         = config if isinstance(config, Config) else Config(config)
        self.search_space        = search_space if search_space is not None else default_search_space()
        self.num_trials_per_eval = num_trials_per_eval
        self.target              = target
        self.base_seed           = base_seed
        self.num_workers_fitness = num_workers_fitness

        # Create or load Optuna study with TPESampler
        self.study = optuna.create_study(study_name     = study_name,
                                         storage        = storage,
                                         direction      = 'maximize',
                                         sampler        = optuna.samplers.TPESampler(seed=sampler_seed),
                                         load_if_exists = True)

    def make_config(self, values: dict[str, Any]) -> Config:
        """
        Return a validated copy of the base configuration with 'values' applied.

        Raises:
            ValueError: if the resulting configuration is invalid
        """
        return SearchSpace.apply(copy.deepcopy(self.base_config), values).validate()

    def evaluate(self, config: Config) -> float:
        """
        Run 'num_trials_per_eval' seeded trials and return their mean best fitness.
        """
        best_fitness = []
        for n in range(self.num_trials_per_eval):
            trial = Trial(config, self.target, seed=self.base_seed + n, suppress_output=True)
            trial.run(num_jobs=self.num_workers_fitness)
            best_fitness.append(trial.best_genome.fitness)
        return mean(best_fitness)

    def _objective(self, trial: OptunaTrial) -> float:
        suggestions = self.search_space.suggest(trial)
        try:
            config = self.make_config(suggestions)
        except ValueError as e:
            logger.debug("Pruning Optuna trial %d: %s", trial.number, e)
            raise optuna.TrialPruned(str(e)) from e

        value = self.evaluate(config)
        logger.info("Optuna trial %d: %s -> %.4f", trial.number, suggestions, value)
        return value

    def tune(self,
             num_configs         : int | None            = None,
             timeout             : float | None          = None,
             num_parallel_configs: int                   = 1,
             callbacks           : list[Callable] | None = None,
             show_progress_bar   : bool                  = False) -> Study:
        """
        Run the study.

        Parameters:
            num_configs:          Total number of parameter configurations to evaluate
            timeout:              Time limit in seconds (alternative to 'num_configs')
            num_parallel_configs: Number of configurations to evaluate in parallel
            callbacks:            List of Optuna callbacks
            show_progress_bar:    Whether Optuna displays a progress bar

        Returns:
            The Optuna study
        """
        if num_configs is None and timeout is None:
            raise ValueError("Please specify at least one of 'num_configs' or 'timeout' for tuning.")

        self.study.optimize(self._objective,
                            n_trials          = num_configs,
                            timeout           = timeout,
                            n_jobs            = num_parallel_configs,
                            gc_after_trial    = True,
                            show_progress_bar = show_progress_bar,
                            callbacks         = callbacks)
        return self.study

    def get_best_params(self) -> dict[str, Any]:
        return self.study.best_params

    def get_best_value(self) -> float:
        return self.study.best_value

    def get_best_config(self) -> Config:
        """
        Get a Config object with the best parameters.
        """
        return self.make_config(self.study.best_params)

    def save_best_config(self, path: str) -> None:
        self.get_best_config().save(path)

    def print_summary(self) -> None:
        """Print a summary of the tuning results."""
        print("\n" + "=" * 60)
        print("TUNING SUMMARY")
        print("=" * 60)
        print(f"Number of finished trials: {len(self.study.trials)}")
        print(f"Best mean fitness: {self.study.best_value:.6f}")
        print("\nBest parameters:")
        for param_name, value in self.study.best_params.items():
            print(f"  {param_name}: {value}")
        print("=" * 60)
