"""
Experiment Module

This module defines the Experiment class, a collection of independent trials
with consecutive seeds, run serially or in parallel using joblib.

An experiment is used to gather statistical data about how reliably the
genetic algorithm reaches a target behavior for a given configuration.
"""

from joblib import Parallel, delayed
import sys
from typing import Type

from wormevo.fitness    import TargetBehavior
from wormevo.run.config import Config
from wormevo.run.trial  import Trial

class Experiment:
    """
    A collection of independent trials, aggregated into summary statistics.

    Trial number n (1-indexed) is seeded with 'base_seed + n - 1', so a whole
    experiment is reproducible from its base seed.

    Subclasses can override:
    - _prepare_trial(trial, trial_number):         Configure each trial before execution
    - _extract_trial_results(trial, trial_number): Extract results after a trial completes (call super())
    - _analyze_trial_results(results):            Process the results of each trial (call super())
    - _final_report():                            Produce the aggregated report

    Public Methods:
        run(num_jobs_trials=1, num_jobs_fitness=1): Execute the complete experiment
        summary():                                  Aggregated statistics of the last run

    Parallelization:
        Trial-level parallelization (num_jobs_trials):
            1:  Serial trial execution (no parallelization)
           >1:  Use specified number of parallel processes for trials
           -1:  Use all available CPU cores for trials

        Fitness-level parallelization within each trial (num_jobs_fitness):
            1:  Serial fitness evaluation (recommended when num_jobs_trials > 1)
           >1:  Use specified number of parallel processes per trial
           -1:  Use all available CPU cores per trial
    """

    def __init__(self,
                 config         : Config,
                 num_trials     : int,
                 base_seed      : int                         = 0,
                 target         : TargetBehavior | str | None = None,
                 trial_class    : Type[Trial]                 = Trial,
                 suppress_output: bool                        = False):
        """
        Parameters:
            config:          configuration parameters
            num_trials:      number of trials in this experiment
            base_seed:       seed of the first trial
            target:          behavior to optimize for; 'config.target_behavior' if None
            trial_class:     the class describing the trials in this experiment
            suppress_output: if True, do not print the progress and the final report
        """
        if num_trials < 1:
            raise ValueError(f"num_trials must be at least 1, got {num_trials}")

        self._config         : Config      = config
        self._num_trials     : int         = num_trials
        self._base_seed      : int         = base_seed
        self._target                       = target
        self._trial_class    : Type[Trial] = trial_class
        self._suppress_output: bool        = suppress_output

        # progress counters
        self._trial_counter  : int = 0  # how many trials we've run so far
        self._success_counter: int = 0  # how many trials reached the fitness threshold

        # for each trial, some stats
        self._number_generations: list[int]   = []  # length of trial, in generations
        self._max_fitness       : list[float] = []  # best fitness achieved in trial

    def _reset(self):
        """
        Reset experiment state before starting a new run.
        """
        self._trial_counter      = 0
        self._success_counter    = 0
        self._number_generations = []
        self._max_fitness        = []

    def run(self, num_jobs_trials: int = 1, num_jobs_fitness: int = 1) -> list[dict]:
        """
        Run the experiment.

        Resets the experiment state and runs the necessary number of trials.

        Parameters:
            num_jobs_trials:  Number of parallel processes for running trials
            num_jobs_fitness: Number of parallel processes for fitness evaluation within each trial

        Returns:
            The results extracted from each trial, in trial order
        """
        self._reset()

        if num_jobs_trials == 1:
            results = []
            while self._trial_counter < self._num_trials:
                self._trial_counter += 1
                results.append(self._run_trial(self._trial_counter, num_jobs_fitness))
        else:
            results = Parallel(num_jobs_trials)(
                delayed(self._run_trial)(n, num_jobs_fitness)
                for n in range(1, self._num_trials + 1)
            )
            self._trial_counter = self._num_trials

        # Analyze the data of each trial, then
        # assemble all the data gathered in a final report
        for r in results:
            self._analyze_trial_results(r)
        if not self._suppress_output:
            self._final_report()
        return results

    def _run_trial(self, trial_number: int, num_jobs: int = 1) -> dict:
        """
        Prepare, run, analyze one trial.
        Returns the relevant data generated by the trial.
        """
        trial = self._trial_class(config          = self._config,
                                  target          = self._target,
                                  seed            = self._base_seed + trial_number - 1,
                                  suppress_output = True)

        self._prepare_trial(trial, trial_number)
        trial.run(num_jobs)
        return self._extract_trial_results(trial, trial_number)

    def _prepare_trial(self, trial: Trial, trial_number: int):
        """
        Configure the trial about to run. The default implementation prints a progress report.
        """
        if not self._suppress_output:
            sys.stdout.write(f"Starting trial {trial_number:03d} of {self._num_trials}...\r")
            sys.stdout.flush()

    def _extract_trial_results(self, trial: Trial, trial_number: int) -> dict:
        """
        Extract relevant results at the end of a trial.
        """
        best = trial.best_genome
        return {"trial_number"      : trial_number,
                "seed"              : self._base_seed + trial_number - 1,
                "number_generations": trial.generation_counter,
                "max_fitness"       : best.fitness,
                "best_weights"      : best.weights.tolist(),
                "success"           : not trial.failed}

    def _analyze_trial_results(self, results: dict):
        """
        Update the aggregated statistics with the results of one trial.
        """
        if results["success"]:
            self._success_counter += 1
        self._number_generations.append(results["number_generations"])
        self._max_fitness.append(results["max_fitness"])

    def summary(self) -> dict:
        """
        Return the aggregated statistics of the last run.
        """
        def avg(values):
            return sum(values) / len(values) if values else 0.0

        return {"num_trials"             : self._trial_counter,
                "success_rate"           : self._success_counter / self._trial_counter if self._trial_counter else 0.0,
                "avg_number_generations" : avg(self._number_generations),
                "avg_max_fitness"        : avg(self._max_fitness),
                "best_max_fitness"       : max(self._max_fitness, default=0.0)}

    def _final_report(self):
        """
        Produce the final report, aggregating the data obtained from each trial.
        """
        s = self.summary()
        print("\n" + "=" * 60)
        print(f"Trials                 : {s['num_trials']}")
        print(f"Success rate           : {100 * s['success_rate']:.1f}%")
        print(f"Average generations    : {s['avg_number_generations']:.1f}")
        print(f"Average best fitness   : {s['avg_max_fitness']:.4f}")
        print(f"Best fitness overall   : {s['best_max_fitness']:.4f}")
        print("=" * 60)
