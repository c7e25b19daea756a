"""
Trial Module

This module defines the Trial class, which drives one independent run of the
evolutionary optimizer, stepping it generation by generation until a good
enough weight vector is found or the maximum number of generations is reached.

The optimizer itself never loops; a trial is one possible external driver,
the one used by experiments, the hyperparameter tuner and the command line.
"""

import logging
from statistics import mean

from wormevo.fitness       import TargetBehavior
from wormevo.genotype      import Genome
from wormevo.run.config    import Config
from wormevo.run.optimizer import EvolutionaryOptimizer, GenerationStats

logger = logging.getLogger(__name__)

class Trial:
    """
    One seeded run of the genetic algorithm.

    Subclasses can override:
    - _report_progress(stats): Display progress after each generation
    - _final_report():         Display final results
    - _terminate():            Custom termination logic (default: max generations + fitness threshold)

    Public Attributes:
        failed: True unless the fitness threshold was reached

    Public Methods:
        run(): Execute a complete trial

    Public Properties:
        optimizer, best_genome, history, generation_counter

    Parallelization of fitness evaluation for children:
        num_jobs=1:  Serial evaluation (no parallelization)
        num_jobs>1:  Use specified number of parallel processes
        num_jobs=-1: Use all available CPU cores
    """

    def __init__(self,
                 config         : Config,
                 target         : TargetBehavior | str | None = None,
                 seed           : int | None                  = None,
                 suppress_output: bool                        = False):
        """
        Initialize the trial.

        Parameters:
            config:          Configuration parameters
            target:          Behavior to optimize for; 'config.target_behavior' if None
            seed:            Seed of the random source, for reproducible runs
            suppress_output: If True, suppress progress and final reports
                             (useful when running multiple trials in experiments)
        """
        self._config         : Config                       = config
        self._target         : TargetBehavior | str | None  = target
        self._seed           : int | None                   = seed
        self._suppress_output: bool                         = suppress_output
        self._optimizer      : EvolutionaryOptimizer | None = None
        self.failed          : bool                         = True

    @property
    def optimizer(self) -> EvolutionaryOptimizer | None:
        return self._optimizer

    @property
    def best_genome(self) -> Genome | None:
        return self._optimizer.best_genome if self._optimizer else None

    @property
    def history(self) -> list[GenerationStats]:
        return self._optimizer.history if self._optimizer else []

    @property
    def generation_counter(self) -> int:
        return self._optimizer.generation if self._optimizer else 0

    def run(self, num_jobs: int = 1):
        """
        Run the trial.

        Resets the trial state and steps the optimizer until
        the terminate condition is met.

        Parameters:
            num_jobs: Number of parallel processes for fitness evaluation of children
                      1 = serial (no parallelization)
                     -1 = use all available CPU cores
                     >1 = use specified number of processes
        """
        # Reset the trial state before starting a new run
        self._reset()

        # Create and evaluate the initial population
        self._optimizer.seed()

        # Evolution loop
        while not self._terminate():
            stats = self._optimizer.step(num_jobs)

            # Display progress after each generation
            if not self._suppress_output:
                self._report_progress(stats)

        self._optimizer.stop()
        logger.info("Trial (seed %s) finished after %d generations, best fitness %.4f",
                    self._seed, self.generation_counter, self.best_genome.fitness)

        # Produce final report
        if not self._suppress_output:
            self._final_report()

    def _reset(self):
        """
        Reset the trial state before starting a new run.
        """
        self._optimizer = EvolutionaryOptimizer(self._config, self._target, rng=self._seed)
        self.failed     = True

    def _report_progress(self, stats: GenerationStats):
        """
        Report trial progress after each generation.

        This method is suppressed by setting 'self._suppress_output' to 'True',
        which we might do when running many trials, as part of an experiment.
        """
        print(f"Generation {stats.generation:04d}: "
              f"best fitness = {stats.best_fitness:.4f}, "
              f"avg fitness = {stats.avg_fitness:.4f}, "
              f"diversity = {stats.diversity:.4f}")

    def _final_report(self):
        """
        Produce final report at the end of the trial.
        """
        best = self.best_genome
        print("\n" + "=" * 60)
        print(f"Target behavior : {self._optimizer.target.value}")
        print(f"Generations     : {self.generation_counter}")
        print(f"Best fitness    : {best.fitness:.4f}")
        print(f"Threshold met   : {'yes' if not self.failed else 'no'}")
        print(f"Best weights    : {', '.join(f'{w:.3f}' for w in best.weights)}")
        print("=" * 60)

    def _terminate(self) -> bool:
        """
        Determine whether the trial should terminate.

        This default implementation stops the trial after a maximum number
        of generations and (optionally) also stops it if a given measure of
        population fitness has reached a given threshold.

        Returns:
            bool: True if the trial should stop, False otherwise
        """
        # Has this trial run for too long?
        terminate = self.generation_counter >= self._config.max_number_generations

        # Check whether the fitness has reached a target threshold
        if self._config.fitness_termination_check:
            genome_fitness  = [genome.fitness for genome in self._optimizer.population]
            overall_fitness = None

            if self._config.fitness_criterion == "max":
                overall_fitness = max(genome_fitness)
            elif self._config.fitness_criterion == "mean":
                overall_fitness = mean(genome_fitness)
            else:
                raise RuntimeError("bad 'fitness_criterion' in configuration file")

            # Compare a measure of population fitness (max, mean, ...) against a threshold
            success   = overall_fitness >= self._config.fitness_threshold
            terminate = terminate or success

            if terminate:
                self.failed = not success

        return terminate
