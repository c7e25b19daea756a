"""
Evolutionary Optimizer Module

This module implements an externally stepped genetic algorithm over synaptic
weight vectors. The optimizer never loops on its own: each call to 'step()'
performs exactly one generation and returns its statistics, leaving the choice
of cadence (a timer tick, a 'Trial' loop, a test) to the caller.

Lifecycle:

    IDLE --seed()--> SEEDED --step()--> EVOLVING --step()--> EVOLVING ...
    SEEDED / EVOLVING --pause()--> PAUSED --resume()--> (previous state)
    any state but IDLE --stop()--> STOPPED
    any state --reset()--> IDLE

A pause or stop requested while a generation is being computed (for example by
a listener) takes effect once that generation has been merged, sorted and
emitted, so the population is always fully evaluated and sorted whenever the
caller can observe it.

Classes:
    OptimizerState:        Enumeration of the lifecycle states
    OptimizerStateError:   Raised when an operation is not legal in the current state
    GenerationStats:       Statistics emitted after each generation
    EvolutionaryOptimizer: The genetic algorithm
"""

import logging
from dataclasses import dataclass
from enum        import Enum
from joblib      import Parallel, delayed
from typing      import Callable, Iterable

from wormevo.fitness    import FitnessEvaluator, TargetBehavior
from wormevo.genotype   import Genome
from wormevo.pool       import Population
from wormevo.rng        import RandomSource, as_generator
from wormevo.run.config import Config

logger = logging.getLogger(__name__)

class OptimizerState(Enum):
    IDLE     = "idle"
    SEEDED   = "seeded"
    EVOLVING = "evolving"
    PAUSED   = "paused"
    STOPPED  = "stopped"

class OptimizerStateError(RuntimeError):
    """
    Raised when an optimizer operation is invoked in a state that does not allow it.
    """

@dataclass(frozen=True)
class GenerationStats:
    generation  : int
    best_fitness: float
    avg_fitness : float
    diversity   : float

    def to_dict(self) -> dict:
        return {'generation'  : self.generation,
                'best_fitness': self.best_fitness,
                'avg_fitness' : self.avg_fitness,
                'diversity'   : self.diversity}

Listener = Callable[[GenerationStats, Genome], None]

class EvolutionaryOptimizer:
    """
    A generational genetic algorithm with elitism and tournament selection.

    Each generation:
    1. The top 'elitism_count' genomes are copied unchanged (tagged with the new generation)
    2. Every remaining slot is filled by a child: two parents are picked by
       tournament selection, crossed over with probability 'crossover_rate'
       (otherwise the child is a copy of the first parent) and then mutated
    3. Every child is evaluated; the evaluation noise shrinks as the run progresses
    4. Elites and children are merged and sorted by descending fitness
    5. The diversity of the new population is computed
    6. The statistics and the best genome are emitted to all listeners

    Public Methods:
        seed(population_size, genome_size): Create and evaluate the initial population
        step(num_jobs):                     Compute one generation
        pause(), resume(), stop(), reset(): Lifecycle control
        add_listener(callback):             Subscribe to per-generation events

    Public Properties:
        state, generation, population, best_genome, history, target, config
    """

    def __init__(self,
                 config   : Config | None               = None,
                 target   : TargetBehavior | str | None = None,
                 rng      : RandomSource                = None,
                 evaluator: FitnessEvaluator | None     = None):
        """
        Parameters:
            config:    GA hyperparameters; the defaults of 'Config()' if None
            target:    Behavior to optimize for; 'config.target_behavior' if None
            rng:       Random source (Generator, seed or None)
            evaluator: Fitness evaluator; built from 'config.noise_amplitude' if None
        """
        self._config   : Config           = (config if config is not None else Config()).validate()
        self._target   : TargetBehavior   = TargetBehavior.parse(target if target is not None
                                                                 else self._config.target_behavior)
        self._rng                         = as_generator(rng)
        self._evaluator: FitnessEvaluator = evaluator or FitnessEvaluator(self._config.noise_amplitude)

        self._state         : OptimizerState        = OptimizerState.IDLE
        self._resume_state  : OptimizerState | None = None
        self._population    : Population            = Population()
        self._generation    : int                   = 0
        self._history       : list[GenerationStats] = []
        self._listeners     : list[Listener]        = []

        # Requests received while a generation is being computed
        self._stepping      : bool                  = False
        self._pending_pause : bool                  = False
        self._pending_stop  : bool                  = False

    # ------------------------------------------------------------------ access

    @property
    def state(self) -> OptimizerState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def population(self) -> tuple[Genome, ...]:
        return tuple(self._population)

    @property
    def best_genome(self) -> Genome | None:
        return self._population.best()

    @property
    def history(self) -> list[GenerationStats]:
        return list(self._history)

    @property
    def target(self) -> TargetBehavior:
        return self._target

    @property
    def config(self) -> Config:
        return self._config

    def add_listener(self, callback: Listener):
        """
        Register a callback invoked with '(stats, best_genome)' after every generation.
        """
        self._listeners.append(callback)

    # --------------------------------------------------------------- lifecycle

    def seed(self, population_size: int | None = None, genome_size: int | None = None):
        """
        Create the initial population of random genomes, evaluate and sort it.

        Parameters:
            population_size: Number of genomes; 'config.population_size' if None
            genome_size:     Number of weights per genome; 'config.genome_size' if None

        Raises:
            OptimizerStateError: if the optimizer is not idle
        """
        if self._state is not OptimizerState.IDLE:
            raise OptimizerStateError(f"Cannot seed an optimizer in state '{self._state.value}'; reset it first")

        population_size = population_size if population_size is not None else self._config.population_size
        genome_size     = genome_size     if genome_size     is not None else self._config.genome_size
        if population_size < 1:
            raise ValueError(f"population_size must be at least 1, got {population_size}")
        if population_size < self._config.elitism_count:
            raise ValueError(f"population_size ({population_size}) is smaller than "
                             f"elitism_count ({self._config.elitism_count})")
        if genome_size < 4:
            raise ValueError(f"genome_size must be at least 4, got {genome_size}")

        population = Population.random(population_size,
                                       genome_size,
                                       self._rng,
                                       self._config.min_weight,
                                       self._config.max_weight)
        self._evaluate_all(population.genomes, progress=0.0)
        population.sort()

        self._population = population
        self._generation = 0
        self._history    = []
        self._state      = OptimizerState.SEEDED
        logger.info("Seeded %d genomes of size %d for target '%s' (best fitness %.4f)",
                    population_size, genome_size, self._target.value, population.best().fitness)

    def step(self, num_jobs: int = 1) -> GenerationStats:
        """
        Compute one generation and emit its statistics.

        Parameters:
            num_jobs: Number of parallel processes for the fitness evaluation of children
                       1 = serial (default)
                      -1 = use all available CPU cores
                      >1 = use specified number of processes

        Returns:
            The statistics of the new generation

        Raises:
            OptimizerStateError: if the optimizer is neither seeded nor evolving
        """
        if self._state not in (OptimizerState.SEEDED, OptimizerState.EVOLVING):
            raise OptimizerStateError(f"Cannot step an optimizer in state '{self._state.value}'")

        self._state    = OptimizerState.EVOLVING
        self._stepping = True
        try:
            generation = self._generation + 1
            progress   = generation / max(1, self._config.max_number_generations)

            elites   = self._select_elites(generation)
            children = self._spawn_children(len(self._population) - len(elites), generation)
            self._evaluate_all(children, progress, num_jobs)

            self._population = Population(elites + children)
            self._generation = generation

            best  = self._population.best()
            stats = GenerationStats(generation   = generation,
                                    best_fitness = best.fitness,
                                    avg_fitness  = self._population.average_fitness(),
                                    diversity    = self._population.diversity())
            self._history.append(stats)
            logger.debug("Generation %d: best %.4f, avg %.4f, diversity %.4f",
                         stats.generation, stats.best_fitness, stats.avg_fitness, stats.diversity)

            for listener in list(self._listeners):
                listener(stats, best)
        finally:
            self._stepping = False
            self._apply_pending_requests()

        return stats

    def pause(self):
        """
        Pause a seeded or evolving optimizer. While paused, 'step()' is rejected.
        """
        if self._stepping:
            self._pending_pause = True
            return
        if self._state not in (OptimizerState.SEEDED, OptimizerState.EVOLVING):
            raise OptimizerStateError(f"Cannot pause an optimizer in state '{self._state.value}'")
        self._resume_state = self._state
        self._state        = OptimizerState.PAUSED
        logger.info("Optimizer paused at generation %d", self._generation)

    def resume(self):
        """
        Return a paused optimizer to the state it was paused in.
        """
        if self._state is not OptimizerState.PAUSED:
            raise OptimizerStateError(f"Cannot resume an optimizer in state '{self._state.value}'")
        self._state        = self._resume_state
        self._resume_state = None
        logger.info("Optimizer resumed at generation %d", self._generation)

    def stop(self):
        """
        Stop the run. The population stays readable until 'reset()'.
        """
        if self._stepping:
            self._pending_stop = True
            return
        if self._state is OptimizerState.IDLE:
            raise OptimizerStateError("Cannot stop an optimizer that has not been seeded")
        self._state        = OptimizerState.STOPPED
        self._resume_state = None
        logger.info("Optimizer stopped at generation %d", self._generation)

    def reset(self):
        """
        Drop the population and the history, and return to the idle state.
        """
        if self._stepping:
            raise OptimizerStateError("Cannot reset an optimizer while a generation is being computed")
        self._state         = OptimizerState.IDLE
        self._resume_state  = None
        self._population    = Population()
        self._generation    = 0
        self._history       = []
        self._pending_pause = False
        self._pending_stop  = False

    # -------------------------------------------------------------- generation

    def _select_elites(self, generation: int) -> list[Genome]:
        count = min(self._config.elitism_count, len(self._population))
        return [genome.clone(generation=generation) for genome in self._population[:count]]

    def _spawn_children(self, number: int, generation: int) -> list[Genome]:
        """
        Create 'number' unevaluated children by selection, crossover and mutation.
        """
        config   = self._config
        children = []
        for _ in range(number):
            parent1 = self._population.tournament_select(self._rng, config.tournament_size)
            parent2 = self._population.tournament_select(self._rng, config.tournament_size)

            if self._rng.random() < config.crossover_rate:
                child = parent1.crossover(parent2, self._rng)
            else:
                child = Genome(parent1.weights.copy())

            child = child.mutate(config.mutation_rate,
                                 config.mutation_strength,
                                 self._rng,
                                 config.min_weight,
                                 config.max_weight)
            child.generation = generation
            children.append(child)
        return children

    def _evaluate_all(self, genomes: Iterable[Genome], progress: float, num_jobs: int = 1):
        """
        Evaluate the fitness of the given genomes, in place.

        The noise draws are taken from the optimizer's random source up front,
        so the fitness values do not depend on 'num_jobs'.
        """
        genomes = list(genomes)
        draws   = self._rng.random(len(genomes))
        score   = self._evaluator.score

        if num_jobs == 1:
            fitness_all = [score(g.weights, self._target, d, progress) for g, d in zip(genomes, draws)]
        else:
            fitness_all = Parallel(num_jobs)(delayed(score)(g.weights, self._target, d, progress)
                                             for g, d in zip(genomes, draws))

        for genome, fitness in zip(genomes, fitness_all):
            genome.fitness = fitness

    def _apply_pending_requests(self):
        stop, pause         = self._pending_stop, self._pending_pause
        self._pending_stop  = False
        self._pending_pause = False
        if stop:
            self.stop()
        elif pause:
            self.pause()
