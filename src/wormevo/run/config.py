import configparser
import math
import os

# Accepted spellings for 'target_behavior', kept here to avoid importing the
# fitness package (which itself depends on the configuration).
_TARGET_BEHAVIORS = ('chemotaxis', 'avoidance', 'foraging', 'omega_turn')

class Config:

    @staticmethod
    def _parse_target_behavior(raw_value):
        """
        Normalize the target behavior to its lower-case name.

        Parameters:
            raw_value: A string ("chemotaxis", "Omega-Turn", ...) or a TargetBehavior member

        Returns:
            The lower-case name of the target behavior
        """
        # TargetBehavior members carry their name in 'value'
        value = getattr(raw_value, 'value', raw_value)
        name  = str(value).strip().lower().replace('-', '_').replace(' ', '_')
        if name not in _TARGET_BEHAVIORS:
            raise ValueError(f"Invalid target behavior '{raw_value}', "
                             f"expected one of {', '.join(_TARGET_BEHAVIORS)}")
        return name

    def __init__(self, config_file: str | None = None):
        """
        Initialize Config by parsing an INI file, or create a Config holding the defaults.

        Parameters:
            config_file: Path to the INI configuration file.
                         If None, creates a Config with default values that can be
                         adjusted by setting attributes.
        """

        # Default config for testing/manual setup
        if config_file is None:
            self.population_size = 20
            self.genome_size     = 12
            self.min_weight      = 0.0
            self.max_weight      = 1.0

            self.elitism_count   = 2
            self.tournament_size = 3
            self.crossover_rate  = 0.7

            self.mutation_rate     = 0.1
            self.mutation_strength = 0.15

            self.target_behavior = 'chemotaxis'
            self.noise_amplitude = 0.1

            self.max_number_generations    = 50
            self.fitness_termination_check = False
            self.fitness_criterion         = 'max'
            self.fitness_threshold         = 0.95

            self.max_steps            = 10
            self.activation_threshold = 0.5
            self.synapse_scale        = 10.0
            return

        if not os.path.exists(config_file):
            raise FileNotFoundError(f"Configuration file '{config_file}' not found")

        parser = configparser.ConfigParser()
        parser.read(config_file)

        # Sentinel for missing default values
        _NO_DEFAULT = object()

        # Helper function to safely parse values
        def get_value(section, key, value_type, default=_NO_DEFAULT):
            try:
                raw_value = parser.get(section, key)
                if raw_value.lower() == 'none':
                    return None
                if value_type == int:
                    return parser.getint(section, key)
                elif value_type == float:
                    return parser.getfloat(section, key)
                elif value_type == bool:
                    return parser.getboolean(section, key)
                elif value_type == str:
                    return raw_value
            except (configparser.NoSectionError, configparser.NoOptionError):
                if default is not _NO_DEFAULT:
                    return default
                raise

        # [POPULATION_INIT]

        # The number of genomes in each generation.
        self.population_size = get_value('POPULATION_INIT', 'population_size', int)

        # The number of synaptic weights encoded by each genome.
        # The weight vector is split into four slices (sensory->inter,
        # inter->command, command->motor, inhibitory), so at least 4 are needed.
        self.genome_size = get_value('POPULATION_INIT', 'genome_size', int)

        # The range of every gene. New genomes are drawn uniformly from
        # it and mutated genes are clamped back into it.
        self.min_weight = get_value('POPULATION_INIT', 'min_weight', float, default=0.0)
        self.max_weight = get_value('POPULATION_INIT', 'max_weight', float, default=1.0)

        # [REPRODUCTION]

        # The number of fittest genomes carried over unchanged to the next generation.
        self.elitism_count = get_value('REPRODUCTION', 'elitism_count', int)

        # The number of genomes sampled for each tournament when selecting a parent.
        self.tournament_size = get_value('REPRODUCTION', 'tournament_size', int, default=3)

        # The probability that a child is produced by single-point crossover
        # (otherwise the child is a clone of the first parent).
        self.crossover_rate = get_value('REPRODUCTION', 'crossover_rate', float)

        # [MUTATION]

        # The probability that any single gene of a child is perturbed.
        self.mutation_rate = get_value('MUTATION', 'mutation_rate', float)

        # Perturbations are drawn uniformly from [-mutation_strength, +mutation_strength].
        self.mutation_strength = get_value('MUTATION', 'mutation_strength', float, default=0.15)

        # [FITNESS]

        # The behavior the weights are optimized for.
        # Allowed values: chemotaxis, avoidance, foraging, omega_turn
        self.target_behavior = get_value('FITNESS', 'target_behavior', str, default='chemotaxis')

        # Peak-to-peak amplitude of the evaluation noise. The noise
        # shrinks linearly to zero as the run approaches its last generation.
        self.noise_amplitude = get_value('FITNESS', 'noise_amplitude', float, default=0.1)

        # [TERMINATION]

        # The number of generations after which to stop the run.
        self.max_number_generations = get_value('TERMINATION', 'max_number_generations', int)

        # Whether to use the fitness of the most recent
        # generation as a criterion for stopping the run.
        self.fitness_termination_check = get_value('TERMINATION', 'fitness_termination_check', bool, default=False)

        # Allowed values:
        #   "mean" calculate the mean fitness across the entire population
        #   "max"  get the fitness of the fittest genome in the population
        self.fitness_criterion = get_value('TERMINATION', 'fitness_criterion', str, default='max')

        # The fitness value which when met or exceeded causes the run to end.
        self.fitness_threshold = get_value('TERMINATION', 'fitness_threshold', float, default=None)

        # [SIMULATION] (optional section)

        # Upper bound on the number of propagation steps in one simulation.
        self.max_steps = get_value('SIMULATION', 'max_steps', int, default=10)

        # Normalized weight magnitude a connection needs to pass activation on.
        self.activation_threshold = get_value('SIMULATION', 'activation_threshold', float, default=0.5)

        # Synapse-count weights are divided by this to normalize them.
        self.synapse_scale = get_value('SIMULATION', 'synapse_scale', float, default=10.0)

    def __setattr__(self, name, value):
        """
        Override 'setattr' so that 'target_behavior' is always stored normalized,
        whether it is read from a file, set by hand or suggested by the tuner.
        """
        if name == 'target_behavior':
            value = self._parse_target_behavior(value)
        super().__setattr__(name, value)

    def validate(self) -> 'Config':
        """
        Check that all parameters lie within their allowed ranges.

        Returns:
            self, so that calls can be chained

        Raises:
            ValueError: if any parameter is out of range
        """
        if self.population_size is None or self.population_size < 1:
            raise ValueError(f"population_size must be at least 1, got {self.population_size}")
        if self.genome_size is None or self.genome_size < 4:
            raise ValueError(f"genome_size must be at least 4, got {self.genome_size}")
        if not self.min_weight < self.max_weight:
            raise ValueError(f"min_weight ({self.min_weight}) must be smaller than max_weight ({self.max_weight})")
        if not 0 <= self.elitism_count <= self.population_size:
            raise ValueError(f"elitism_count must lie in [0, {self.population_size}], got {self.elitism_count}")
        if self.tournament_size < 1:
            raise ValueError(f"tournament_size must be at least 1, got {self.tournament_size}")

        for name in ('crossover_rate', 'mutation_rate'):
            value = getattr(self, name)
            if value is None or math.isnan(value) or not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must lie in [0, 1], got {value}")

        if self.mutation_strength < 0:
            raise ValueError(f"mutation_strength must be non-negative, got {self.mutation_strength}")
        if not 0.0 <= self.noise_amplitude <= 0.1:
            raise ValueError(f"noise_amplitude must lie in [0, 0.1], got {self.noise_amplitude}")
        if self.max_number_generations is None or self.max_number_generations < 0:
            raise ValueError(f"max_number_generations must be non-negative, got {self.max_number_generations}")
        if self.fitness_criterion not in ('max', 'mean'):
            raise ValueError(f"bad 'fitness_criterion' in configuration: {self.fitness_criterion}")
        if self.fitness_termination_check and self.fitness_threshold is None:
            raise ValueError("fitness_threshold is required when fitness_termination_check is enabled")

        if self.max_steps < 1:
            raise ValueError(f"max_steps must be at least 1, got {self.max_steps}")
        if not 0.0 < self.activation_threshold <= 1.0:
            raise ValueError(f"activation_threshold must lie in (0, 1], got {self.activation_threshold}")
        if self.synapse_scale <= 0:
            raise ValueError(f"synapse_scale must be positive, got {self.synapse_scale}")
        return self

    def save(self, path: str) -> None:
        """
        Write the configuration to an INI file that 'Config(path)' reads back.

        Parameters:
            path: Destination of the INI file
        """
        def fmt(value):
            return 'None' if value is None else str(value)

        parser = configparser.ConfigParser()
        parser['POPULATION_INIT'] = {'population_size'          : fmt(self.population_size),
                                     'genome_size'              : fmt(self.genome_size),
                                     'min_weight'               : fmt(self.min_weight),
                                     'max_weight'               : fmt(self.max_weight)}
        parser['REPRODUCTION']    = {'elitism_count'            : fmt(self.elitism_count),
                                     'tournament_size'          : fmt(self.tournament_size),
                                     'crossover_rate'           : fmt(self.crossover_rate)}
        parser['MUTATION']        = {'mutation_rate'            : fmt(self.mutation_rate),
                                     'mutation_strength'        : fmt(self.mutation_strength)}
        parser['FITNESS']         = {'target_behavior'          : fmt(self.target_behavior),
                                     'noise_amplitude'          : fmt(self.noise_amplitude)}
        parser['TERMINATION']     = {'max_number_generations'   : fmt(self.max_number_generations),
                                     'fitness_termination_check': fmt(self.fitness_termination_check),
                                     'fitness_criterion'        : fmt(self.fitness_criterion),
                                     'fitness_threshold'        : fmt(self.fitness_threshold)}
        parser['SIMULATION']      = {'max_steps'                : fmt(self.max_steps),
                                     'activation_threshold'     : fmt(self.activation_threshold),
                                     'synapse_scale'            : fmt(self.synapse_scale)}
        with open(path, 'w') as f:
            parser.write(f)
