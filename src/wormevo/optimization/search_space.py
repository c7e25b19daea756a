"""
Search space definitions for hyperparameter tuning.

A SearchSpace lists the Config attributes to tune together with their ranges
or choices; for each Optuna trial it produces a dictionary of suggestions that
can be applied to a copy of a base configuration.
"""

from abc         import ABC, abstractmethod
from dataclasses import dataclass
from typing      import Any
import optuna   # type: ignore

from wormevo.run.config import Config

@dataclass(frozen=True)
class Parameter(ABC):
    """Abstract base class for a single tunable Config attribute."""
    name: str

    @abstractmethod
    def suggest(self, trial: optuna.Trial) -> Any:
        """Generate a suggestion for this parameter using an Optuna trial."""

@dataclass(frozen=True)
class FloatParameter(Parameter):
    low : float
    high: float
    log : bool         = False
    step: float | None = None

    def suggest(self, trial: optuna.Trial) -> float:
        if self.step is not None:
            return trial.suggest_float(self.name, self.low, self.high, step=self.step)
        return trial.suggest_float(self.name, self.low, self.high, log=self.log)

@dataclass(frozen=True)
class IntParameter(Parameter):
    low : int
    high: int
    log : bool = False
    step: int  = 1

    def suggest(self, trial: optuna.Trial) -> int:
        return trial.suggest_int(self.name, self.low, self.high, log=self.log, step=self.step)

@dataclass(frozen=True)
class CategoricalParameter(Parameter):
    choices: tuple

    def suggest(self, trial: optuna.Trial) -> Any:
        return trial.suggest_categorical(self.name, list(self.choices))

class SearchSpace:
    """
    Container for the Config attributes to tune.

    Every parameter name must be an attribute of 'Config'; adding an unknown
    name raises a ValueError right away rather than in the middle of a study.

    Example:
        >>> space = SearchSpace()
        >>> space.add_float('mutation_rate', 0.01, 0.5, log=True)
        >>> space.add_int('tournament_size', 2, 7)
        >>> space.add_categorical('target_behavior', ['chemotaxis', 'foraging'])
    """

    def __init__(self):
        self._parameters: dict[str, Parameter] = {}

    @property
    def parameters(self) -> list[Parameter]:
        return list(self._parameters.values())

    def _add(self, param: Parameter) -> 'SearchSpace':
        if not hasattr(Config(), param.name):
            raise ValueError(f"'{param.name}' is not a configuration parameter")
        if param.name in self._parameters:
            raise ValueError(f"Parameter '{param.name}' is already in the search space")
        self._parameters[param.name] = param
        return self

    def add_float(self, name: str, low: float, high: float,
                  log: bool = False, step: float | None = None) -> 'SearchSpace':
        """
        Add a continuous float parameter (bounds inclusive). Returns self for chaining.
        """
        return self._add(FloatParameter(name, low, high, log, step))

    def add_int(self, name: str, low: int, high: int,
                log: bool = False, step: int = 1) -> 'SearchSpace':
        """
        Add an integer parameter (bounds inclusive). Returns self for chaining.
        """
        return self._add(IntParameter(name, low, high, log, step))

    def add_categorical(self, name: str, choices: list) -> 'SearchSpace':
        """
        Add a categorical parameter. Returns self for chaining.
        """
        return self._add(CategoricalParameter(name, tuple(choices)))

    def suggest(self, trial: optuna.Trial) -> dict[str, Any]:
        """
        Generate one suggestion per parameter for an Optuna trial.
        """
        return {param.name: param.suggest(trial) for param in self._parameters.values()}

    @staticmethod
    def apply(config: Config, values: dict[str, Any]) -> Config:
        """
        Set the given values on 'config' and return it.
        """
        for name, value in values.items():
            setattr(config, name, value)
        return config

    def get_param_names(self) -> list[str]:
        return list(self._parameters)

    def __len__(self) -> int:
        return len(self._parameters)

    def __contains__(self, name: str) -> bool:
        return name in self._parameters

    def __repr__(self) -> str:
        params_str = ',\n    '.join(repr(p) for p in self._parameters.values())
        return f"SearchSpace([\n    {params_str}\n])"

def default_search_space() -> SearchSpace:
    """
    Search space over the genetic-algorithm rates, elitism and tournament size.
    """
    return (SearchSpace()
            .add_float('crossover_rate',    0.3,  1.0)
            .add_float('mutation_rate',     0.01, 0.5, log=True)
            .add_float('mutation_strength', 0.02, 0.5, log=True)
            .add_int('elitism_count',       0,    4)
            .add_int('tournament_size',     2,    7))
