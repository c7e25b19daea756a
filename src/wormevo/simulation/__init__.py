"""
Simulation Package

Discrete-time signal propagation over a circuit, predicting the behavior a
stimulus produces.

Modules:
    stimulus:  StimulusKind enumeration and Stimulus class
    simulator: SignalPropagationSimulator and SimulationResult classes

Exported Classes:
    Stimulus:                   A stimulus of a given kind and strength
    StimulusKind:               Enumeration of stimuli (TOUCH_HEAD, TOUCH_TAIL, SMELL_FOOD, NONE)
    SimulationResult:           Predicted behavior, confidence and activated neurons
    SignalPropagationSimulator: The simulator
"""

from wormevo.simulation.simulator import SignalPropagationSimulator, SimulationResult
from wormevo.simulation.stimulus  import Stimulus, StimulusKind

__all__ = ['SignalPropagationSimulator',
           'SimulationResult',
           'Stimulus',
           'StimulusKind']
