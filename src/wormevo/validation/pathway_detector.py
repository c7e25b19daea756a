"""
Pathway Detector Module

Classes:
    PathwaySuggestion: A pathway the learner is close to completing
    PathwayDetector:   Recognizes the named pathways a circuit realizes
"""

from dataclasses import dataclass

from wormevo.circuit import Circuit, Pathway, ReferenceConnectome, REFERENCE_CONNECTOME

@dataclass(frozen=True)
class PathwaySuggestion:
    pathway_name   : str
    missing_neurons: tuple[str, ...]
    description    : str

class PathwayDetector:
    """
    Matches a circuit's neuron set against the pathway catalog of a reference connectome.

    A circuit realizes a pathway when it contains at least one of the pathway's
    sensory neurons (or the pathway needs none), at least one of its command
    neurons and at least one of its motor neurons. Pathways are checked in
    their declared order and the first match wins.
    """

    def __init__(self, connectome: ReferenceConnectome = REFERENCE_CONNECTOME):
        self._connectome = connectome

    @staticmethod
    def realizes(pathway: Pathway, neuron_ids) -> bool:
        """
        Check whether a set of neuron ids realizes a given pathway.
        """
        neuron_ids = set(neuron_ids)
        has_sensory = not pathway.required_sensory or not neuron_ids.isdisjoint(pathway.required_sensory)
        has_command = not neuron_ids.isdisjoint(pathway.command_neurons)
        has_motor   = not neuron_ids.isdisjoint(pathway.motor_neurons)
        return has_sensory and has_command and has_motor

    def detect(self, circuit: Circuit) -> Pathway | None:
        """
        Return the first pathway (in priority order) realized by the circuit, or None.
        """
        neuron_ids = circuit.neuron_ids
        for pathway in self._connectome.pathways:
            if self.realizes(pathway, neuron_ids):
                return pathway
        return None

    def suggestions(self, circuit: Circuit, limit: int = 3) -> list[PathwaySuggestion]:
        """
        Suggest pathways the learner has started but not finished.

        A pathway is suggested when the circuit already holds at least one of
        its neurons and lacks between one and five of them. At most three
        missing neurons are listed per suggestion.

        Parameters:
            circuit: The learner circuit
            limit:   Maximum number of suggestions

        Returns:
            Suggestions, in pathway priority order
        """
        neuron_ids  = circuit.neuron_ids
        suggestions = []
        for pathway in self._connectome.pathways:
            present = [n for n in pathway.all_neurons if n in neuron_ids]
            missing = [n for n in pathway.all_neurons if n not in neuron_ids]
            if present and 0 < len(missing) <= 5:
                suggestions.append(PathwaySuggestion(pathway.name, tuple(missing[:3]), pathway.description))
        return suggestions[:limit]
