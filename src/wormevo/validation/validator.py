"""
Reference Validator Module

This module scores a learner-built circuit against the reference connectome.

Scoring:
    accuracy:     share of the learner's connections that exist in the reference data
    completeness: share of the reference connections among the placed neurons
                  that the learner actually drew
    pathway:      25 points per connection running sensory -> command/interneuron
                  or command/interneuron -> motor, 12.5 points per connection running
                  interneuron -> interneuron, capped at 100
    overall:      0.4 * accuracy + 0.35 * completeness + 0.25 * pathway

All scores are integer percentages. Only connections whose two endpoints are
placed in the circuit take part in the scoring.

Classes:
    RecommendedConnection: A reference connection the learner has not drawn yet
    ValidationResult:      Scores, grade, feedback and badges for a circuit
    ReferenceValidator:    The validator
"""

import math
from dataclasses import dataclass, field

from wormevo.circuit import Circuit, NeuronKind, Pathway, ReferenceConnectome, REFERENCE_CONNECTOME
from wormevo.validation.pathway_detector import PathwayDetector, PathwaySuggestion

# (minimum overall score, grade), from best to worst
GRADE_THRESHOLDS = ((95, "A+"), (85, "A"), (70, "B"), (55, "C"), (40, "D"))

ACCURACY_WEIGHT     = 0.40
COMPLETENESS_WEIGHT = 0.35
PATHWAY_WEIGHT      = 0.25
PATHWAY_POINTS      = 25

def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))

def _label(edge: tuple[str, str]) -> str:
    return f"{edge[0]} → {edge[1]}"

def grade_for(overall_score: int) -> str:
    for threshold, grade in GRADE_THRESHOLDS:
        if overall_score >= threshold:
            return grade
    return "F"

@dataclass(frozen=True)
class RecommendedConnection:
    source: str
    target: str
    weight: float
    reason: str

@dataclass
class ValidationResult:
    """
    Outcome of validating a circuit.

    Connections are reported as (source, target) pairs. 'detected_pathway' is
    the pathway the circuit realizes, if any.
    """
    overall_score         : int
    accuracy_score        : int
    completeness_score    : int
    pathway_score         : int
    grade                 : str
    correct_connections   : list[tuple[str, str]] = field(default_factory=list)
    missing_connections   : list[tuple[str, str]] = field(default_factory=list)
    extra_connections     : list[tuple[str, str]] = field(default_factory=list)
    biologically_plausible: bool                  = True
    detected_pathway      : Pathway | None        = None
    feedback              : list[str]             = field(default_factory=list)
    badges                : list[str]             = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'overallScore'        : self.overall_score,
            'accuracyScore'       : self.accuracy_score,
            'completenessScore'   : self.completeness_score,
            'pathwayScore'        : self.pathway_score,
            'grade'               : self.grade,
            'scientificValidation': {
                'correctConnections'   : [_label(e) for e in self.correct_connections],
                'missingConnections'   : [_label(e) for e in self.missing_connections],
                'extraConnections'     : [_label(e) for e in self.extra_connections],
                'biologicallyPlausible': self.biologically_plausible,
            },
            'detectedPathway'     : self.detected_pathway.key if self.detected_pathway else None,
            'feedback'            : list(self.feedback),
            'badges'              : list(self.badges),
        }

class ReferenceValidator:
    """
    Compares a learner circuit to the reference connectome and its pathway catalog.

    Public Methods:
        validate(circuit):                Score a circuit
        pathway_score(circuit):           The pathway component of the score alone
        recommended_connections(circuit): Reference connections still to be drawn
        pathway_suggestions(circuit):     Pathways the learner is close to completing
    """

    def __init__(self, connectome: ReferenceConnectome = REFERENCE_CONNECTOME):
        self._connectome = connectome
        self._detector   = PathwayDetector(connectome)

    def validate(self, circuit: Circuit) -> ValidationResult:
        """
        Score a circuit against the reference connectome.

        Parameters:
            circuit: The learner circuit

        Returns:
            The scores, grade, connection breakdown, feedback and badges
        """
        neuron_ids  = circuit.neuron_ids
        connections = circuit.valid_connections
        drawn       = {c.key for c in connections}

        # Step 1: split the learner's connections into correct and extra ones
        correct = [c.key for c in connections if self._connectome.has_connection(*c.key)]
        extra   = [c.key for c in connections if not self._connectome.has_connection(*c.key)]

        # Step 2: reference connections that could have been drawn, given the placed neurons
        expected = [ref.key for ref in self._connectome.connections_among(neuron_ids)]
        missing  = [key for key in expected if key not in drawn]

        # Step 3: scores
        accuracy_score     = _round_half_up(100 * len(correct) / len(connections)) if connections else 0
        completeness_score = _round_half_up(100 * (len(expected) - len(missing)) / len(expected)) if expected else 0
        pathway_score      = self.pathway_score(circuit)
        overall_score      = _round_half_up(ACCURACY_WEIGHT     * accuracy_score     +
                                            COMPLETENESS_WEIGHT * completeness_score +
                                            PATHWAY_WEIGHT      * pathway_score)

        detected  = self._detector.detect(circuit)
        plausible = len(extra) <= 2 * len(correct)

        result = ValidationResult(overall_score          = overall_score,
                                  accuracy_score         = accuracy_score,
                                  completeness_score     = completeness_score,
                                  pathway_score          = pathway_score,
                                  grade                  = grade_for(overall_score),
                                  correct_connections    = correct,
                                  missing_connections    = missing,
                                  extra_connections      = extra,
                                  biologically_plausible = plausible,
                                  detected_pathway       = detected)
        result.feedback = self._feedback(result, circuit)
        result.badges   = self._badges(result, circuit)
        return result

    def pathway_score(self, circuit: Circuit) -> int:
        """
        Score how well the connections follow the sensory -> processing -> motor flow.

        Parameters:
            circuit: The learner circuit

        Returns:
            The pathway score, in [0, 100]
        """
        points = 0.0
        for conn in circuit.valid_connections:
            source = circuit.neuron(conn.source).kind
            target = circuit.neuron(conn.target).kind

            if source is NeuronKind.SENSORY and target.is_processing:
                points += 1
            if source.is_processing and target is NeuronKind.MOTOR:
                points += 1
            if source is NeuronKind.INTERNEURON and target is NeuronKind.INTERNEURON:
                points += 0.5

        return min(100, _round_half_up(points * PATHWAY_POINTS))

    def recommended_connections(self, circuit: Circuit, limit: int = 5) -> list[RecommendedConnection]:
        """
        List reference connections among the placed neurons that the learner has not drawn.

        Parameters:
            circuit: The learner circuit
            limit:   Maximum number of recommendations

        Returns:
            Recommendations, in reference order
        """
        recommendations = []
        for ref in self._connectome.connections_among(circuit.neuron_ids):
            if circuit.has_connection(*ref.key):
                continue

            source = circuit.neuron(ref.source).kind
            target = circuit.neuron(ref.target).kind
            if source is NeuronKind.SENSORY and target.is_processing:
                reason = "Sensory → Processing pathway"
            elif source.is_processing and target is NeuronKind.MOTOR:
                reason = "Processing → Motor pathway"
            else:
                reason = "OpenWorm reference data"
            recommendations.append(RecommendedConnection(ref.source, ref.target, ref.weight, reason))

        return recommendations[:limit]

    def pathway_suggestions(self, circuit: Circuit, limit: int = 3) -> list[PathwaySuggestion]:
        return self._detector.suggestions(circuit, limit)

    @staticmethod
    def _feedback(result: ValidationResult, circuit: Circuit) -> list[str]:
        feedback = []
        correct, missing, extra = result.correct_connections, result.missing_connections, result.extra_connections

        if correct:
            feedback.append(f"{len(correct)} connection(s) match OpenWorm data")
        if 0 < len(missing) <= 5:
            feedback.append(f"Consider adding: {', '.join(_label(e) for e in missing[:3])}")
        if 0 < len(extra) <= 3:
            feedback.append(f"Non-standard connections: {', '.join(_label(e) for e in extra[:2])}")
        elif len(extra) > 3:
            feedback.append(f"{len(extra)} connections not in reference data")
        if result.detected_pathway is not None:
            feedback.append(f"Detected pathway: {result.detected_pathway.name}")
        if result.biologically_plausible:
            feedback.append("Circuit is biologically plausible")
        if len(circuit) < 3:
            feedback.append("Add more neurons for a more complete circuit")
        if not circuit.valid_connections:
            feedback.append("Create connections between neurons to form a circuit")
        return feedback

    @staticmethod
    def _badges(result: ValidationResult, circuit: Circuit) -> list[str]:
        badges = []
        if result.overall_score == 100:
            badges.append("Perfect Match")
        if result.accuracy_score >= 90:
            badges.append("High Accuracy")
        if result.completeness_score >= 90:
            badges.append("Complete Circuit")
        if result.detected_pathway is not None:
            badges.append("Valid Pathway")
        if len(result.correct_connections) >= 10:
            badges.append("Connection Master")
        if len(circuit) >= 10:
            badges.append("Complex Network")
        if result.biologically_plausible and result.overall_score >= 70:
            badges.append("Scientifically Sound")
        return badges
