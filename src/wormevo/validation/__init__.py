"""
Validation Package

Scores learner circuits against the reference connectome and recognizes the
named biological pathways they realize.

Modules:
    pathway_detector: PathwayDetector and PathwaySuggestion classes
    validator:        ReferenceValidator, ValidationResult and RecommendedConnection classes

Exported Classes:
    PathwayDetector:       First-match pathway recognition
    PathwaySuggestion:     A pathway the learner is close to completing
    ReferenceValidator:    Multi-factor circuit scoring
    ValidationResult:      Scores, grade, feedback and badges
    RecommendedConnection: A reference connection still to be drawn
"""

from wormevo.validation.pathway_detector import PathwayDetector, PathwaySuggestion
from wormevo.validation.validator        import (RecommendedConnection,
                                                 ReferenceValidator,
                                                 ValidationResult,
                                                 grade_for)

__all__ = ['PathwayDetector',
           'PathwaySuggestion',
           'RecommendedConnection',
           'ReferenceValidator',
           'ValidationResult',
           'grade_for']
