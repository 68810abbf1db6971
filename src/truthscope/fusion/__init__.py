"""
Multimodal fusion: truth scoring engine, result cards and the session pipeline.
"""

from .evidence import FusedResult, SessionAnalysis
from .truth_scorer import TruthScoringEngine, determine_interpretation, weighted_truthfulness

__all__ = [
    'FusedResult',
    'SessionAnalysis',
    'TruthScoringEngine',
    'determine_interpretation',
    'weighted_truthfulness',
]
