"""
TruthScope analysis core.

Deterministic feature extraction and weighted fusion of voice, facial
and text observations into a bounded truthfulness score.
"""

from .errors import InvalidEncodingError, MissingInputError, TruthScopeError
from .fusion.evidence import FusedResult, SessionAnalysis
from .fusion.pipeline import (TruthScopePipeline, analyze_session, fuse, score_facial,
                              score_text, score_voice)
from .scoring import ModalityScore, clamp_score

__version__ = "1.0.0"

__all__ = [
    'FusedResult',
    'InvalidEncodingError',
    'MissingInputError',
    'ModalityScore',
    'SessionAnalysis',
    'TruthScopeError',
    'TruthScopePipeline',
    'analyze_session',
    'clamp_score',
    'fuse',
    'score_facial',
    'score_text',
    'score_voice',
]
