"""
Result Card Module for TruthScope

This module defines the records handed to the session-reporting layer:
the fused truthfulness result and the full per-session analysis. Both
serialize to plain dictionaries and JSON for persistence and rendering.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np

from ..config import MODEL_VERSION
from ..scoring import ModalityScore


def _convert_numpy_types(data: Any) -> Any:
    """Recursively converts numpy types to native Python types."""
    if isinstance(data, dict):
        return {k: _convert_numpy_types(v) for k, v in data.items()}
    elif isinstance(data, (list, tuple)):
        return [_convert_numpy_types(i) for i in data]
    elif isinstance(data, np.integer):
        return int(data)
    elif isinstance(data, np.floating):
        return float(data)
    elif isinstance(data, np.ndarray):
        return data.tolist()
    return data


@dataclass(frozen=True)
class FusedResult:
    """
    Aggregate truthfulness assessment.

    Attributes:
        truthfulness: Fused score in [0, 100]
        confidence: Aggregate confidence in [0, 100]
        interpretation: One of the five interpretation bands
        breakdown: Sub-scores of every fused modality, keyed by modality
        feature_vector: Normalized sub-scores in fusion order
        weights: Normalized weights matching feature_vector, summing to 1
        available_modalities: Names of the fused modalities, in fusion order
        transcript_length: Characters of transcript used for the adjustment
        model_version: Version of the weight scheme
    """
    truthfulness: int
    confidence: int
    interpretation: str
    breakdown: Dict[str, Dict[str, int]]
    feature_vector: List[float]
    weights: List[float]
    available_modalities: List[str] = field(default_factory=list)
    transcript_length: int = 0
    model_version: str = MODEL_VERSION

    def to_dict(self) -> Dict:
        """Converts the result to a dictionary."""
        return _convert_numpy_types({
            'truthfulness': self.truthfulness,
            'confidence': self.confidence,
            'interpretation': self.interpretation,
            'breakdown': self.breakdown,
            'features': {
                'available_analyses': len(self.available_modalities),
                'modalities': self.available_modalities,
                'feature_vector': self.feature_vector,
                'weights': self.weights,
                'transcript_length': self.transcript_length,
                'model_version': self.model_version,
            },
        })

    def to_json(self, indent: int = 2) -> str:
        """Converts the result to a JSON string."""
        return json.dumps(self.to_dict(), indent=indent)


@dataclass
class SessionAnalysis:
    """
    Everything the core produced for one recorded session.

    Modalities that failed are None and their error message is kept in
    errors under the modality name.
    """
    truth: FusedResult
    voice: Optional[ModalityScore] = None
    facial: Optional[ModalityScore] = None
    text: Optional[ModalityScore] = None
    errors: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict:
        """Converts the session analysis to a dictionary."""
        return _convert_numpy_types({
            'voice': self.voice.to_dict() if self.voice else None,
            'facial': self.facial.to_dict() if self.facial else None,
            'text': self.text.to_dict() if self.text else None,
            'truth': self.truth.to_dict(),
            'errors': self.errors,
        })

    def to_json(self, indent: int = 2) -> str:
        """Converts the session analysis to a JSON string."""
        return json.dumps(self.to_dict(), indent=indent)
