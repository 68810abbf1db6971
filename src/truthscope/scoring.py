"""
Shared scoring primitives.

Every score the core emits goes through clamp_score, so sub-scores and
aggregates are always integers in [0, 100].
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

import numpy as np


def clamp_score(value: float) -> int:
    """Clips a raw score to [0, 100] and rounds half up to an integer."""
    return int(np.floor(np.clip(value, 0.0, 100.0) + 0.5))


def average_scores(*scores: float) -> int:
    """Clamped mean of already-computed scores."""
    return clamp_score(sum(scores) / len(scores))


def tokenize(text: str) -> List[str]:
    """Case-folded whitespace tokens."""
    return text.lower().split()


def count_substring_hits(tokens: Iterable[str], words: Iterable[str]) -> int:
    """Number of tokens containing at least one of the words."""
    words = list(words)
    return sum(1 for token in tokens if any(word in token for word in words))


def count_exact_hits(tokens: Iterable[str], words: Iterable[str]) -> int:
    """Number of tokens equal to one of the words."""
    vocabulary = set(words)
    return sum(1 for token in tokens if token in vocabulary)


def level_label(score: int, high: str, low: str, middle: str,
                upper: int = 60, lower: int = 40) -> str:
    """Picks a descriptive word for a score band."""
    if score > upper:
        return high
    if score < lower:
        return low
    return middle


@dataclass(frozen=True)
class ModalityScore:
    """
    Scored output of one modality.

    Attributes:
        modality: 'voice', 'facial' or 'text'
        scores: Named sub-scores, each an integer in [0, 100]
        confidence: Modality confidence in [0, 100]
        interpretation: Human-readable summary
        features: Echo of the extracted features and derived labels
    """
    modality: str
    scores: Dict[str, int]
    confidence: int
    interpretation: str
    features: Dict[str, Any] = field(default_factory=dict)

    def __getitem__(self, name: str) -> int:
        if name == 'confidence':
            return self.confidence
        return self.scores[name]

    def feature_value(self, name: str) -> float:
        """Sub-score normalized to [0, 1] for the fusion feature vector."""
        return self[name] / 100.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'modality': self.modality,
            'scores': dict(self.scores),
            'confidence': self.confidence,
            'interpretation': self.interpretation,
            'features': self.features,
        }
