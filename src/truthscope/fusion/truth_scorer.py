"""
Multimodal Fusion and Truth Scoring Engine for TruthScope

This module combines the voice, facial and text modality scores that are
present for a session into a single truthfulness score, an aggregate
confidence and an interpretation band.
"""

import logging
from typing import Dict, List, Optional, Tuple

import numpy as np

from ..config import (FUSION_WEIGHTS, INTERPRETATION_BANDS, LIE_WORDS, MODALITY_ORDER,
                      MODEL_VERSION, TRANSCRIPT_BLEND, TRUTH_WORDS)
from ..errors import MissingInputError
from ..scoring import ModalityScore, average_scores, clamp_score, count_substring_hits, tokenize
from ..validation import normalize_transcript, validate_fusion_weights
from .evidence import FusedResult

logger = logging.getLogger(__name__)


def weighted_truthfulness(features: np.ndarray, weights: np.ndarray) -> float:
    """Dot product of a normalized feature vector with its weights."""
    return float(np.dot(features, weights))


def determine_interpretation(truthfulness: int, bands=INTERPRETATION_BANDS) -> str:
    """Picks the first band whose threshold the score strictly exceeds."""
    for threshold, text in bands:
        if threshold is None or truthfulness > threshold:
            return text


class TruthScoringEngine:
    """
    Handles the fusion of modality scores into the final truthfulness
    score and confidence.
    """

    def __init__(self, weights: Optional[Dict[str, Dict[str, float]]] = None):
        """
        Initializes the TruthScoringEngine.

        Args:
            weights: Per-feature weights keyed by modality. Defaults to
                FUSION_WEIGHTS.
        """
        weights = weights if weights is not None else FUSION_WEIGHTS
        if not validate_fusion_weights(weights):
            raise ValueError("Invalid fusion weights provided.")
        self.weights = weights

    def build_feature_vector(self, modalities: Dict[str, ModalityScore]) -> Tuple[np.ndarray, np.ndarray]:
        """
        Assembles the feature and weight vectors from the present modalities.

        Modalities are visited in fusion order; absent ones contribute
        neither features nor weights. Weights are normalized to sum to 1.

        Args:
            modalities: Present modality scores keyed by modality name

        Returns:
            (feature vector in [0, 1], normalized weight vector)
        """
        features: List[float] = []
        weights: List[float] = []

        for modality in MODALITY_ORDER:
            score = modalities.get(modality)
            if score is None or modality not in self.weights:
                continue
            for name, weight in self.weights[modality].items():
                features.append(score.feature_value(name))
                weights.append(weight)

        if not weights:
            raise MissingInputError("At least one analysis result required")

        weight_vector = np.asarray(weights, dtype=float)
        weight_vector = weight_vector / weight_vector.sum()
        return np.asarray(features, dtype=float), weight_vector

    def _apply_transcript(self, truthfulness: float, transcript: str) -> int:
        """
        Blends the raw score with transcript length and truth/hedge wording.

        Args:
            truthfulness: Weighted score in [0, 1]
            transcript: Non-blank transcript

        Returns:
            Adjusted score on the 0-100 scale
        """
        blend = TRANSCRIPT_BLEND
        length_factor = min(len(transcript) / blend['length_norm'], 1)
        truthfulness = truthfulness * blend['score_weight'] + length_factor * blend['length_weight']

        words = tokenize(transcript)
        truth_count = count_substring_hits(words, TRUTH_WORDS)
        lie_count = count_substring_hits(words, LIE_WORDS)
        adjustment = (truth_count - lie_count) / max(len(words), 1) * blend['lexical_scale']

        logger.debug(f"Transcript adjustment: {truth_count} truth / {lie_count} hedge words, "
                     f"length factor {length_factor:.2f}")
        return clamp_score(truthfulness * 100 + adjustment)

    def compute_confidence(self, modalities: Dict[str, ModalityScore]) -> int:
        """
        Averages a coverage-based confidence with the modalities' own.

        Args:
            modalities: Present modality scores

        Returns:
            Aggregate confidence in [0, 100]
        """
        base_confidence = 50 + 15 * len(modalities)
        mean_confidence = float(np.mean([m.confidence for m in modalities.values()]))
        return average_scores(base_confidence, mean_confidence)

    def fuse_scores(self,
                    voice: Optional[ModalityScore] = None,
                    facial: Optional[ModalityScore] = None,
                    text: Optional[ModalityScore] = None,
                    transcript: Optional[str] = None) -> FusedResult:
        """
        Fuses the scores from the present modalities into one result.

        Args:
            voice: Voice modality score
            facial: Facial modality score
            text: Text modality score
            transcript: Spoken transcript used for the lexical adjustment

        Returns:
            FusedResult

        Raises:
            MissingInputError: If no modality score is supplied
        """
        present = {
            name: score
            for name, score in zip(MODALITY_ORDER, (voice, facial, text))
            if score is not None
        }
        if not present:
            raise MissingInputError("At least one analysis result required")

        features, weights = self.build_feature_vector(present)
        raw = weighted_truthfulness(features, weights)

        transcript = normalize_transcript(transcript)
        if transcript:
            truthfulness = self._apply_transcript(raw, transcript)
        else:
            truthfulness = clamp_score(raw * 100)

        confidence = self.compute_confidence(present)
        interpretation = determine_interpretation(truthfulness)

        breakdown = {
            name: {**score.scores, 'confidence': score.confidence}
            for name, score in present.items()
        }

        logger.info(f"Fused {len(present)} modalities: truthfulness {truthfulness}, "
                    f"confidence {confidence}")

        return FusedResult(
            truthfulness=truthfulness,
            confidence=confidence,
            interpretation=interpretation,
            breakdown=breakdown,
            feature_vector=features.tolist(),
            weights=weights.tolist(),
            available_modalities=list(present),
            transcript_length=len(transcript) if transcript else 0,
            model_version=MODEL_VERSION,
        )
