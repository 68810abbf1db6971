"""
Input Validation Module for TruthScope

This module provides functions for validating the inputs to the analysis
core, so that scorers only ever see well-formed data: raw media bytes,
non-blank text and sane fusion weights.
"""

import base64
import binascii
import logging
import numbers
from typing import Dict, Optional, Union

from .config import FUSION_WEIGHTS
from .errors import InvalidEncodingError

logger = logging.getLogger(__name__)

MediaInput = Union[bytes, bytearray, memoryview, str]


def decode_media_input(data: Optional[MediaInput], modality: str = 'media') -> Optional[bytes]:
    """
    Normalizes a media payload to raw bytes.

    Args:
        data: Raw bytes, or a base64 string as shipped by the upload layer.
            None means the input is absent.
        modality: Name used in error messages.

    Returns:
        The decoded bytes, or None when the input is absent.

    Raises:
        InvalidEncodingError: If a string is not valid base64 or the type
            is not a byte-like object.
    """
    if data is None:
        return None

    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)

    if isinstance(data, str):
        try:
            return base64.b64decode(data.strip(), validate=True)
        except (binascii.Error, ValueError) as e:
            logger.warning(f"Could not decode {modality} payload as base64: {e}")
            raise InvalidEncodingError(f"{modality} data is not valid base64: {e}") from e

    logger.warning(f"Unsupported {modality} payload type: {type(data).__name__}")
    raise InvalidEncodingError(
        f"{modality} data must be bytes or a base64 string, got {type(data).__name__}"
    )


def validate_text_content(text: Optional[str]) -> bool:
    """
    Validates that the text content is not empty or just whitespace.

    Args:
        text: The text content to validate.

    Returns:
        True if the text is valid, False otherwise.
    """
    if not isinstance(text, str) or not text.strip():
        logger.warning("Text content is empty or contains only whitespace.")
        return False

    return True


def validate_fusion_weights(weights: Dict[str, Dict[str, float]]) -> bool:
    """
    Validates the fusion weights to ensure they are properly configured.

    Weights are a mapping of modality to a mapping of feature name to
    weight. Only known modalities and features are accepted, since the
    scorers produce exactly those sub-scores.

    Args:
        weights: A dictionary of per-feature weights for each modality.

    Returns:
        True if the weights are valid, False otherwise.
    """
    if not isinstance(weights, dict) or not weights:
        logger.error("Fusion weights must be a non-empty dictionary.")
        return False

    for modality, feature_weights in weights.items():
        if modality not in FUSION_WEIGHTS:
            logger.error(f"Unknown modality in fusion weights: {modality}")
            return False

        if not isinstance(feature_weights, dict) or not feature_weights:
            logger.error(f"Weights for {modality} must be a non-empty dictionary.")
            return False

        unknown = set(feature_weights) - set(FUSION_WEIGHTS[modality])
        if unknown:
            logger.error(f"Unknown {modality} features in fusion weights: {sorted(unknown)}")
            return False

        if not all(isinstance(w, numbers.Real) and not isinstance(w, bool)
                   for w in feature_weights.values()):
            logger.error(f"All {modality} fusion weights must be numbers.")
            return False

        if not all(w >= 0 for w in feature_weights.values()):
            logger.error("All fusion weights must be non-negative.")
            return False

        # A modality may be fused on its own, so its own weights must not sum to zero
        if sum(feature_weights.values()) <= 0:
            logger.error(f"The sum of {modality} fusion weights must be positive.")
            return False

    return True


def normalize_transcript(transcript: Optional[str]) -> Optional[str]:
    """Returns the transcript, or None when it is absent or blank."""
    if isinstance(transcript, str) and transcript.strip():
        return transcript
    return None
