"""
Facial Analysis Module for TruthScope

This module derives facial landmark features from a video clip or a still
image and scores micro-expressions, eye movement, smile suppression,
head pose and gaze stability.

Like the voice extractor, the feature step is a size-driven heuristic
proxy, not a computer-vision model.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Optional

import numpy as np

from ..config import DEFAULT_VIDEO_FEATURES, VIDEO_COMPLEXITY_NORM
from ..errors import MissingInputError
from ..scoring import ModalityScore, clamp_score
from ..validation import MediaInput, decode_media_input

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HeadPose:
    pitch: float
    yaw: float
    roll: float


@dataclass(frozen=True)
class GazeDirection:
    x: float
    y: float


@dataclass(frozen=True)
class VideoFeatures:
    face_detected: bool
    eye_aspect_ratio: float
    mouth_aspect_ratio: float
    head_pose: HeadPose
    micro_expression_intensity: float
    blink_rate_per_minute: float
    smile_intensity: float
    gaze_direction: GazeDirection


def default_video_features() -> VideoFeatures:
    defaults = dict(DEFAULT_VIDEO_FEATURES)
    defaults['head_pose'] = HeadPose(*defaults['head_pose'])
    defaults['gaze_direction'] = GazeDirection(*defaults['gaze_direction'])
    return VideoFeatures(**defaults)


def extract_video_features(media: Optional[bytes]) -> VideoFeatures:
    """
    Extract facial features from a video or image buffer.

    Args:
        media: Raw video or image bytes, or None

    Returns:
        VideoFeatures; the default record when media is None
    """
    if media is None:
        return default_video_features()

    complexity = min(len(media) / VIDEO_COMPLEXITY_NORM, 1)
    head_offset = 0.1 * complexity

    return VideoFeatures(
        face_detected=True,
        eye_aspect_ratio=0.2 + complexity * 0.1,        # 0.2-0.3
        mouth_aspect_ratio=0.1 + complexity * 0.1,      # 0.1-0.2
        head_pose=HeadPose(pitch=head_offset, yaw=head_offset, roll=head_offset),
        micro_expression_intensity=complexity * 0.3,    # 0-0.3
        blink_rate_per_minute=15 + complexity * 20,     # 15-35 blinks/min
        smile_intensity=complexity * 0.5,               # 0-0.5
        gaze_direction=GazeDirection(x=0.5, y=0.5),
    )


class FacialAnalyzer:
    """
    Facial analysis system that scores expression and stability cues.
    """

    def extract_features(self, media: Optional[bytes]) -> VideoFeatures:
        return extract_video_features(media)

    def score_features(self, features: VideoFeatures) -> ModalityScore:
        """
        Map facial features to the facial modality score.

        Args:
            features: Video feature record

        Returns:
            ModalityScore with microExpressions, eyeMovement,
            smileSuppression, headPoseStability, gazeStability,
            emotionalResponse and blinking sub-scores
        """
        pose = features.head_pose
        gaze = features.gaze_direction

        micro_expressions = clamp_score(features.micro_expression_intensity * 100)
        eye_movement = clamp_score((1 - features.eye_aspect_ratio) * 100)
        smile_suppression = clamp_score((1 - features.smile_intensity) * 100)

        pose_offset = float(np.sum(np.abs([pose.pitch, pose.yaw, pose.roll])))
        gaze_offset = abs(gaze.x - 0.5) + abs(gaze.y - 0.5)

        scores = {
            'microExpressions': micro_expressions,
            'eyeMovement': eye_movement,
            'smileSuppression': smile_suppression,
            'headPoseStability': clamp_score(100 - pose_offset * 2),
            'gazeStability': clamp_score(100 - gaze_offset * 200),
            'emotionalResponse': clamp_score(
                (micro_expressions + (100 - smile_suppression) + (100 - eye_movement)) / 3
            ),
            'blinking': clamp_score(min(features.blink_rate_per_minute / 30, 1) * 100),
        }

        confidence = clamp_score(
            70
            + (20 if features.face_detected else 0)
            + (10 if features.micro_expression_intensity > 0.1 else 0)
        )

        interpretation = (
            f"Facial analysis detected "
            f"{'significant' if micro_expressions > 60 else 'minimal'} micro-expressions "
            f"with {'high' if eye_movement > 60 else 'normal'} eye movement activity. "
            f"Head pose stability: {'good' if scores['headPoseStability'] > 70 else 'needs improvement'}."
        )

        feature_echo = asdict(features)
        feature_echo['eye_contact_stability'] = 100 - eye_movement
        feature_echo['smile_consistency'] = 100 - smile_suppression

        return ModalityScore(
            modality='facial',
            scores=scores,
            confidence=confidence,
            interpretation=interpretation,
            features=feature_echo,
        )

    def analyze(self, video: Optional[MediaInput] = None,
                image: Optional[MediaInput] = None) -> ModalityScore:
        """
        Score a video clip or still image.

        The video is used when both are supplied.

        Args:
            video: Raw video bytes or a base64 string
            image: Raw image bytes or a base64 string

        Returns:
            ModalityScore for the facial modality

        Raises:
            MissingInputError: If neither video nor image is supplied
            InvalidEncodingError: If the chosen payload cannot be decoded
        """
        if video is None and image is None:
            raise MissingInputError("Video or image data required")

        if video is not None:
            media = decode_media_input(video, 'video')
        else:
            media = decode_media_input(image, 'image')

        features = self.extract_features(media)
        result = self.score_features(features)

        logger.debug(f"Facial scores: {result.scores} (confidence {result.confidence})")
        return result
