"""
Voice and facial feature extraction and scoring.
"""

from .audio_analyzer import AudioFeatures, VoiceAnalyzer, extract_audio_features
from .video_analyzer import FacialAnalyzer, GazeDirection, HeadPose, VideoFeatures, extract_video_features

__all__ = [
    'AudioFeatures',
    'FacialAnalyzer',
    'GazeDirection',
    'HeadPose',
    'VideoFeatures',
    'VoiceAnalyzer',
    'extract_audio_features',
    'extract_video_features',
]
