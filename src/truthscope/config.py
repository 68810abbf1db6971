"""
Configuration settings for the TruthScope analysis core.

This file centralizes the fusion weights, interpretation bands, lexical
word lists and default feature records, so tuning happens in one place.
"""

# Per-feature fusion weights, keyed by modality then feature name.
# Insertion order is the feature-vector order. The fusion engine normalizes
# the weights of the present modalities to sum to 1.
FUSION_WEIGHTS = {
    'voice': {
        'emotional': 0.15,
        'stress': 0.12,
        'confidence': 0.08,
        'pitch': 0.10,
        'tone': 0.10,
        'tremor': 0.08,
        'hesitation': 0.07,
    },
    'facial': {
        'microExpressions': 0.12,
        'eyeMovement': 0.10,
        'emotionalResponse': 0.08,
        'confidence': 0.06,
        'headPoseStability': 0.05,
        'gazeStability': 0.05,
    },
    'text': {
        'sentiment': 0.08,
        'consistency': 0.06,
        'contradiction': 0.05,
        'deception': 0.05,
        'confidenceWords': 0.03,
    },
}

# Order in which present modalities are appended to the feature vector
MODALITY_ORDER = ('voice', 'facial', 'text')

# Truthfulness bands, checked top-down with a strict ">" on the threshold.
# The last entry (threshold None) is the catch-all.
INTERPRETATION_BANDS = [
    (80, "High truthfulness indicators detected across all analysis dimensions. "
         "Strong consistency in voice, facial, and text patterns."),
    (65, "Moderate to high truthfulness with some minor inconsistencies noted. "
         "Overall patterns suggest genuine responses."),
    (45, "Mixed signals detected with moderate truthfulness indicators. "
         "Some inconsistencies may warrant further investigation."),
    (25, "Low truthfulness indicators detected. "
         "Multiple analysis dimensions show potential deception signals."),
    (None, "Very low truthfulness indicators across multiple analysis dimensions. "
           "Strong deception signals detected."),
]

MODEL_VERSION = "1.0.0"

# Transcript adjustment applied by the fusion engine
TRANSCRIPT_BLEND = {
    'score_weight': 0.8,
    'length_weight': 0.2,
    'length_norm': 200,
    'lexical_scale': 15,
}

# Word lists. Voice and fusion lists match by substring within a token,
# text lists by exact token membership.
STRESS_WORDS = [
    'nervous', 'anxious', 'worried', 'stressed', 'tension', 'pressure',
    'difficult', 'hard', 'struggle', 'uncomfortable',
]
HESITATION_WORDS = [
    'um', 'uh', 'er', 'ah', 'like', 'you know', 'actually', 'basically',
    'well', 'so',
]
CONTRADICTION_WORDS = ['but', 'however', 'although', 'despite', 'nevertheless', 'yet']
DECEPTION_WORDS = ['maybe', 'perhaps', 'possibly', 'might', 'not sure']
CONFIDENCE_WORDS = ['definitely', 'certainly', 'absolutely', 'surely']
TRUTH_WORDS = ['honestly', 'truthfully', 'actually', 'really', 'genuinely', 'sincerely']
LIE_WORDS = ['maybe', 'perhaps', 'possibly', 'might', 'could be', 'not sure']

# Buffer length at which the heuristic extractors saturate
AUDIO_COMPLEXITY_NORM = 10000
VIDEO_COMPLEXITY_NORM = 5000

# Feature records used when no media buffer is supplied
DEFAULT_AUDIO_FEATURES = {
    'pitch_hz': 150.0,
    'volume': 0.5,
    'tempo_bpm': 120.0,
    'spectral_centroid_hz': 1000.0,
    'zero_crossing_rate': 0.1,
    'mfcc': (0.1,) * 13,
    'spectral_rolloff_hz': 2000.0,
    'spectral_bandwidth_hz': 500.0,
}

DEFAULT_VIDEO_FEATURES = {
    'face_detected': True,
    'eye_aspect_ratio': 0.25,
    'mouth_aspect_ratio': 0.15,
    'head_pose': (0.0, 0.0, 0.0),
    'micro_expression_intensity': 0.1,
    'blink_rate_per_minute': 20.0,
    'smile_intensity': 0.3,
    'gaze_direction': (0.5, 0.5),
}
