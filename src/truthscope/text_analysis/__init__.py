"""
Lexical feature extraction and scoring for free text.
"""

from .text_analyzer import (SentimentResult, TextAnalyzer, TextLexicalFeatures, analyze_sentiment,
                            extract_text_features)

__all__ = [
    'SentimentResult',
    'TextAnalyzer',
    'TextLexicalFeatures',
    'analyze_sentiment',
    'extract_text_features',
]
