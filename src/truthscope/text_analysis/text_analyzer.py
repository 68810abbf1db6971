"""
Text Linguistic Analysis Module for TruthScope

This module extracts lexical features from free text (word statistics,
lexicon sentiment, hedge and contradiction markers) and turns them into
the text modality score.
"""

import logging
import re
from dataclasses import asdict, dataclass
from functools import lru_cache
from typing import Dict, List, Optional

from afinn import Afinn

from ..config import CONFIDENCE_WORDS, CONTRADICTION_WORDS, DECEPTION_WORDS, HESITATION_WORDS, STRESS_WORDS
from ..errors import MissingInputError
from ..scoring import (ModalityScore, clamp_score, count_exact_hits, count_substring_hits,
                       level_label, tokenize)
from ..validation import validate_text_content

logger = logging.getLogger(__name__)

SENTENCE_SPLIT = re.compile(r'[.!?]+')


@dataclass(frozen=True)
class SentimentResult:
    """Signed lexicon score with the number of positive and negative hits."""
    score: int
    positive: int
    negative: int


@dataclass(frozen=True)
class TextLexicalFeatures:
    word_count: int
    sentence_count: int
    unique_word_count: int
    sentiment_raw: int
    stress_word_hits: int
    hesitation_word_hits: int
    contradiction_word_hits: int
    deception_word_hits: int
    confidence_word_hits: int
    positive_word_hits: int = 0
    negative_word_hits: int = 0


@lru_cache(maxsize=1)
def get_lexicon() -> Afinn:
    """AFINN word list, loaded once per process and never mutated."""
    return Afinn(language='en')


def analyze_sentiment(text: str) -> SentimentResult:
    """
    Bag-of-words polarity of a text.

    Sums the AFINN valence of every lexicon word found in the text.

    Args:
        text: Input text

    Returns:
        SentimentResult with the signed total and hit counts
    """
    valences = get_lexicon().scores_with_pattern(text)
    return SentimentResult(
        score=int(sum(valences)),
        positive=sum(1 for v in valences if v > 0),
        negative=sum(1 for v in valences if v < 0),
    )


def count_sentences(text: str) -> int:
    """Non-empty segments between '.', '!' and '?'; unterminated text counts as one."""
    sentences = [s for s in SENTENCE_SPLIT.split(text) if s.strip()]
    return max(len(sentences), 1)


def extract_text_features(text: str) -> TextLexicalFeatures:
    """
    Extract lexical features from text.

    Stress and hesitation words are matched as substrings of each token;
    contradiction, deception and confidence words need an exact token match.

    Args:
        text: Non-blank input text

    Returns:
        TextLexicalFeatures
    """
    words = tokenize(text)
    sentiment = analyze_sentiment(text)

    return TextLexicalFeatures(
        word_count=len(words),
        sentence_count=count_sentences(text),
        unique_word_count=len(set(words)),
        sentiment_raw=sentiment.score,
        stress_word_hits=count_substring_hits(words, STRESS_WORDS),
        hesitation_word_hits=count_substring_hits(words, HESITATION_WORDS),
        contradiction_word_hits=count_exact_hits(words, CONTRADICTION_WORDS),
        deception_word_hits=count_exact_hits(words, DECEPTION_WORDS),
        confidence_word_hits=count_exact_hits(words, CONFIDENCE_WORDS),
        positive_word_hits=sentiment.positive,
        negative_word_hits=sentiment.negative,
    )


class TextAnalyzer:
    """
    Text analysis system that scores the wording of a statement.
    """

    def extract_features(self, text: str) -> TextLexicalFeatures:
        return extract_text_features(text)

    def score_features(self, features: TextLexicalFeatures, text: str) -> ModalityScore:
        """
        Map lexical features to the text modality score.

        Args:
            features: Output of extract_features for the same text
            text: The raw text, used for the length-based confidence

        Returns:
            ModalityScore with sentiment, consistency, complexity,
            contradiction, deception and confidenceWords sub-scores
        """
        words_per_sentence = features.word_count / features.sentence_count

        scores = {
            'sentiment': clamp_score(50 + features.sentiment_raw * 20),
            'consistency': clamp_score(features.unique_word_count / features.word_count * 100),
            'complexity': clamp_score(min(words_per_sentence * 8, 100)),
            'contradiction': clamp_score(100 - features.contradiction_word_hits * 15),
            'deception': clamp_score(100 - features.deception_word_hits * 10),
            'confidenceWords': clamp_score(60 + features.confidence_word_hits * 8),
        }

        confidence = clamp_score(
            70 + min(len(text) / 100, 30)
            + (10 if features.positive_word_hits > features.negative_word_hits else 0)
        )

        interpretation = (
            f"Text analysis shows "
            f"{level_label(scores['sentiment'], 'positive', 'negative', 'neutral')} sentiment "
            f"with {'high' if scores['consistency'] > 70 else 'moderate'} consistency. "
            f"Deception indicators: {'low' if scores['deception'] > 70 else 'moderate'}."
        )

        feature_echo = asdict(features)
        feature_echo['average_words_per_sentence'] = round(words_per_sentence, 1)
        feature_echo['marker_spans'] = highlight_marker_words(text)

        return ModalityScore(
            modality='text',
            scores=scores,
            confidence=confidence,
            interpretation=interpretation,
            features=feature_echo,
        )

    def analyze(self, text: Optional[str]) -> ModalityScore:
        """
        Score a text statement.

        Args:
            text: Input text

        Returns:
            ModalityScore for the text modality

        Raises:
            MissingInputError: If the text is absent or blank
        """
        if not validate_text_content(text):
            raise MissingInputError("Text content required")

        features = self.extract_features(text)
        result = self.score_features(features, text)
        logger.debug(f"Text scores: {result.scores} (confidence {result.confidence})")
        return result


def highlight_marker_words(text: str) -> List[Dict]:
    """
    Locate hedge, contradiction and confidence markers in the text.

    Args:
        text: Input text

    Returns:
        List of spans with character positions and the marker category,
        sorted by position
    """
    categories = [
        ('contradiction', CONTRADICTION_WORDS),
        ('deception', DECEPTION_WORDS),
        ('confidence', CONFIDENCE_WORDS),
    ]

    spans = []
    for match in re.finditer(r'\S+', text):
        token = match.group().lower()
        for category, words in categories:
            if token in words:
                spans.append({
                    'start': match.start(),
                    'end': match.end(),
                    'text': match.group(),
                    'category': category,
                })

    spans.sort(key=lambda x: x['start'])
    return spans
