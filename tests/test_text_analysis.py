"""
Unit tests for the text linguistic analyzer.
"""

import pytest # pyright: ignore[reportMissingImports]

from truthscope.errors import MissingInputError
from truthscope.text_analysis import TextAnalyzer, analyze_sentiment, extract_text_features
from truthscope.text_analysis.text_analyzer import count_sentences, highlight_marker_words

TEXT_SUBSCORES = {'sentiment', 'consistency', 'complexity', 'contradiction', 'deception',
                  'confidenceWords'}


class TestSentiment:
    """Test lexicon polarity scoring."""

    def test_positive_and_negative_words(self):
        assert analyze_sentiment("I am happy").score > 0
        assert analyze_sentiment("this is terrible").score < 0

    def test_hit_counts(self):
        result = analyze_sentiment("happy happy terrible")
        assert result.positive == 2
        assert result.negative == 1

    def test_no_lexicon_words(self):
        result = analyze_sentiment("the table is in the room")
        assert result.score == 0
        assert result.positive == result.negative == 0


class TestTextFeatureExtraction:
    """Test lexical feature extraction."""

    def test_basic_counts(self):
        features = extract_text_features("I am telling the truth.")
        assert features.word_count == 5
        assert features.sentence_count == 1
        assert features.unique_word_count == 5

    def test_sentence_split_discards_empty_segments(self):
        assert count_sentences("One. Two! Three?? ") == 3
        assert count_sentences("no terminator here") == 1
        assert count_sentences("...") == 1

    def test_matching_strictness_differs_by_list(self):
        """Stress/hesitation match inside tokens, contradiction only whole tokens."""
        features = extract_text_features("hardware butter however")
        assert features.stress_word_hits == 1          # 'hard' inside 'hardware'
        assert features.hesitation_word_hits == 2      # 'er' inside 'butter', 'however'
        assert features.contradiction_word_hits == 1   # 'however' only, not 'butter'

    def test_exact_lists_are_case_folded(self):
        features = extract_text_features("Maybe PERHAPS definitely Yet")
        assert features.deception_word_hits == 2
        assert features.confidence_word_hits == 1
        assert features.contradiction_word_hits == 1

    def test_lists_are_fixed(self):
        features = extract_text_features("probably clearly contrary")
        assert features.deception_word_hits == 0
        assert features.confidence_word_hits == 0
        assert features.contradiction_word_hits == 0


class TestTextAnalyzer:
    """Test text scoring."""

    def setup_method(self):
        self.analyzer = TextAnalyzer()

    @pytest.mark.parametrize("text", [None, "", "   ", "\n\t"])
    def test_blank_text_rejected(self, text):
        with pytest.raises(MissingInputError):
            self.analyzer.analyze(text)

    def test_truth_statement(self):
        result = self.analyzer.analyze("I am telling the truth.")
        assert set(result.scores) == TEXT_SUBSCORES
        assert result.scores['consistency'] == 100
        assert result.scores['contradiction'] == 100
        assert result.scores['deception'] == 100
        assert result.scores['complexity'] == 40
        assert result.scores['confidenceWords'] == 60
        assert 0 <= result.scores['sentiment'] <= 100

    def test_hedges_and_contradictions_lower_scores(self):
        result = self.analyzer.analyze("maybe perhaps I was there but however I left")
        assert result.scores['deception'] == 80
        assert result.scores['contradiction'] == 70

    def test_multiword_hedge_never_matches_a_token(self):
        result = self.analyzer.analyze("I am not sure")
        assert result.scores['deception'] == 100

    def test_confidence_words(self):
        result = self.analyzer.analyze("I definitely and absolutely did it")
        assert result.scores['confidenceWords'] == 76

    def test_repetition_lowers_consistency(self):
        result = self.analyzer.analyze("no no no no")
        assert result.scores['consistency'] == 25

    def test_complexity_caps_at_100(self):
        result = self.analyzer.analyze(" ".join(["word"] * 40))
        assert result.scores['complexity'] == 100

    def test_confidence_grows_with_length(self):
        short = self.analyzer.analyze("the table")
        long = self.analyzer.analyze("the table " * 400)
        assert short.confidence == 70
        assert long.confidence == 100

    def test_interpretation_template(self):
        result = self.analyzer.analyze("the table is in the room")
        assert result.interpretation == (
            "Text analysis shows neutral sentiment with high consistency. "
            "Deception indicators: low."
        )

    def test_features_echo(self):
        result = self.analyzer.analyze("Maybe it was red. It was.")
        assert result.features['word_count'] == 6
        assert result.features['sentence_count'] == 2
        assert result.features['average_words_per_sentence'] == 3.0
        assert result.features['marker_spans'][0]['category'] == 'deception'

    def test_idempotent(self):
        text = "Honestly, I think it was fine. But maybe not."
        assert self.analyzer.analyze(text) == self.analyzer.analyze(text)


class TestHighlightMarkerWords:
    """Test marker span detection."""

    def test_spans_positions(self):
        text = "It was fine but maybe not"
        spans = highlight_marker_words(text)
        assert [s['text'] for s in spans] == ['but', 'maybe']
        assert text[spans[0]['start']:spans[0]['end']] == 'but'
        assert spans[1]['category'] == 'deception'

    def test_no_markers(self):
        assert highlight_marker_words("plain words only") == []
