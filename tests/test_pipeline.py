"""
Integration tests for the session pipeline and the public operations.
"""

import json
import threading

import pytest # pyright: ignore[reportMissingImports]

import truthscope
from truthscope import (InvalidEncodingError, MissingInputError, TruthScopePipeline, analyze_session,
                        fuse, score_facial, score_text, score_voice)
from truthscope.fusion.pipeline import main

AUDIO = b"\x10\x20" * 4000
VIDEO = b"\x00\xff" * 3000
TRANSCRIPT = "Honestly I was at home all evening and I did not leave."


class TestPublicOperations:
    """Test the module-level operations."""

    def test_score_voice_requires_input(self):
        with pytest.raises(MissingInputError):
            score_voice()

    def test_score_facial_requires_input(self):
        with pytest.raises(MissingInputError):
            score_facial()

    @pytest.mark.parametrize("text", ["", None])
    def test_score_text_requires_input(self, text):
        with pytest.raises(MissingInputError):
            score_text(text)

    def test_fuse_requires_input(self):
        with pytest.raises(MissingInputError):
            fuse()

    def test_voice_with_one_input_fully_populated(self):
        for result in (score_voice(AUDIO), score_voice(None, TRANSCRIPT)):
            assert len(result.scores) == 6
            assert all(isinstance(v, int) for v in result.scores.values())

    def test_facial_with_one_input_fully_populated(self):
        for result in (score_facial(VIDEO), score_facial(None, VIDEO)):
            assert len(result.scores) == 7

    def test_end_to_end_fuse(self):
        voice = score_voice(AUDIO, TRANSCRIPT)
        facial = score_facial(VIDEO)
        text = score_text(TRANSCRIPT)
        result = fuse(voice, facial, text, TRANSCRIPT)
        assert 0 <= result.truthfulness <= 100
        assert 0 <= result.confidence <= 100
        assert len(result.feature_vector) == 18
        assert sum(result.weights) == pytest.approx(1.0)

    def test_package_exports(self):
        assert truthscope.__version__ == "1.0.0"
        assert truthscope.clamp_score(101) == 100


class TestPipelineAnalyze:
    """Test concurrent orchestration of the three modalities."""

    def setup_method(self):
        self.pipeline = TruthScopePipeline()

    def test_all_modalities(self):
        session = self.pipeline.analyze(audio=AUDIO, video=VIDEO, transcript=TRANSCRIPT)
        assert session.errors == {}
        assert session.voice is not None and session.facial is not None and session.text is not None
        assert session.truth.available_modalities == ['voice', 'facial', 'text']

    def test_matches_sequential_scoring(self):
        session = self.pipeline.analyze(audio=AUDIO, video=VIDEO, transcript=TRANSCRIPT)
        expected = self.pipeline.fuse(
            self.pipeline.score_voice(AUDIO, TRANSCRIPT),
            self.pipeline.score_facial(VIDEO),
            self.pipeline.score_text(TRANSCRIPT),
            TRANSCRIPT,
        )
        assert session.truth == expected

    def test_missing_modalities_do_not_abort_others(self):
        session = self.pipeline.analyze(audio=AUDIO)
        assert session.voice is not None
        assert session.facial is None and session.text is None
        assert set(session.errors) == {'facial', 'text'}
        assert session.truth.available_modalities == ['voice']

    def test_invalid_encoding_recorded(self):
        session = self.pipeline.analyze(audio="@@ not base64 @@", image=VIDEO, transcript=TRANSCRIPT)
        assert session.voice is None
        assert 'base64' in session.errors['voice']
        assert session.truth.available_modalities == ['facial', 'text']

    def test_invalid_encoding_raised_directly(self):
        with pytest.raises(InvalidEncodingError):
            self.pipeline.score_voice(audio="@@ not base64 @@")

    def test_nothing_to_analyze(self):
        with pytest.raises(MissingInputError):
            self.pipeline.analyze()

    def test_timed_out_branch_treated_as_absent(self):
        release = threading.Event()
        original = self.pipeline.facial_analyzer.analyze

        def slow_facial(video=None, image=None):
            release.wait(5)
            return original(video, image)

        self.pipeline.facial_analyzer.analyze = slow_facial
        try:
            session = self.pipeline.analyze(audio=AUDIO, video=VIDEO, transcript=TRANSCRIPT, timeout=0.5)
        finally:
            release.set()

        assert session.facial is None
        assert 'timed out' in session.errors['facial']
        assert session.truth.available_modalities == ['voice', 'text']

    def test_custom_fusion_weights(self):
        pipeline = TruthScopePipeline(config={'fusion_weights': {'text': {'sentiment': 1.0}}})
        session = pipeline.analyze(audio=AUDIO, transcript=TRANSCRIPT)
        # voice is scored but carries no weight, so only the text sentiment is fused
        assert session.truth.weights == [1.0]
        assert session.truth.feature_vector == [session.text.scores['sentiment'] / 100]

    def test_invalid_config_rejected(self):
        with pytest.raises(ValueError):
            TruthScopePipeline(config={'fusion_weights': {'voice': {'volume': 1.0}}})

    def test_non_numeric_weight_rejected(self):
        with pytest.raises(ValueError):
            TruthScopePipeline(config={'fusion_weights': {'text': {'sentiment': 'x'}}})

    def test_session_to_json(self):
        session = analyze_session(audio=AUDIO, transcript=TRANSCRIPT)
        data = json.loads(session.to_json())
        assert data['facial'] is None
        assert data['voice']['modality'] == 'voice'
        assert data['truth']['truthfulness'] == session.truth.truthfulness
        assert 'facial' in data['errors']


class TestCommandLine:
    """Test the command-line entry point."""

    def test_transcript_only(self, capsys):
        assert main(['--transcript', 'I am telling the truth.']) == 0
        data = json.loads(capsys.readouterr().out)
        assert data['text']['scores']['consistency'] == 100

    def test_media_files(self, tmp_path, capsys):
        audio_path = tmp_path / 'voice.wav'
        audio_path.write_bytes(AUDIO)
        image_path = tmp_path / 'face.jpg'
        image_path.write_bytes(VIDEO)

        assert main(['--audio', str(audio_path), '--image', str(image_path)]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data['truth']['features']['modalities'] == ['voice', 'facial']

    def test_no_input(self):
        assert main([]) == 2
