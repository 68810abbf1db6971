"""
TruthScope analysis pipeline

Orchestrates the voice, facial and text analyzers for a recorded session
and fuses whatever they produce into a single truthfulness assessment.
"""

import argparse
import logging
import sys
from concurrent.futures import ThreadPoolExecutor, wait
from functools import lru_cache
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from ..config import FUSION_WEIGHTS
from ..errors import MissingInputError, TruthScopeError
from ..media_analysis.audio_analyzer import VoiceAnalyzer
from ..media_analysis.video_analyzer import FacialAnalyzer
from ..scoring import ModalityScore
from ..text_analysis.text_analyzer import TextAnalyzer
from ..validation import MediaInput
from .evidence import FusedResult, SessionAnalysis
from .truth_scorer import TruthScoringEngine

logger = logging.getLogger(__name__)


class TruthScopePipeline:
    """
    Main TruthScope pipeline that scores each modality of a session and
    produces a unified truthfulness assessment.

    The pipeline holds no per-call state, so one instance can serve
    concurrent requests.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = {
            'fusion_weights': FUSION_WEIGHTS,
            'max_workers': 3,
            **(config or {})
        }

        self.voice_analyzer = VoiceAnalyzer()
        self.facial_analyzer = FacialAnalyzer()
        self.text_analyzer = TextAnalyzer()
        self.truth_scorer = TruthScoringEngine(self.config['fusion_weights'])

    def score_voice(self, audio: Optional[MediaInput] = None,
                    transcript: Optional[str] = None) -> ModalityScore:
        return self.voice_analyzer.analyze(audio, transcript)

    def score_facial(self, video: Optional[MediaInput] = None,
                     image: Optional[MediaInput] = None) -> ModalityScore:
        return self.facial_analyzer.analyze(video, image)

    def score_text(self, text: Optional[str]) -> ModalityScore:
        return self.text_analyzer.analyze(text)

    def fuse(self,
             voice: Optional[ModalityScore] = None,
             facial: Optional[ModalityScore] = None,
             text: Optional[ModalityScore] = None,
             transcript: Optional[str] = None) -> FusedResult:
        return self.truth_scorer.fuse_scores(voice, facial, text, transcript)

    def _run_branch(self, modality: str, func: Callable[[], ModalityScore]) -> ModalityScore:
        """Runs one modality and logs its outcome."""
        try:
            return func()
        except TruthScopeError as e:
            logger.warning(f"Skipping {modality} analysis: {e}")
            raise
        except Exception as e:
            logger.error(f"Error analyzing {modality}: {e}", exc_info=True)
            raise

    def analyze(self,
                audio: Optional[MediaInput] = None,
                video: Optional[MediaInput] = None,
                image: Optional[MediaInput] = None,
                transcript: Optional[str] = None,
                timeout: Optional[float] = None) -> SessionAnalysis:
        """
        Perform a full multimodal analysis of one session.

        The three modalities run concurrently. A modality that fails or
        does not finish within the timeout is left out of the fusion and
        its reason is recorded in SessionAnalysis.errors.

        Args:
            audio: Recorded audio bytes or base64 string
            video: Recorded video bytes or base64 string
            image: Still image bytes or base64 string
            transcript: Spoken transcript, scored as the text modality too
            timeout: Seconds to wait for all modalities; None waits forever

        Returns:
            SessionAnalysis

        Raises:
            MissingInputError: If no modality could be scored
        """
        logger.info("Starting multimodal analysis...")

        branches = {
            'voice': lambda: self.score_voice(audio, transcript),
            'facial': lambda: self.score_facial(video, image),
            'text': lambda: self.score_text(transcript),
        }

        results: Dict[str, Optional[ModalityScore]] = {name: None for name in branches}
        errors: Dict[str, str] = {}

        executor = ThreadPoolExecutor(max_workers=self.config['max_workers'])
        try:
            futures = {
                executor.submit(self._run_branch, name, func): name
                for name, func in branches.items()
            }
            done, not_done = wait(futures, timeout=timeout)

            for future in not_done:
                name = futures[future]
                future.cancel()
                errors[name] = f"{name} analysis timed out"
                logger.warning(f"{name} analysis did not finish within {timeout}s")

            for future in done:
                name = futures[future]
                try:
                    results[name] = future.result()
                except Exception as e:
                    errors[name] = str(e)
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        try:
            truth = self.fuse(results['voice'], results['facial'], results['text'], transcript)
        except MissingInputError:
            logger.warning(f"No modality could be analyzed: {errors}")
            raise

        logger.info(f"Analysis complete. Truthfulness: {truth.truthfulness}, "
                    f"confidence: {truth.confidence}")

        return SessionAnalysis(
            truth=truth,
            voice=results['voice'],
            facial=results['facial'],
            text=results['text'],
            errors=errors,
        )


@lru_cache(maxsize=1)
def get_default_pipeline() -> TruthScopePipeline:
    """Process-wide pipeline with the default configuration."""
    return TruthScopePipeline()


def score_voice(audio: Optional[MediaInput] = None, transcript: Optional[str] = None) -> ModalityScore:
    """Score the voice modality; see VoiceAnalyzer.analyze."""
    return get_default_pipeline().score_voice(audio, transcript)


def score_facial(video: Optional[MediaInput] = None, image: Optional[MediaInput] = None) -> ModalityScore:
    """Score the facial modality; see FacialAnalyzer.analyze."""
    return get_default_pipeline().score_facial(video, image)


def score_text(text: Optional[str]) -> ModalityScore:
    """Score the text modality; see TextAnalyzer.analyze."""
    return get_default_pipeline().score_text(text)


def fuse(voice: Optional[ModalityScore] = None,
         facial: Optional[ModalityScore] = None,
         text: Optional[ModalityScore] = None,
         transcript: Optional[str] = None) -> FusedResult:
    """Fuse modality scores; see TruthScoringEngine.fuse_scores."""
    return get_default_pipeline().fuse(voice, facial, text, transcript)


def analyze_session(audio: Optional[MediaInput] = None,
                    video: Optional[MediaInput] = None,
                    image: Optional[MediaInput] = None,
                    transcript: Optional[str] = None,
                    timeout: Optional[float] = None) -> SessionAnalysis:
    """Run every modality and fuse them; see TruthScopePipeline.analyze."""
    return get_default_pipeline().analyze(audio, video, image, transcript, timeout)


def _read_bytes(path: Optional[str]) -> Optional[bytes]:
    return Path(path).read_bytes() if path else None


def main(argv=None) -> int:
    """Analyze media files from the command line and print the session JSON."""
    parser = argparse.ArgumentParser(description="Score a recorded session for truthfulness cues.")
    parser.add_argument('--audio', help="Path to an audio recording")
    parser.add_argument('--video', help="Path to a video recording")
    parser.add_argument('--image', help="Path to a still image")
    parser.add_argument('--transcript', help="Transcript of what was said")
    parser.add_argument('--timeout', type=float, default=None,
                        help="Seconds to wait for all modalities")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO,
                        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    try:
        session = analyze_session(
            audio=_read_bytes(args.audio),
            video=_read_bytes(args.video),
            image=_read_bytes(args.image),
            transcript=args.transcript,
            timeout=args.timeout,
        )
    except MissingInputError as e:
        logger.error(f"Nothing to analyze: {e}")
        return 2

    print(session.to_json())
    return 0


if __name__ == '__main__':
    sys.exit(main())
