"""
Core detection and tracking components for the Wave Tracker.

This package contains candidate extraction, the tracked wave model, the
tracking engine, recognition policies, background modeling and the video
pipeline that ties them together.
"""
from .detection import Candidate, CandidateExtractor, find_contours
from .wave import Wave
from .tracking import TrackingEngine
from .recognition import ThresholdRecognitionPolicy
from .background_models import BackgroundModel
from .pipeline import PipelineSummary, WaveTrackingPipeline


__all__ = [
    "Candidate",
    "CandidateExtractor",
    "find_contours",
    "Wave",
    "TrackingEngine",
    "ThresholdRecognitionPolicy",
    "BackgroundModel",
    "PipelineSummary",
    "WaveTrackingPipeline",
]
