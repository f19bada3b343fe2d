"""Classification-based candidate auto-matching."""

from .events import JobClassified, MatchingEventBus, get_event_bus, subscribe_auto_match
from .orchestrator import MatchOrchestrator, get_match_orchestrator
from .persister import MatchPersister
from .pool import CandidatePoolSelector
from .resume_selector import ResumeSelector
from .scoring import (
    MatchScorer,
    ScoreBreakdown,
    calculate_match_score,
    parse_skills,
    required_years_for_level,
)
from .store import MatchingStore, MongoMatchingStore, get_matching_store

__all__ = [
    "CandidatePoolSelector",
    "JobClassified",
    "MatchOrchestrator",
    "MatchPersister",
    "MatchScorer",
    "MatchingEventBus",
    "MatchingStore",
    "MongoMatchingStore",
    "ResumeSelector",
    "ScoreBreakdown",
    "calculate_match_score",
    "get_event_bus",
    "get_match_orchestrator",
    "get_matching_store",
    "parse_skills",
    "required_years_for_level",
    "subscribe_auto_match",
]
