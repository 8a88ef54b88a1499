"""Domain layer - Core business models and errors.

This module contains the domain models and typed errors
used throughout the application. No external dependencies.
"""

from .errors import (
    AssistantError,
    CatalogError,
    ConfigurationError,
    InvalidMessageError,
    RouteLookupError,
    TurnLogError,
)
from .models import (
    BudgetPreference,
    DecisionKind,
    DialoguePhase,
    Entities,
    Intent,
    IntentResult,
    ProcessResult,
    RankedRoutes,
    Recommendation,
    RecommendationKind,
    ResponseDecision,
    Route,
    RouteTag,
    Schedule,
    ScoreWeights,
    SeatClass,
    Session,
    TimePreference,
    TravelMode,
    Turn,
)

__all__ = [
    # Models
    "BudgetPreference",
    "DecisionKind",
    "DialoguePhase",
    "Entities",
    "Intent",
    "IntentResult",
    "ProcessResult",
    "RankedRoutes",
    "Recommendation",
    "RecommendationKind",
    "ResponseDecision",
    "Route",
    "RouteTag",
    "Schedule",
    "ScoreWeights",
    "SeatClass",
    "Session",
    "TimePreference",
    "TravelMode",
    "Turn",
    # Errors
    "AssistantError",
    "CatalogError",
    "ConfigurationError",
    "InvalidMessageError",
    "RouteLookupError",
    "TurnLogError",
]
