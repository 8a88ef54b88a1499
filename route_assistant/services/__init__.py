"""Services layer - Application orchestration.

Available services:
- DialogueOrchestrator: Per-session conversation handling
- RouteScorer: Multi-factor route ranking and recommendations
"""

from .dialogue import DialogueOrchestrator
from .route_scorer import RouteScorer

__all__ = ["DialogueOrchestrator", "RouteScorer"]
