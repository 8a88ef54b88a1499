"""Domain models for the route assistant.

Value objects are frozen dataclasses with slots. The only mutable model
is Session, which the dialogue orchestrator owns and updates on a working
copy before committing it back to the session store.
These models have no external dependencies.
"""

from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass, field, replace
from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Any, Deque, Dict, List, Mapping, Optional, Tuple

DEFAULT_HISTORY_CAPACITY = 20

REQUIRED_SLOTS: Tuple[str, ...] = ("origin", "destination")


class Intent(str, Enum):
    """Closed set of conversational intents.

    Declaration order matters: the classifier resolves equal scores in
    favour of the intent declared first in its rule table.
    """

    GREETING = "greeting"
    HELP = "help"
    GOODBYE = "goodbye"
    THANKS = "thanks"
    TRAVEL_SEARCH = "travel_search"
    SCHEDULE_QUERY = "schedule_query"
    PRICE_QUERY = "price_query"
    COMPARE_ROUTES = "compare_routes"
    SELECT_ROUTE = "select_route"
    ROUTE_PREFERENCE = "route_preference"
    UNKNOWN = "unknown"


class TravelMode(str, Enum):
    BUS = "bus"
    TRAIN = "train"
    ANY = "any"


class SeatClass(str, Enum):
    FIRST = "first"
    SECOND = "second"
    SLEEPER = "sleeper"
    AC = "ac"
    GENERAL = "general"


class BudgetPreference(str, Enum):
    BUDGET = "budget"
    PREMIUM = "premium"
    BALANCED = "balanced"


class DialoguePhase(str, Enum):
    """Coarse conversational state of a session.

    CONFIRMING is reserved: no transition currently enters it.
    """

    IDLE = "idle"
    COLLECTING_INFO = "collecting_info"
    SHOWING_RESULTS = "showing_results"
    CONFIRMING = "confirming"


class RouteTag(str, Enum):
    CHEAPEST = "cheapest"
    FASTEST = "fastest"
    FREQUENT = "frequent"


class RecommendationKind(str, Enum):
    CHEAPEST = "cheapest"
    FASTEST = "fastest"
    BEST_VALUE = "best_value"
    TIME_MATCH = "time_match"


class DecisionKind(str, Enum):
    """Tag of a structured response decision, rendered externally."""

    GREETING = "greeting"
    HELP = "help"
    GOODBYE = "goodbye"
    THANKS = "thanks"
    MISSING_SLOTS = "missing_slots"
    ROUTE_RESULTS = "route_results"
    COMPARISON = "comparison"
    SELECTION_DETAIL = "selection_detail"
    SELECTION_PROMPT = "selection_prompt"
    PREFERENCE_NOTED = "preference_noted"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class TimePreference:
    """A labeled time-of-day window or a single anchor time.

    Attributes:
        start: Start of the window (or the anchor time)
        end: Exclusive end of the window, None for an anchor time.
            A window with end < start wraps past midnight.
        label: Human-readable label (e.g. 'morning', 'around 15:00')
    """

    start: time
    end: Optional[time] = None
    label: str = ""

    @property
    def is_anchor(self) -> bool:
        """Check if this is a single anchor time rather than a window."""
        return self.end is None

    def contains(self, moment: time) -> bool:
        """Check if a clock time falls inside the window.

        An anchor time contains every moment at or after it.
        """
        if self.end is None:
            return moment >= self.start
        if self.start <= self.end:
            return self.start <= moment < self.end
        return moment >= self.start or moment < self.end

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {
            "start": self.start.strftime("%H:%M"),
            "end": self.end.strftime("%H:%M") if self.end else None,
            "label": self.label,
        }


@dataclass(frozen=True, slots=True)
class Entities:
    """Structured slot set extracted from one or more user turns.

    A slot is None until a pattern or prior context supplies it.
    """

    origin: Optional[str] = None
    destination: Optional[str] = None
    mode: Optional[TravelMode] = None
    date: Optional[date] = None
    time_preference: Optional[TimePreference] = None
    seat_class: Optional[SeatClass] = None
    budget_preference: Optional[BudgetPreference] = None

    @property
    def has_location(self) -> bool:
        """Check if either origin or destination is known."""
        return self.origin is not None or self.destination is not None

    @property
    def has_route_endpoints(self) -> bool:
        """Check if both origin and destination are known."""
        return self.origin is not None and self.destination is not None

    @property
    def is_empty(self) -> bool:
        return not self.to_dict()

    def missing_slots(self) -> List[str]:
        """Return the required slots still missing, in check order."""
        return [name for name in REQUIRED_SLOTS if getattr(self, name) is None]

    def merged_with(self, newer: Entities) -> Entities:
        """Overlay newly extracted slots on top of these ones.

        Only slots present in ``newer`` overwrite; a known slot is never
        erased by an extraction that found nothing for it.
        """
        updates = {
            name: getattr(newer, name)
            for name in self.__dataclass_fields__
            if getattr(newer, name) is not None
        }
        return replace(self, **updates)

    def to_dict(self) -> Dict[str, Any]:
        """Return the present slots as JSON-friendly values."""
        out: Dict[str, Any] = {}
        if self.origin is not None:
            out["origin"] = self.origin
        if self.destination is not None:
            out["destination"] = self.destination
        if self.mode is not None:
            out["mode"] = self.mode.value
        if self.date is not None:
            out["date"] = self.date.isoformat()
        if self.time_preference is not None:
            out["time_preference"] = self.time_preference.to_dict()
        if self.seat_class is not None:
            out["seat_class"] = self.seat_class.value
        if self.budget_preference is not None:
            out["budget_preference"] = self.budget_preference.value
        return out


@dataclass(frozen=True, slots=True)
class IntentResult:
    """Classified intent with a heuristic confidence in [0, 1]."""

    intent: Intent
    confidence: float = 0.0
    raw_score: int = 0


@dataclass(frozen=True, slots=True)
class Schedule:
    """A scheduled departure of a route.

    Attributes:
        departure: Departure clock time
        arrival: Arrival clock time (may be on the next day)
        platform: Optional platform identifier
        days: ISO weekdays (1 = Monday .. 7 = Sunday) the service runs
    """

    departure: time
    arrival: time
    platform: Optional[str] = None
    days: Tuple[int, ...] = (1, 2, 3, 4, 5, 6, 7)

    def runs_on(self, day: date) -> bool:
        return day.isoweekday() in self.days


@dataclass(frozen=True, slots=True)
class Route:
    """A candidate transport offering between two cities.

    ``score`` and ``tags`` are only set once the route has been ranked.
    """

    route_id: str
    name: str
    mode: TravelMode
    operator: str
    origin_station: str
    destination_station: str
    price: float
    duration_minutes: int
    distance_km: Optional[float] = None
    schedules: Tuple[Schedule, ...] = field(default_factory=tuple)
    score: Optional[float] = None
    tags: Tuple[RouteTag, ...] = field(default_factory=tuple)

    @property
    def departure_count(self) -> int:
        return len(self.schedules)

    @property
    def is_scored(self) -> bool:
        return self.score is not None

    def with_score(self, score: float, tags: Tuple[RouteTag, ...]) -> Route:
        """Return a copy annotated with a score and tags."""
        return replace(self, score=score, tags=tags)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "route_id": self.route_id,
            "name": self.name,
            "mode": self.mode.value,
            "operator": self.operator,
            "origin_station": self.origin_station,
            "destination_station": self.destination_station,
            "price": self.price,
            "duration_minutes": self.duration_minutes,
            "distance_km": self.distance_km,
            "departures": [
                {
                    "departure": s.departure.strftime("%H:%M"),
                    "arrival": s.arrival.strftime("%H:%M"),
                    "platform": s.platform,
                }
                for s in self.schedules
            ],
            "score": self.score,
            "tags": [t.value for t in self.tags],
        }


@dataclass(frozen=True, slots=True)
class ScoreWeights:
    """Weight vector applied to the four route scoring factors."""

    price: float
    duration: float
    schedule: float
    operator: float

    def __post_init__(self) -> None:
        """Validate weights are non-negative and sum to 1."""
        values = (self.price, self.duration, self.schedule, self.operator)
        if any(w < 0 for w in values):
            raise ValueError(f"Score weights must be non-negative, got {values}")
        if not math.isclose(sum(values), 1.0, abs_tol=1e-9):
            raise ValueError(f"Score weights must sum to 1.0, got {sum(values)}")


@dataclass(frozen=True, slots=True)
class Recommendation:
    """A structured callout about a ranked route set."""

    kind: RecommendationKind
    route_id: Optional[str] = None
    route_name: Optional[str] = None
    price: Optional[float] = None
    duration_minutes: Optional[int] = None
    count: Optional[int] = None
    label: Optional[str] = None


@dataclass(frozen=True, slots=True)
class RankedRoutes:
    """Routes sorted by score together with their recommendations."""

    routes: Tuple[Route, ...] = field(default_factory=tuple)
    recommendations: Tuple[Recommendation, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return len(self.routes) == 0


@dataclass(frozen=True, slots=True)
class Turn:
    """One role-tagged message of a conversation."""

    role: str
    content: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    metadata: Mapping[str, Any] = field(default_factory=dict)


@dataclass
class Session:
    """Per-session conversation state.

    Attributes:
        session_id: Key of the session in the store
        entities: Slots accumulated across turns
        last_intent: Intent of the most recent turn
        turn_count: Number of processed user messages
        history: Bounded FIFO of recent turns
        last_routes: Most recent ranked route list
        phase: Coarse dialogue phase
    """

    session_id: str
    entities: Entities = field(default_factory=Entities)
    last_intent: Optional[Intent] = None
    turn_count: int = 0
    history: Deque[Turn] = field(
        default_factory=lambda: deque(maxlen=DEFAULT_HISTORY_CAPACITY)
    )
    last_routes: Tuple[Route, ...] = field(default_factory=tuple)
    phase: DialoguePhase = DialoguePhase.IDLE
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls, session_id: str, history_capacity: int = DEFAULT_HISTORY_CAPACITY
    ) -> Session:
        return cls(session_id=session_id, history=deque(maxlen=history_capacity))

    def copy(self) -> Session:
        """Return an independent working copy of this session."""
        return replace(self, history=deque(self.history, maxlen=self.history.maxlen))

    def add_turn(self, turn: Turn) -> None:
        """Append a turn, evicting the oldest one when the history is full."""
        self.history.append(turn)
        self.updated_at = datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class ResponseDecision:
    """Structured outcome of a turn, to be rendered into display text.

    Only the payload fields relevant to ``kind`` are populated.
    """

    kind: DecisionKind
    missing_slots: Tuple[str, ...] = field(default_factory=tuple)
    routes: Tuple[Route, ...] = field(default_factory=tuple)
    recommendations: Tuple[Recommendation, ...] = field(default_factory=tuple)
    selected_route: Optional[Route] = None
    option_count: int = 0
    entities: Entities = field(default_factory=Entities)


@dataclass(frozen=True, slots=True)
class ProcessResult:
    """Decision plus metadata returned for one processed message."""

    session_id: str
    decision: ResponseDecision
    intent: Intent
    confidence: float
    entities: Entities
    routes: Optional[Tuple[Route, ...]] = None

    @property
    def metadata(self) -> Dict[str, Any]:
        """Return a JSON-friendly metadata mapping for logging and display."""
        meta: Dict[str, Any] = {
            "intent": self.intent.value,
            "confidence": self.confidence,
            "entities": self.entities.to_dict(),
        }
        if self.routes is not None:
            meta["routes"] = [r.to_dict() for r in self.routes]
        return meta
