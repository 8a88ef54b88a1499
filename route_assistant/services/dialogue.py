"""Dialogue orchestrator service - Per-session conversation handling.

This service owns the dialogue state of every session and turns each
user message into a structured ResponseDecision:
1. Entity extraction, merged with the session's earlier slots
2. Intent classification
3. Dispatch on intent through an exhaustive handler table
4. Route lookup and scoring once origin and destination are known

Messages are processed on a working copy of the session that is only
committed back to the store once the turn has fully succeeded.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from ..adapters.history.null_log import NullTurnLog
from ..adapters.sessions.memory_store import DEFAULT_MAX_SESSIONS, InMemorySessionStore
from ..domain.errors import ConfigurationError, InvalidMessageError, RouteLookupError
from ..domain.models import (
    REQUIRED_SLOTS,
    DecisionKind,
    DialoguePhase,
    Intent,
    ProcessResult,
    RankedRoutes,
    ResponseDecision,
    Session,
    TravelMode,
    Turn,
)
from ..ports.history import TurnLogPort
from ..ports.nlp import EntityExtractorPort, IntentClassifierPort
from ..ports.routes import RouteLookupPort
from ..ports.sessions import SessionStorePort
from .route_scorer import RouteScorer

IntentHandler = Callable[[Session, str], ResponseDecision]

_OPTION_NUMBER = re.compile(r"\d+")


@dataclass
class DialogueOrchestrator:
    """Main service driving multi-turn travel conversations.

    The read-modify-commit sequence of one session is not atomic: callers
    must not process two messages of the same session concurrently.

    Attributes:
        entity_extractor: Extracts and merges slots
        intent_classifier: Classifies the message intent
        route_lookup: Finds candidate routes between two cities
        route_scorer: Ranks candidates and builds recommendations
        session_store: Holds per-session dialogue state
        turn_log: Best-effort durable log of every turn
    """

    entity_extractor: EntityExtractorPort
    intent_classifier: IntentClassifierPort
    route_lookup: RouteLookupPort
    route_scorer: RouteScorer = field(default_factory=RouteScorer)
    session_store: SessionStorePort = field(
        default_factory=lambda: InMemorySessionStore(max_sessions=DEFAULT_MAX_SESSIONS)
    )
    turn_log: TurnLogPort = field(default_factory=NullTurnLog)

    _handlers: Dict[Intent, IntentHandler] = field(init=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        self._handlers = self._build_handlers()

        missing = [intent.value for intent in Intent if intent not in self._handlers]
        if missing:
            raise ConfigurationError(
                f"No dialogue handler for intents: {', '.join(missing)}",
                setting_name="handlers",
                expected_type="Dict[Intent, IntentHandler]",
            )

    def _build_handlers(self) -> Dict[Intent, IntentHandler]:
        return {
            Intent.GREETING: self._handle_greeting,
            Intent.HELP: self._handle_help,
            Intent.GOODBYE: self._handle_goodbye,
            Intent.THANKS: self._handle_thanks,
            Intent.TRAVEL_SEARCH: self._handle_travel_query,
            Intent.SCHEDULE_QUERY: self._handle_travel_query,
            Intent.PRICE_QUERY: self._handle_travel_query,
            Intent.COMPARE_ROUTES: self._handle_compare,
            Intent.SELECT_ROUTE: self._handle_selection,
            Intent.ROUTE_PREFERENCE: self._handle_preference,
            Intent.UNKNOWN: self._handle_unknown,
        }

    def process_message(self, session_id: str, text: str) -> ProcessResult:
        """Process one user message.

        Args:
            session_id: Key of the conversation.
            text: The raw user message.

        Returns:
            ProcessResult with the decision, intent, confidence and entities.

        Raises:
            InvalidMessageError: If the session id or text is empty.
            RouteLookupError: If the route lookup fails. The session is
                left exactly as it was before the message.
        """
        if not isinstance(session_id, str) or not session_id.strip():
            raise InvalidMessageError(
                "Session id must be a non-empty string",
                field_name="session_id",
            )
        if not isinstance(text, str) or not text.strip():
            raise InvalidMessageError(
                "Message text must not be empty",
                field_name="text",
            )

        session = self.session_store.get_or_create(session_id).copy()

        entities = self.entity_extractor.extract(text, session.entities)
        intent_result = self.intent_classifier.classify(text, entities)
        intent = intent_result.intent

        session.entities = entities
        session.last_intent = intent
        session.turn_count += 1
        session.add_turn(Turn(role="user", content=text))

        decision = self._handlers[intent](session, text)

        session.add_turn(Turn(role="assistant", content=decision.kind.value))

        if decision.kind is DecisionKind.GOODBYE:
            self.session_store.remove(session_id)
        else:
            self.session_store.update(session)

        result = ProcessResult(
            session_id=session_id,
            decision=decision,
            intent=intent,
            confidence=intent_result.confidence,
            entities=entities,
            routes=decision.routes if decision.kind is DecisionKind.ROUTE_RESULTS else None,
        )

        self._logger.info(
            "Message processed",
            extra={
                "session_id": session_id,
                "intent": intent.value,
                "confidence": intent_result.confidence,
                "decision": decision.kind.value,
                "phase": session.phase.value,
                "turn_count": session.turn_count,
            },
        )

        self._append_to_log(session_id, "user", text, result.metadata)
        self._append_to_log(session_id, "assistant", decision.kind.value, {})

        return result

    def _append_to_log(self, session_id: str, role: str, content: str, metadata: dict) -> None:
        try:
            self.turn_log.append_turn(session_id, role, content, metadata)
        except Exception as e:
            # Log but don't fail the turn
            self._logger.warning(
                "Turn log append failed",
                extra={"session_id": session_id, "role": role, "error": str(e)},
            )

    # Intent handlers

    def _handle_greeting(self, session: Session, text: str) -> ResponseDecision:
        session.phase = DialoguePhase.IDLE
        return ResponseDecision(kind=DecisionKind.GREETING)

    def _handle_help(self, session: Session, text: str) -> ResponseDecision:
        return ResponseDecision(kind=DecisionKind.HELP)

    def _handle_goodbye(self, session: Session, text: str) -> ResponseDecision:
        return ResponseDecision(kind=DecisionKind.GOODBYE)

    def _handle_thanks(self, session: Session, text: str) -> ResponseDecision:
        return ResponseDecision(kind=DecisionKind.THANKS)

    def _handle_travel_query(self, session: Session, text: str) -> ResponseDecision:
        entities = session.entities
        missing = entities.missing_slots()
        if missing:
            session.phase = DialoguePhase.COLLECTING_INFO
            return ResponseDecision(
                kind=DecisionKind.MISSING_SLOTS,
                missing_slots=tuple(missing),
                entities=entities,
            )

        session.phase = DialoguePhase.SHOWING_RESULTS
        ranked = self._search_routes(session)
        session.last_routes = ranked.routes
        return ResponseDecision(
            kind=DecisionKind.ROUTE_RESULTS,
            routes=ranked.routes,
            recommendations=ranked.recommendations,
            entities=entities,
        )

    def _search_routes(self, session: Session) -> RankedRoutes:
        entities = session.entities
        origin = entities.origin or ""
        destination = entities.destination or ""

        try:
            candidates = self.route_lookup.lookup_routes(
                origin,
                destination,
                entities.mode or TravelMode.ANY,
                date=entities.date,
                time_preference=entities.time_preference,
                budget_preference=entities.budget_preference,
            )
        except Exception as e:
            raise RouteLookupError(
                f"Route lookup failed for {origin} -> {destination}",
                origin=origin,
                destination=destination,
                cause=e,
            )

        ranked = self.route_scorer.rank(candidates, entities)
        self._logger.debug(
            "Routes ranked",
            extra={
                "session_id": session.session_id,
                "candidates": len(ranked.routes),
                "recommendations": len(ranked.recommendations),
            },
        )
        return ranked

    def _handle_compare(self, session: Session, text: str) -> ResponseDecision:
        if session.last_routes:
            return ResponseDecision(kind=DecisionKind.COMPARISON, routes=session.last_routes)
        if session.entities.has_route_endpoints:
            return self._handle_travel_query(session, text)
        return ResponseDecision(kind=DecisionKind.COMPARISON)

    def _handle_preference(self, session: Session, text: str) -> ResponseDecision:
        if session.entities.has_route_endpoints:
            return self._handle_travel_query(session, text)
        return ResponseDecision(kind=DecisionKind.PREFERENCE_NOTED, entities=session.entities)

    def _handle_selection(self, session: Session, text: str) -> ResponseDecision:
        routes = session.last_routes
        match = _OPTION_NUMBER.search(text)
        if routes and match:
            index = int(match.group()) - 1
            if 0 <= index < len(routes):
                return ResponseDecision(
                    kind=DecisionKind.SELECTION_DETAIL,
                    selected_route=routes[index],
                    option_count=len(routes),
                )
        return ResponseDecision(kind=DecisionKind.SELECTION_PROMPT, option_count=len(routes))

    def _handle_unknown(self, session: Session, text: str) -> ResponseDecision:
        if session.entities.has_route_endpoints:
            return self._handle_travel_query(session, text)
        return ResponseDecision(kind=DecisionKind.UNKNOWN)

    # Session operations

    def get_missing_slots(self, session_id: str) -> List[str]:
        """Return the required slots a session is still missing.

        An unknown session misses every required slot.
        """
        session = self.session_store.get(session_id)
        if session is None:
            return list(REQUIRED_SLOTS)
        return session.entities.missing_slots()

    def clear_session(self, session_id: str) -> bool:
        """Drop a session's dialogue state.

        Returns:
            True if the session existed.
        """
        removed = self.session_store.remove(session_id)
        self._logger.info(
            "Session cleared",
            extra={"session_id": session_id, "existed": removed},
        )
        return removed

    def load_history(self, session_id: str) -> List[Turn]:
        """Return the logged turns of a session from the turn log."""
        return list(self.turn_log.load_history(session_id))

    def get_session(self, session_id: str) -> Optional[Session]:
        """Return the stored session state, for diagnostics."""
        return self.session_store.get(session_id)
