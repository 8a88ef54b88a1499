"""Markdown decision renderer adapter.

Turns structured ResponseDecisions into the chat text shown by the
terminal and Gradio front ends. Canned replies (greeting, goodbye,
thanks, unknown) come in several variants; the variant is picked by an
injectable chooser so tests can pin it.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Callable, List, Sequence

from ...domain.models import (
    DecisionKind,
    Entities,
    Recommendation,
    RecommendationKind,
    ResponseDecision,
    Route,
    RouteTag,
    TravelMode,
)
from ...formatting import format_clock, format_date, format_duration, format_price
from ...nlp.cities import known_cities

GREETINGS = (
    "Hello! 👋 I'm your travel planning assistant. I can help you find bus and "
    "train routes across India. Where would you like to go?",
    "Hey there! Tell me about your travel plans and I'll find the best routes for you.",
    "Hi! 🚂🚌 I'm here to help you plan your journey. Just tell me where you're "
    "traveling from and to, and I'll find the best options!",
    "Namaste! 🙏 I'm your smart travel companion. Where are you headed today?",
)

GOODBYES = (
    "Safe travels! Feel free to chat anytime you need travel help. Bye!",
    "Goodbye! Have a wonderful journey! 🚂✨",
    "Take care! Come back whenever you need to plan another trip. 👋",
)

THANKS = (
    "You're welcome! 😊 Let me know if you need anything else for your trip.",
    "Happy to help! 🌟 Have a great journey!",
    "My pleasure! Feel free to ask if you have more travel questions. 🚌🚂",
)

UNKNOWN = (
    "I'm not sure I understood that. Could you rephrase? I'm great at finding bus "
    'and train routes! Try: "Find a train from Mumbai to Pune"',
    "Hmm, I didn't quite catch that. 🤔 Tell me where you'd like to travel, and "
    "I'll find the best routes for you!",
    "I specialize in travel planning! Try asking me something like "
    '"What buses go from Delhi to Jaipur tomorrow?"',
)

HELP = """I can help you with:
🔍 **Finding routes** — "Find a train from Mumbai to Pune tomorrow"
🚂 **Train schedules** — "What trains go to Delhi?"
🚌 **Bus options** — "Show me buses from Bangalore to Chennai"
💰 **Price comparison** — "What's the cheapest way to get to Goa?"
⚡ **Quick search** — "Mumbai to Pune tomorrow morning by train"

Just type naturally! Try something like:
• "I want to go from Mumbai to Pune tomorrow morning"
• "Find buses to Chennai from Bangalore"
• "What's the fastest train to Delhi?\""""


def _mode_icon(route: Route) -> str:
    return "🚂" if route.mode is TravelMode.TRAIN else "🚌"


@dataclass
class MarkdownDecisionRenderer:
    """Markdown renderer for every decision kind.

    This adapter implements DecisionRendererPort.

    Attributes:
        available_cities: Cities listed when a search has no results
            (defaults to the cities the extractor knows)
        choose: Picks one variant of a canned reply
    """

    available_cities: Sequence[str] = field(default_factory=tuple)
    choose: Callable[[Sequence[str]], str] = field(default=random.choice, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def render(self, decision: ResponseDecision) -> str:
        """Render a decision as Markdown text."""
        kind = decision.kind
        self._logger.debug("Rendering decision", extra={"kind": kind.value})

        if kind is DecisionKind.GREETING:
            return self.choose(GREETINGS)
        if kind is DecisionKind.HELP:
            return HELP
        if kind is DecisionKind.GOODBYE:
            return self.choose(GOODBYES)
        if kind is DecisionKind.THANKS:
            return self.choose(THANKS)
        if kind is DecisionKind.MISSING_SLOTS:
            return self._render_missing(decision.missing_slots, decision.entities)
        if kind is DecisionKind.ROUTE_RESULTS:
            return self._render_results(decision)
        if kind is DecisionKind.COMPARISON:
            return self._render_comparison(decision.routes)
        if kind is DecisionKind.SELECTION_DETAIL and decision.selected_route is not None:
            return self._render_selection(decision.selected_route)
        if kind is DecisionKind.SELECTION_PROMPT:
            return self._render_selection_prompt(decision.option_count)
        if kind is DecisionKind.PREFERENCE_NOTED:
            return self._render_preferences(decision.entities)
        return self.choose(UNKNOWN)

    @staticmethod
    def _render_missing(missing: Sequence[str], entities: Entities) -> str:
        if "origin" in missing and "destination" in missing:
            return (
                "I'd love to help you plan your trip! 🗺️ "
                "Where are you traveling **from** and **to**?"
            )
        if "origin" in missing:
            return (
                f"Great, you want to go to **{entities.destination}**! "
                "Where will you be starting from?"
            )
        if "destination" in missing:
            return (
                f"Got it, you're starting from **{entities.origin}**! "
                "Where would you like to go?"
            )
        return "Could you tell me more about your travel plans?"

    def _render_results(self, decision: ResponseDecision) -> str:
        routes = decision.routes
        entities = decision.entities
        if not routes:
            return self._render_no_results(entities)

        mode = entities.mode
        mode_part = f" by **{mode.value}**" if mode and mode is not TravelMode.ANY else ""
        date_part = f" on **{format_date(entities.date)}**" if entities.date else ""
        plural = "s" if len(routes) > 1 else ""

        lines = [
            f"🎯 Found **{len(routes)} route{plural}** from **{entities.origin}** "
            f"to **{entities.destination}**{mode_part}{date_part}:",
            "",
        ]
        for index, route in enumerate(routes, start=1):
            lines.append(f"**{index}. {_mode_icon(route)} {route.name}** — {route.operator}")
            lines.append(
                f"   ⏱️ Duration: {format_duration(route.duration_minutes)} | "
                f"💰 {format_price(route.price)}"
            )
            if route.schedules:
                departures = " | ".join(
                    f"{format_clock(s.departure)} → {format_clock(s.arrival)}"
                    + (f" (Platform {s.platform})" if s.platform else "")
                    for s in route.schedules
                )
                lines.append(f"   🕐 Departures: {departures}")
            if route.distance_km:
                lines.append(f"   📏 Distance: {route.distance_km:g} km")
            lines.append("")

        lines.append("---")
        summary = self._render_recommendations(routes, decision.recommendations)
        lines.append(f"💡 **Recommendation:** {summary}")
        lines.append("")
        lines.append(
            "Would you like more details about any route, or want to search for a different trip?"
        )
        return "\n".join(lines)

    @staticmethod
    def _render_recommendations(
        routes: Sequence[Route], recommendations: Sequence[Recommendation]
    ) -> str:
        parts: List[str] = []
        for rec in recommendations:
            if rec.kind is RecommendationKind.CHEAPEST and rec.price is not None:
                parts.append(f"Cheapest: **{rec.route_name}** at {format_price(rec.price)}")
            elif rec.kind is RecommendationKind.FASTEST and rec.duration_minutes is not None:
                parts.append(
                    f"Fastest: **{rec.route_name}** in {format_duration(rec.duration_minutes)}"
                )
            elif rec.kind is RecommendationKind.BEST_VALUE:
                parts.append(f"Best overall: **{rec.route_name}**")
            elif rec.kind is RecommendationKind.TIME_MATCH:
                parts.append(f"{rec.count} route(s) available for {rec.label} departure")

        has_split = any(rec.kind is RecommendationKind.CHEAPEST for rec in recommendations)
        if not has_split:
            both = next(
                (
                    r
                    for r in routes
                    if RouteTag.CHEAPEST in r.tags and RouteTag.FASTEST in r.tags
                ),
                None,
            )
            if both is not None:
                parts.insert(
                    0,
                    f"**{both.name}** is both the cheapest ({format_price(both.price)}) "
                    f"and fastest ({format_duration(both.duration_minutes)})!",
                )

        return " | ".join(parts)

    def _render_no_results(self, entities: Entities) -> str:
        mode = entities.mode
        cities = self.available_cities or known_cities()
        header = (
            f"😔 I couldn't find any direct routes from **{entities.origin or 'your origin'}** "
            f"to **{entities.destination or 'your destination'}**"
        )
        if mode and mode is not TravelMode.ANY:
            header += f" by {mode.value}"
        return "\n".join(
            [
                header + ".",
                "",
                "Here are some suggestions:",
                "• Try searching without specifying a transport mode",
                "• Check if the city names are correct",
                "• Look for routes to nearby cities",
                "",
                f"Available cities: {', '.join(cities)}",
            ]
        )

    @staticmethod
    def _render_comparison(routes: Sequence[Route]) -> str:
        if not routes:
            return (
                "I don't have any routes to compare yet. Tell me where you'd like to go, "
                "and I'll find options to compare!"
            )
        if len(routes) < 2:
            return (
                "I only found one route, so there's nothing to compare. "
                "Would you like to search for a different trip?"
            )

        lines = [
            "📊 **Route Comparison:**",
            "",
            "| # | Route | Mode | Price | Duration | Departures |",
            "|---|-------|------|-------|----------|------------|",
        ]
        for index, route in enumerate(routes, start=1):
            lines.append(
                f"| {index} | {_mode_icon(route)} {route.name} | {route.mode.value} | "
                f"{format_price(route.price)} | {format_duration(route.duration_minutes)} | "
                f"{route.departure_count}/day |"
            )
        lines.append("")
        lines.append("Which option interests you? Or would you like me to recommend the best one?")
        return "\n".join(lines)

    @staticmethod
    def _render_selection(route: Route) -> str:
        lines = [
            f"Great choice! Here are the details for **{route.name}** {_mode_icon(route)}:",
            "",
            f"📍 **Route:** {route.origin_station} → {route.destination_station}",
            f"🏢 **Operator:** {route.operator}",
            f"💰 **Price:** {format_price(route.price)}",
            f"⏱️ **Duration:** {format_duration(route.duration_minutes)}",
        ]
        if route.distance_km:
            lines.append(f"📏 **Distance:** {route.distance_km:g} km")
        if route.schedules:
            lines.append("")
            lines.append("🕐 **Available Departures:**")
            for schedule in route.schedules:
                line = f"   • {format_clock(schedule.departure)} → {format_clock(schedule.arrival)}"
                if schedule.platform:
                    line += f" (Platform {schedule.platform})"
                lines.append(line)
        lines.append("")
        lines.append("✨ Would you like to plan another trip or need any other help?")
        return "\n".join(lines)

    @staticmethod
    def _render_selection_prompt(option_count: int) -> str:
        if option_count == 0:
            return (
                "I don't have any routes to select from. "
                "Would you like to search for a trip?"
            )
        return f"Please select a valid option (1-{option_count}). Which route would you like?"

    @staticmethod
    def _render_preferences(entities: Entities) -> str:
        prefs: List[str] = []
        if entities.mode is not None:
            prefs.append(f"transport: {entities.mode.value}")
        if entities.budget_preference is not None:
            prefs.append(f"budget: {entities.budget_preference.value}")
        if entities.seat_class is not None:
            prefs.append(f"class: {entities.seat_class.value}")

        text = "Got it! I've noted your preferences"
        if prefs:
            text += f" ({', '.join(prefs)})"
        return text + ". Now tell me where you'd like to travel!"
