"""Display formatting helpers shared by the renderers and front ends."""

from __future__ import annotations

from datetime import date, time


def format_duration(minutes: int) -> str:
    """Format a duration in minutes as '3h 15min', '1h' or '45min'."""
    hours, mins = divmod(int(minutes), 60)
    if hours == 0:
        return f"{mins}min"
    if mins == 0:
        return f"{hours}h"
    return f"{hours}h {mins}min"


def format_price(amount: float) -> str:
    """Format a fare in rupees; whole amounts drop the decimals."""
    if float(amount).is_integer():
        return f"₹{int(amount)}"
    return f"₹{amount:.2f}"


def format_date(day: date) -> str:
    """Format a travel date as 'Tuesday, October 20'."""
    return f"{day:%A, %B} {day.day}"


def format_clock(moment: time) -> str:
    return moment.strftime("%H:%M")
