from __future__ import annotations

from datetime import date
from typing import NamedTuple


class Quote(NamedTuple):
    text: str
    author: str


QUOTES: tuple[Quote, ...] = (
    Quote("Your body is a temple. Take care of it with fasting and nourishment.", "Unknown"),
    Quote("Fasting is the first principle of medicine.", "Rumi"),
    Quote("The best of all medicines is resting and fasting.", "Benjamin Franklin"),
    Quote("Every accomplishment starts with the decision to try.", "John F. Kennedy"),
    Quote("Small steps every day lead to big results.", "Unknown"),
    Quote("You don't have to be extreme, just consistent.", "Unknown"),
    Quote("Your health is an investment, not an expense.", "Unknown"),
    Quote("Progress, not perfection.", "Unknown"),
    Quote("The only bad workout is the one that didn't happen.", "Unknown"),
    Quote("Take care of your body. It's the only place you have to live.", "Jim Rohn"),
)


def daily_quote(today: date) -> Quote:
    """Same quote all day, rotating by day of year."""
    return QUOTES[today.timetuple().tm_yday % len(QUOTES)]
