"""Motivational quotes for the dashboard."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True, slots=True)
class Quote:
    text: str
    author: str

    def __str__(self) -> str:
        return f'"{self.text}" - {self.author}'


DEFAULT_QUOTES: tuple[Quote, ...] = (
    Quote("The secret of getting ahead is getting started.", "Mark Twain"),
    Quote("The best way to predict the future is to create it.", "Peter Drucker"),
    Quote("Well done is better than well said.", "Benjamin Franklin"),
    Quote("A journey of a thousand miles begins with a single step.", "Lao Tzu"),
    Quote("Little by little, one travels far.", "J.R.R. Tolkien"),
    Quote("If you want to go fast, go alone. If you want to go far, go together.", "African Proverb"),
    Quote("The best time to plant a tree was 20 years ago. The second best time is now.", "Chinese Proverb"),
    Quote("Courage is not the absence of fear, but the triumph over it.", "Nelson Mandela"),
    Quote("It always seems impossible until it's done.", "Nelson Mandela"),
    Quote("Don't watch the clock; do what it does. Keep going.", "Sam Levenson"),
    Quote("You reap what you sow.", "Indian Proverb"),
    Quote("As you think, so you become.", "Indian Proverb"),
    Quote("Peace comes from within. Do not seek it without.", "Buddha"),
    Quote("Believe you can and you're halfway there.", "Theodore Roosevelt"),
    Quote("Life is like riding a bicycle. To keep your balance, you must keep moving.", "Albert Einstein"),
)


class QuoteProvider:
    """Hands out quotes at random without repeats until the pool is exhausted."""

    def __init__(self, quotes: Sequence[Quote] = DEFAULT_QUOTES, *, rng: random.Random | None = None):
        if not quotes:
            raise ValueError("QuoteProvider needs at least one quote")
        self._quotes = tuple(quotes)
        self._rng = rng or random.Random()
        self._remaining: list[int] = []

    def next_quote(self) -> Quote:
        if not self._remaining:
            self._remaining = list(range(len(self._quotes)))
            self._rng.shuffle(self._remaining)
        return self._quotes[self._remaining.pop()]
