"""Tests for the dashboard quote rotation."""

from __future__ import annotations

import random

import pytest

from lifetrack.services.quotes import DEFAULT_QUOTES, Quote, QuoteProvider


def test_no_repeats_until_pool_exhausted():
    provider = QuoteProvider(rng=random.Random(7))
    seen = [provider.next_quote() for _ in DEFAULT_QUOTES]
    assert len(set(seen)) == len(DEFAULT_QUOTES)


def test_cycle_restarts_after_exhaustion():
    quotes = [Quote("One", "A"), Quote("Two", "B")]
    provider = QuoteProvider(quotes, rng=random.Random(1))
    first_round = {provider.next_quote(), provider.next_quote()}
    assert first_round == set(quotes)
    assert provider.next_quote() in quotes


def test_single_quote_repeats():
    quote = Quote("Only", "Me")
    provider = QuoteProvider([quote])
    assert provider.next_quote() is quote
    assert provider.next_quote() is quote


def test_empty_pool_rejected():
    with pytest.raises(ValueError):
        QuoteProvider([])


def test_quote_str():
    assert str(Quote("Keep going.", "Sam")) == '"Keep going." - Sam'
