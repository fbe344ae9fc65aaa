"""
Relevance search over directory platforms.

Every search path (directory listing and /search) goes through ``search``.
Scoring is additive:

- full query in name +10, in description +5
- per tag: full query +8, each query word (>2 chars) +3
- per feature: full query +6, each query word (>2 chars) +2
- context boosts: free tier, API, image, language, enterprise, developer

Zero-score platforms are dropped. The sort is stable, so equal scores keep
their input order.
"""
from __future__ import annotations

from typing import Protocol, Sequence, TypeVar

NAME_MATCH = 10
DESCRIPTION_MATCH = 5
TAG_MATCH = 8
TAG_WORD_MATCH = 3
FEATURE_MATCH = 6
FEATURE_WORD_MATCH = 2
CONTEXT_BOOST = 7
AUDIENCE_BOOST = 6

MIN_WORD_LENGTH = 3

IMAGE_TERMS = ("image", "picture", "photo")
LANGUAGE_TERMS = ("language", "text", "chat", "write")
BUSINESS_TERMS = ("business", "enterprise")
DEVELOPER_TERMS = ("developer", "coding", "code")


class _Pricing(Protocol):
    has_free: bool


class Searchable(Protocol):
    name: str
    description: str
    tags: list[str]
    features: list[str]
    pricing: _Pricing
    api_available: bool


P = TypeVar("P", bound=Searchable)


def _mentions(query: str, terms: Sequence[str]) -> bool:
    return any(t in query for t in terms)


def _text_score(text: str, query: str, words: list[str], full: int, per_word: int) -> int:
    text = text.lower()
    score = full if query in text else 0
    score += per_word * sum(1 for w in words if w in text)
    return score


def relevance_score(platform: Searchable, query: str) -> int:
    if not query.strip():
        return 0

    q = query.lower()
    words = [w for w in q.split() if len(w) >= MIN_WORD_LENGTH]
    tags = platform.tags or []
    score = 0

    if q in platform.name.lower():
        score += NAME_MATCH
    if q in platform.description.lower():
        score += DESCRIPTION_MATCH

    for tag in tags:
        score += _text_score(tag, q, words, TAG_MATCH, TAG_WORD_MATCH)
    for feature in platform.features or []:
        score += _text_score(feature, q, words, FEATURE_MATCH, FEATURE_WORD_MATCH)

    if "free" in q and platform.pricing.has_free:
        score += CONTEXT_BOOST
    if "api" in q and platform.api_available:
        score += CONTEXT_BOOST
    if _mentions(q, IMAGE_TERMS) and any("image" in t.lower() for t in tags):
        score += CONTEXT_BOOST
    if _mentions(q, LANGUAGE_TERMS) and any("language" in t.lower() or "nlp" in t.lower() for t in tags):
        score += CONTEXT_BOOST

    # tag side is matched literally here
    if _mentions(q, BUSINESS_TERMS) and "Enterprise" in tags:
        score += AUDIENCE_BOOST
    if _mentions(q, DEVELOPER_TERMS) and any("API" in t or "Open Source" in t for t in tags):
        score += AUDIENCE_BOOST

    return score


def rank(query: str, platforms: Sequence[P]) -> list[tuple[P, int]]:
    """Platforms with a positive score, best first, paired with the score."""
    scored = [(p, relevance_score(p, query)) for p in platforms]
    scored = [pair for pair in scored if pair[1] > 0]
    scored.sort(key=lambda pair: pair[1], reverse=True)
    return scored


def search(query: str, platforms: Sequence[P]) -> list[P]:
    if not query or not query.strip():
        return list(platforms)
    return [p for p, _ in rank(query, platforms)]
