"""
TrafficLens – Domain Service: Traffic Source Classifier
=========================================================
Traduce un referrer crudo a un nombre canónico + icono para el frontend.

REGLAS (contención case-sensitive, gana la primera):
    google            → Google     / search
    bing              → Bing       / search
    duckduckgo        → DuckDuckGo / search
    twitter | x.com   → Twitter    / twitter
    facebook          → Facebook   / facebook
    instagram         → Instagram  / instagram
    reddit            → Reddit     / reddit
    youtube           → YouTube    / youtube
    "Direct" exacto   → Direct     / globe
    resto             → sin cambios / globe
"""

from __future__ import annotations

from typing import Tuple

DEFAULT_ICON = "globe"

_SOURCE_RULES: Tuple[Tuple[Tuple[str, ...], str, str], ...] = (
    (("google",), "Google", "search"),
    (("bing",), "Bing", "search"),
    (("duckduckgo",), "DuckDuckGo", "search"),
    (("twitter", "x.com"), "Twitter", "twitter"),
    (("facebook",), "Facebook", "facebook"),
    (("instagram",), "Instagram", "instagram"),
    (("reddit",), "Reddit", "reddit"),
    (("youtube",), "YouTube", "youtube"),
)


def classify_source(source: str) -> Tuple[str, str]:
    """Devuelve (nombre, icono) para un referrer ya normalizado."""
    for needles, name, icon in _SOURCE_RULES:
        if any(needle in source for needle in needles):
            return name, icon
    return source, DEFAULT_ICON
