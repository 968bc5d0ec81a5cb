# Area: Host
"""Parse the initial game / player / room selection from a query string."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
from urllib.parse import parse_qs, urlsplit


@dataclass(frozen=True)
class InitialParams:
    game: Optional[str] = None
    player_id: Optional[str] = None
    room_id: Optional[str] = None


def parse_initial_params(url_or_query: Optional[str]) -> InitialParams:
    """
    Read ``game``, ``playerId`` and ``roomId`` from a URL or query string.

    Empty values are treated as absent.

    >>> parse_initial_params("https://example.org/?game=nameblame&roomId=R1")
    InitialParams(game='nameblame', player_id=None, room_id='R1')
    """
    if not url_or_query:
        return InitialParams()
    query = url_or_query
    if "://" in query or query.startswith("/"):
        query = urlsplit(query).query
    query = query.lstrip("?")
    values = parse_qs(query, keep_blank_values=False)

    def first(name: str) -> Optional[str]:
        found = values.get(name)
        return found[0] if found else None

    return InitialParams(
        game=first("game"),
        player_id=first("playerId"),
        room_id=first("roomId"),
    )
