# college_hockey/parsers/__init__.py
"""
Schedule parser registry.

Each parser is a stateless function (soup, ParseContext) -> TeamSchedule,
registered under the format id the detector emits.
"""

from __future__ import annotations

from typing import Callable, Dict, Sequence

from bs4 import BeautifulSoup

from ..detector import ARIZONA_STATE, BIG_TEN, BOSTON_UNIVERSITY, CHN, FERRIS_STATE, GENERIC, SIDEARM
from ..models import TeamSchedule
from . import arizona_state, big_ten, chn, ferris_state, generic, sidearm
from .common import ParseContext

Parser = Callable[[BeautifulSoup, ParseContext], TeamSchedule]

PARSERS: Dict[str, Parser] = {
    SIDEARM: sidearm.parse,
    BOSTON_UNIVERSITY: sidearm.parse,
    ARIZONA_STATE: arizona_state.parse,
    FERRIS_STATE: ferris_state.parse,
    BIG_TEN: big_ten.parse,
    CHN: chn.parse,
    GENERIC: generic.parse,
}

# Order the remaining parsers are tried in after a low-confidence miss.
FALLBACK_ORDER: Sequence[str] = (SIDEARM, FERRIS_STATE, ARIZONA_STATE, BIG_TEN, CHN, GENERIC)


def get_parser(format_id: str) -> Parser:
    """Parser for a format id; unknown ids get the generic parser."""
    return PARSERS.get(format_id, generic.parse)


__all__ = ["FALLBACK_ORDER", "PARSERS", "ParseContext", "Parser", "get_parser"]
