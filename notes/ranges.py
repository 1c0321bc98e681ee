# notes/ranges.py
import re
from typing import Iterable, List, Tuple
from config import GAME_FPS
from errors import MalformedRangeError, EmptyRangesError

_TOKEN_RE = re.compile(r"^\s*(\d+)\s*-\s*(\d+)\s*$", re.ASCII)
_SPLIT_RE = re.compile(r"\s*,\s*")

DEFAULT_PRESETS = [
    ("Terrapins", "4000-4003, 4254-4257, 4530-4533, 4708-4711"),
    ("KG/GG", "998-1001, 1651-1654, 2098-2101, 2470-2473, 2747-2750"),
    ("Calamari", "669-672, 1430-1433, 2277-2280, 2685-2688, 4012-4015, 4394-4397"),
    ("Nimbus", "2918-2921"),
    ("Shocker (Yarid)", "176-179"),
    ("Shocker (Smithy)", "163-166"),
]

def parse_range(token: str) -> Tuple[float, float]:
    """'100-160' -> (100/60, 160/60)。"""
    m = _TOKEN_RE.match(token)
    if not m:
        raise MalformedRangeError(token)
    start, end = int(m.group(1)), int(m.group(2))
    if start > end:
        raise MalformedRangeError(token, "start frame is after end frame")
    return start / GAME_FPS, end / GAME_FPS

def parse_ranges(text: str) -> List[Tuple[float, float]]:
    """Comma separated frame ranges -> second pairs, input order preserved."""
    if not text or not text.strip():
        raise EmptyRangesError()
    return [parse_range(tok) for tok in _SPLIT_RE.split(text.strip())]

def format_ranges(frame_pairs: Iterable[Tuple[int, int]]) -> str:
    return ", ".join(f"{int(a)}-{int(b)}" for a, b in frame_pairs)
