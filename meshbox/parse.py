# meshbox/parse.py
from __future__ import annotations
import re
from math import isfinite
from typing import List, Optional, Tuple

from .diagnostics import Diagnostic, WARNING
from .errors import ParseError
from .geom import Vec3

BRACKETS = {"(": ")", "[": "]", "{": "}", "<": ">"}

_FLOAT = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INT = re.compile(r"\d+")
_WS = re.compile(r"\s*")


def _skip_ws(s: str, pos: int) -> int:
    return _WS.match(s, pos).end()


def parse_vec3(text: str, lineno: Optional[int] = None) -> Vec3:
    """
    Розбирає рядок виду "(x, y, z)" у Vec3.

    Перший токен — відкривна дужка, далі рівно три числа через кому,
    закривна дужка необов'язкова. Два чи чотири значення — завжди помилка,
    нічого не обрізаємо і не доповнюємо.
    """
    s = text.strip()
    if not s:
        raise ParseError("empty vector text", lineno, text)
    opener = s[0]
    closer = BRACKETS.get(opener)
    if closer is None:
        raise ParseError(f"expected opening bracket, got {opener!r}", lineno, text)

    values: List[float] = []
    pos = 1
    while True:
        pos = _skip_ws(s, pos)
        m = _FLOAT.match(s, pos)
        if m is None:
            got = s[pos] if pos < len(s) else "end of text"
            raise ParseError(f"expected a number at column {pos + 1}, got {got!r}", lineno, text)
        value = float(m.group())
        if not isfinite(value):
            raise ParseError(f"non-finite coordinate {m.group()!r}", lineno, text)
        values.append(value)
        pos = _skip_ws(s, m.end())
        if pos == len(s):
            break
        ch = s[pos]
        if ch == ",":
            pos += 1
            continue
        if ch == closer:
            if pos + 1 != len(s):
                raise ParseError(f"unexpected text after {closer!r}", lineno, text)
            break
        raise ParseError(f"separator {ch!r} is not a comma", lineno, text)

    if len(values) != 3:
        raise ParseError(f"expected 3 values, got {len(values)}", lineno, text)
    return Vec3(values[0], values[1], values[2])


def parse_index_line(line: str, lineno: Optional[int] = None) -> Tuple[List[int], Optional[Diagnostic]]:
    """
    Індекси одного рядка: невід'ємні цілі через кому або пробіли.
    Якщо після індексу стоїть щось інше — решту рядка відкидаємо
    і повертаємо попередження W-INDEX-TRUNCATED.
    """
    out: List[int] = []
    s = line.strip()
    pos = 0
    while pos < len(s):
        m = _INT.match(s, pos)
        if m is None:
            # "-1", "#", "x" — однаково обрізання, навіть на початку рядка
            return out, _truncated(s, pos, lineno)
        out.append(int(m.group()))
        end = m.end()
        pos = _skip_ws(s, end)
        if pos == len(s):
            break
        if s[pos] == ",":
            # кома в кінці рядка допустима
            pos = _skip_ws(s, pos + 1)
            continue
        if pos > end and s[pos].isdigit():
            continue
        return out, _truncated(s, pos, lineno)
    return out, None


def _truncated(s: str, pos: int, lineno: Optional[int]) -> Diagnostic:
    rest = s[pos:]
    return Diagnostic(
        code="W-INDEX-TRUNCATED",
        message=f"index line truncated at {rest!r}",
        severity=WARNING,
        location=f"line {lineno}" if lineno is not None else None,
        data={"column": pos + 1, "dropped": rest},
    )
