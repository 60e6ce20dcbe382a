from __future__ import annotations

import re
from typing import Iterator

_PAT_EQUALS = re.compile(r'^\s*(?:"([^"]*)"|((?:[^=":]|:(?!\s))+?))\s*=\s*(?:"(.*)"|(.*?))\s*$')
_PAT_COLON = re.compile(r'^\s*(?:"([^"]*)"|([^:"]+?)):\s+(?:"(.*)"|(.*?))\s*$')


def parse_line(line: str) -> tuple[str, str] | None:
    """
    Split one line of machine-readable output into (key, value).

    Accepts `key=value` and `key: value`, with optional double quotes around
    either side. Returns None for blank or unparseable lines.
    """
    if not line.strip():
        return None
    m = _PAT_EQUALS.match(line) or _PAT_COLON.match(line)
    if not m:
        return None
    qkey, key, qval, val = m.groups()
    key = qkey if qkey is not None else key
    if not key:
        return None
    return key, qval if qval is not None else val


def iter_properties(text: str) -> Iterator[tuple[str, str]]:
    for raw in text.splitlines():
        prop = parse_line(raw)
        if prop is not None:
            yield prop
