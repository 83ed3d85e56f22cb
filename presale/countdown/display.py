from __future__ import annotations

import sys
from typing import Optional, TextIO

from presale.countdown.timer import CountdownParts


def format_parts(parts: CountdownParts) -> str:
    return f"{parts.days}d {parts.hours:02d}h {parts.minutes:02d}m {parts.seconds:02d}s"


class TerminalDisplay:
    """Rewrites a single terminal line on every tick."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream or sys.stdout
        self.last: Optional[CountdownParts] = None

    def show(self, parts: CountdownParts) -> None:
        self.last = parts
        self._stream.write("\r" + format_parts(parts))
        self._stream.flush()
