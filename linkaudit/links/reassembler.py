"""Reassembly of newline-delimited records from an incremental byte stream."""

from __future__ import annotations

import codecs
from typing import List, Optional


class LineReassembler:
    """Turn arbitrarily split reads into complete lines.

    Bytes are decoded incrementally, so a multi-byte character split across
    two reads is handled.  The trailing partial line is held until the read
    that completes it arrives.  Blank lines are dropped.

    Usage::

        buf = LineReassembler()
        for data in response.iter_bytes():
            for line in buf.feed(data):
                handle(json.loads(line))
        tail = buf.close()
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self._decoder = codecs.getincrementaldecoder(encoding)()
        self._pending = ""

    def feed(self, data: bytes) -> List[str]:
        """Add *data* and return every line it completes."""
        self._pending += self._decoder.decode(data)
        *complete, self._pending = self._pending.split("\n")
        return [line for line in complete if line.strip()]

    def close(self) -> Optional[str]:
        """Flush the decoder and return the unterminated last line, if any."""
        self._pending += self._decoder.decode(b"", final=True)
        tail, self._pending = self._pending, ""
        return tail if tail.strip() else None
