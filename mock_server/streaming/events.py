"""SSE event types and serialization for the simulated job streams."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class StreamEventType(str, Enum):
    """All event types emitted during a simulated training/testing run."""

    STARTED = "started"
    PROGRESS = "progress"
    END = "end"


END_MESSAGE = "Stream finished"


@dataclass
class SSEEvent:
    """A single Server-Sent Event ready for wire serialization.

    ``data`` is written verbatim when it is a string and JSON-encoded
    otherwise. Started and progress events go out as unnamed ``message``
    events; only the end event carries an ``event:`` line.
    """

    event_type: StreamEventType
    data: Union[str, dict[str, Any]]

    def to_sse_string(self) -> str:
        """Serialize to SSE wire format.

        Format:
            [event: end]
            data: <text or json>

            (terminated by double newline)
        """
        body = self.data if isinstance(self.data, str) else json.dumps(self.data, default=str)
        if self.event_type is StreamEventType.END:
            return f"event: {self.event_type.value}\ndata: {body}\n\n"
        return f"data: {body}\n\n"


def end_event() -> SSEEvent:
    return SSEEvent(event_type=StreamEventType.END, data=END_MESSAGE)
