# /promptforge/services/event_stream.py

import json
from typing import AsyncIterator

from .generation_events import GenerationEvent, TERMINAL_EVENT_TYPES

SSE_MEDIA_TYPE = "text/event-stream"
SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    # Stops reverse proxies (nginx) from buffering the stream.
    "X-Accel-Buffering": "no",
}


def encode_sse(event: GenerationEvent) -> str:
    """One event = one `data:` line holding a JSON object, then a blank line."""
    return f"data: {json.dumps(event.to_wire())}\n\n"


async def encode_event_stream(events: AsyncIterator[GenerationEvent]) -> AsyncIterator[str]:
    """Frames pipeline events as SSE and stops after the first terminal event."""
    async for event in events:
        yield encode_sse(event)
        if event.type in TERMINAL_EVENT_TYPES:
            break
