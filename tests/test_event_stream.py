# /tests/test_event_stream.py

import json
import pytest

from promptforge.models.generation_model import GeneratedFile
from promptforge.services.event_stream import encode_sse, encode_event_stream
from promptforge.services.generation_events import (
    ThinkingEvent,
    ThinkingLongerEvent,
    GeneratingEvent,
    FileExtractedEvent,
    CompleteEvent,
    FailedEvent,
)


def _payload(frame: str) -> dict:
    assert frame.startswith("data: ")
    assert frame.endswith("\n\n")
    return json.loads(frame[len("data: "):-2])


def test_frame_is_single_data_line_with_blank_line_terminator():
    frame = encode_sse(ThinkingEvent(message="Analyzing your request..."))

    assert frame.count("\n") == 2
    assert _payload(frame) == {"type": "thinking", "message": "Analyzing your request..."}


def test_wire_keys_are_camel_case():
    assert _payload(encode_sse(ThinkingLongerEvent(thinking_duration=4500))) == {
        "type": "thinking_longer",
        "thinkingDuration": 4500,
    }
    assert _payload(encode_sse(CompleteEvent(total_files=3, thinking_duration=1200))) == {
        "type": "complete",
        "totalFiles": 3,
        "thinkingDuration": 1200,
    }


def test_optional_fields_are_omitted_when_absent():
    assert _payload(encode_sse(GeneratingEvent())) == {"type": "generating"}
    assert _payload(encode_sse(CompleteEvent(total_files=0))) == {"type": "complete", "totalFiles": 0}


def test_file_event_carries_the_file_object():
    multi_line = "line one\nline two\n\"quoted\""
    event = FileExtractedEvent(
        file=GeneratedFile(path="src/App.tsx", content=multi_line, type="typescript"),
        message="Created src/App.tsx",
    )

    frame = encode_sse(event)

    # Newlines inside content are JSON-escaped, so the frame stays on one data line.
    assert frame.count("\n") == 2
    assert _payload(frame) == {
        "type": "file",
        "file": {"path": "src/App.tsx", "content": multi_line, "type": "typescript"},
        "message": "Created src/App.tsx",
    }


def test_error_event_wire_shape():
    assert _payload(encode_sse(FailedEvent(message="boom"))) == {"type": "error", "message": "boom"}


@pytest.mark.asyncio
async def test_stream_stops_after_first_terminal_event():
    async def events():
        yield ThinkingEvent()
        yield FailedEvent(message="boom")
        yield CompleteEvent(total_files=1)

    frames = [frame async for frame in encode_event_stream(events())]

    assert [_payload(f)["type"] for f in frames] == ["thinking", "error"]
