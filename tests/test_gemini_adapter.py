import asyncio
from typing import Any, List

import pytest
from google.genai import types
from unittest.mock import AsyncMock, MagicMock

from live_maps_agent.maps_core import MultimediaPayload, ToolCallRequest, ToolCallResponse
from live_maps_agent.maps_impl.gemini import GeminiLiveSession
from conftest import PNG_BYTES


def _tool_call_message(*calls: types.FunctionCall) -> types.LiveServerMessage:
    return types.LiveServerMessage(tool_call=types.LiveServerToolCall(function_calls=list(calls)))


class ScriptedSession:
    """Live session double whose ``receive`` replays one scripted turn per call."""

    def __init__(self, *turns: List[types.LiveServerMessage]) -> None:
        self.turns = list(turns)
        self.send_tool_response = AsyncMock()
        self.send_client_content = AsyncMock()

    async def receive(self):
        if self.turns:
            for message in self.turns.pop(0):
                yield message


def test_get_tool_calls_preserves_ids_and_order() -> None:
    tool_call = types.LiveServerToolCall(
        function_calls=[
            types.FunctionCall(id="c1", name="geocode", args={"address": "Lisbon"}),
            types.FunctionCall(id="c2", name="get_map", args=None),
        ]
    )

    requests = GeminiLiveSession.get_tool_calls(tool_call)

    assert requests == [
        ToolCallRequest(id="c1", name="geocode", args={"address": "Lisbon"}),
        ToolCallRequest(id="c2", name="get_map", args={}),
    ]


@pytest.mark.asyncio
async def test_send_tool_response_wraps_output() -> None:
    session = ScriptedSession()
    live = GeminiLiveSession(session)

    await live.send_tool_response(
        [
            ToolCallResponse(id="c1", name="geocode", output={"latitude": 38.72, "longitude": -9.14}),
            ToolCallResponse(id="c2", name="get_map", output={"success": True}),
        ]
    )

    session.send_tool_response.assert_awaited_once()
    sent = session.send_tool_response.await_args.kwargs["function_responses"]
    assert [(r.id, r.name, r.response) for r in sent] == [
        ("c1", "geocode", {"output": {"latitude": 38.72, "longitude": -9.14}}),
        ("c2", "get_map", {"output": {"success": True}}),
    ]


@pytest.mark.asyncio
async def test_send_media_as_inline_data() -> None:
    session = ScriptedSession()
    live = GeminiLiveSession(session)

    await live.send_media(MultimediaPayload.from_bytes(PNG_BYTES, "image/png"))

    kwargs = session.send_client_content.await_args.kwargs
    assert kwargs["turn_complete"] is True
    (part,) = kwargs["turns"].parts
    assert part.inline_data.mime_type == "image/png"
    assert part.inline_data.data == PNG_BYTES


@pytest.mark.asyncio
async def test_handlers_are_registered_once_and_removable() -> None:
    live = GeminiLiveSession(ScriptedSession())
    handler = AsyncMock()

    live.on_tool_call(handler)
    live.on_tool_call(handler)
    started = live.dispatch(_tool_call_message(types.FunctionCall(id="c1", name="geocode", args={})))
    await live.wait_idle()

    assert started == 1
    handler.assert_awaited_once_with([ToolCallRequest(id="c1", name="geocode", args={})])

    live.off_tool_call(handler)
    assert live.dispatch(_tool_call_message(types.FunctionCall(id="c2", name="geocode", args={}))) == 0


@pytest.mark.asyncio
async def test_pump_dispatches_until_session_ends() -> None:
    texts: List[str] = []
    batches: List[Any] = []
    session = ScriptedSession(
        [
            _tool_call_message(types.FunctionCall(id="c1", name="get_map", args={"lat": 1, "lon": 2})),
            types.LiveServerMessage(
                server_content=types.LiveServerContent(
                    model_turn=types.Content(role="model", parts=[types.Part(text="Here is your map.")]),
                    turn_complete=True,
                )
            ),
        ],
        [types.LiveServerMessage(tool_call_cancellation=types.LiveServerToolCallCancellation(ids=["c1"]))],
    )
    live = GeminiLiveSession(session, on_text=texts.append)

    async def handler(requests) -> None:
        await asyncio.sleep(0)
        batches.append(requests)

    live.on_tool_call(handler)
    await live.pump()
    await live.wait_idle()

    assert texts == ["Here is your map."]
    assert [[r.id for r in batch] for batch in batches] == [["c1"]]


@pytest.mark.asyncio
async def test_failing_handler_is_logged(caplog) -> None:
    live = GeminiLiveSession(ScriptedSession())
    live.on_tool_call(AsyncMock(side_effect=RuntimeError("boom")))

    live.dispatch(_tool_call_message(types.FunctionCall(id="c1", name="geocode", args={})))
    await live.wait_idle()
    await asyncio.sleep(0)

    assert "Tool-call batch failed: boom" in caplog.text


def test_dispatch_ignores_messages_without_calls() -> None:
    live = GeminiLiveSession(MagicMock())
    live.on_tool_call(AsyncMock())

    assert live.dispatch(types.LiveServerMessage()) == 0
    assert live.dispatch(types.LiveServerMessage(tool_call=types.LiveServerToolCall(function_calls=[]))) == 0
