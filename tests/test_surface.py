import json
from datetime import datetime

import httpx
import pytest

from chatty.dependencies import get_chat_service
from chatty.exceptions import ChatError
from chatty_client.surface import SERVER_HINT, ChatEntry, ChatSurface

FIXED_NOW = datetime(2026, 10, 19, 14, 5, 9)


def make_surface(handler) -> ChatSurface:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://test")
    return ChatSurface(client, clock=lambda: FIXED_NOW)


def reply_with(text: str):
    calls: list[str] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/chat"
        calls.append(json.loads(request.content.decode())["prompt"])
        return httpx.Response(200, json={"response": text})

    return handler, calls


@pytest.mark.asyncio
async def test_submit_success_prepends_entry_and_resets_input() -> None:
    handler, calls = reply_with("Why did...")
    surface = make_surface(handler)
    surface.prompt = "Tell me a joke"

    await surface.submit()

    assert calls == ["Tell me a joke"]
    assert len(surface.history) == 1
    entry = surface.history[0]
    assert (entry.prompt, entry.response) == ("Tell me a joke", "Why did...")
    assert entry.timestamp == "10/19/2026, 02:05:09 PM"
    assert surface.prompt == ""
    assert surface.error == ""
    assert surface.loading is False


@pytest.mark.asyncio
async def test_new_entries_go_first_and_old_ones_are_untouched() -> None:
    handler, _ = reply_with("reply")
    surface = make_surface(handler)

    await surface.submit("first")
    before = surface.history
    await surface.submit("second")

    assert [entry.prompt for entry in surface.history] == ["second", "first"]
    assert surface.history[1:] == before
    assert surface.history[0].id > surface.history[1].id


@pytest.mark.asyncio
@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
async def test_blank_prompt_is_a_no_op(text: str) -> None:
    handler, calls = reply_with("unused")
    surface = make_surface(handler)
    surface.error = "previous failure"

    await surface.submit(text)

    assert calls == []
    assert surface.history == ()
    assert surface.error == "previous failure"
    assert surface.loading is False


@pytest.mark.asyncio
async def test_no_second_submission_while_loading() -> None:
    handler, calls = reply_with("unused")
    surface = make_surface(handler)
    surface.loading = True

    await surface.submit("hello")

    assert calls == []


@pytest.mark.asyncio
async def test_loading_is_set_during_the_request() -> None:
    seen: list[bool] = []
    surface: ChatSurface

    async def handler(_: httpx.Request) -> httpx.Response:
        seen.append(surface.loading)
        return httpx.Response(200, json={"response": "ok"})

    surface = make_surface(handler)
    surface.error = "stale"
    await surface.submit("hello")

    assert seen == [True]
    assert surface.loading is False


@pytest.mark.asyncio
async def test_server_error_message_is_shown() -> None:
    async def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(
            429, json={"error": "OpenAI API Error: 429", "details": "Rate limit reached"}
        )

    surface = make_surface(handler)
    surface.prompt = "hello"
    await surface.submit()

    assert surface.error == "OpenAI API Error: 429"
    assert surface.history == ()
    assert surface.prompt == "hello"
    assert surface.loading is False


@pytest.mark.asyncio
async def test_error_without_message_falls_back_to_status() -> None:
    async def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(503, json={})

    surface = make_surface(handler)
    await surface.submit("hello")

    assert surface.error == "API Error: 503"


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{"response": ""}, {}, {"response": None}])
async def test_missing_response_text_is_an_error(body) -> None:
    async def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=body)

    surface = make_surface(handler)
    await surface.submit("hello")

    assert surface.error == "No response received from AI"
    assert surface.history == ()


@pytest.mark.asyncio
async def test_transport_failure_clears_loading() -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    surface = make_surface(handler)
    await surface.submit("hello")

    assert surface.error == "connection refused"
    assert surface.history == ()
    assert surface.loading is False


@pytest.mark.asyncio
async def test_unparseable_body_is_an_error() -> None:
    async def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="<html>Bad gateway</html>")

    surface = make_surface(handler)
    await surface.submit("hello")

    assert surface.error
    assert surface.history == ()
    assert surface.loading is False


@pytest.mark.asyncio
async def test_failure_keeps_earlier_history() -> None:
    responses = iter(
        [
            httpx.Response(200, json={"response": "ok"}),
            httpx.Response(500, json={"error": "Internal server error"}),
        ]
    )

    async def handler(_: httpx.Request) -> httpx.Response:
        return next(responses)

    surface = make_surface(handler)
    await surface.submit("one")
    await surface.submit("two")

    assert [entry.prompt for entry in surface.history] == ["one"]
    assert surface.error == "Internal server error"


@pytest.mark.asyncio
async def test_clear_empties_history_and_error() -> None:
    handler, _ = reply_with("ok")
    surface = make_surface(handler)
    await surface.submit("one")
    surface.error = "something"

    surface.clear()

    assert surface.history == ()
    assert surface.error == ""
    surface.clear()
    assert surface.history == ()


@pytest.mark.asyncio
async def test_enter_submits_and_shift_enter_adds_newline() -> None:
    handler, calls = reply_with("ok")
    surface = make_surface(handler)
    surface.prompt = "line one"

    assert await surface.handle_key("Enter", shift=True) is False
    assert surface.prompt == "line one\n"
    assert calls == []

    surface.prompt += "line two"
    assert await surface.handle_key("a") is False
    assert await surface.handle_key("Enter") is True
    assert calls == ["line one\nline two"]
    assert surface.prompt == ""


def test_entries_are_immutable() -> None:
    entry = ChatEntry(id=1, prompt="p", response="r", timestamp="t")

    with pytest.raises(AttributeError):
        entry.prompt = "changed"  # type: ignore[misc]


@pytest.mark.asyncio
async def test_render_shows_state() -> None:
    handler, _ = reply_with("Why did...")
    surface = make_surface(handler)

    assert "Conversation History" not in surface.render()

    await surface.submit("Tell me a joke")
    view = surface.render()
    assert "Conversation History (1 conversation)" in view
    assert "10/19/2026, 02:05:09 PM" in view
    assert view.index("YOU") < view.index("Tell me a joke") < view.index("Why did...")
    assert SERVER_HINT not in view

    surface.error = "OpenAI API Error: 429"
    surface.loading = True
    view = surface.render()
    assert SERVER_HINT in view
    assert "Generating response" in view
    assert "[disabled]" in view


@pytest.mark.asyncio
async def test_surface_against_relay(app) -> None:
    class Upstream:
        async def complete(self, prompt: str) -> str:
            if prompt == "fail":
                raise ChatError.upstream(429, "slow down")
            return f"sassy reply to {prompt}"

    app.dependency_overrides[get_chat_service] = lambda: Upstream()
    transport = httpx.ASGITransport(app=app)

    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        surface = ChatSurface(client)
        await surface.submit("Tell me a joke")
        await surface.submit("fail")
        await surface.submit("   ")

    assert [entry.response for entry in surface.history] == ["sassy reply to Tell me a joke"]
    assert surface.error == "OpenAI API Error: 429"
    assert surface.loading is False


@pytest.mark.asyncio
@pytest.mark.parametrize("reply", [5, ["Why did..."], {"text": "Why did..."}, True])
async def test_non_string_response_is_an_error(reply) -> None:
    async def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"response": reply})

    surface = make_surface(handler)
    await surface.submit("hello")

    assert surface.error == "No response received from AI"
    assert surface.history == ()
    assert "Error:" in surface.render()
