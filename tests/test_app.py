"""Tests for the Textual TUI."""
import asyncio

import pytest
from textual.widgets import Button, Input

from searchchat.errors import SearchTransportError
from searchchat.ui import SearchChatApp
from searchchat.ui.widgets import AssistantMessageView, ErrorBanner, UserMessageView


async def submit(app: SearchChatApp, pilot, text: str) -> None:
    app.query_one("#chat-input", Input).value = text
    await pilot.press("enter")
    await pilot.pause()
    await app.workers.wait_for_complete()
    await pilot.pause()


class TestSearchChatApp:
    """Tests for SearchChatApp."""

    @pytest.mark.asyncio
    async def test_turn_renders_messages(self, search_client, llm):
        """Test that a submitted query shows the user turn and the answer."""
        app = SearchChatApp(llm=llm, search_client=search_client)

        async with app.run_test() as pilot:
            await submit(app, pilot, "weather today")

            roles = [m.role for m in app.orchestrator.store.messages()]
            assert roles == ["system", "user", "assistant"]
            assert len(app.query(UserMessageView)) == 1
            assert len(app.query(AssistantMessageView)) == 1
            assert str(app.query_one("#send-btn", Button).label) == "Search"

    @pytest.mark.asyncio
    async def test_search_error_banner(self, search_client, llm):
        search_client.error = SearchTransportError("Search failed (HTTP 500)", status_code=500)
        app = SearchChatApp(llm=llm, search_client=search_client)

        async with app.run_test() as pilot:
            await submit(app, pilot, "weather today")

            assert app.query_one("#error-banner", ErrorBanner).display is True
            assert len(app.query(UserMessageView)) == 0
            assert len(app.orchestrator.store) == 0

    @pytest.mark.asyncio
    async def test_clear_chat(self, search_client, llm):
        app = SearchChatApp(llm=llm, search_client=search_client)

        async with app.run_test() as pilot:
            await submit(app, pilot, "weather today")
            app.action_clear_chat()
            await pilot.pause()

            assert len(app.orchestrator.store) == 0
            assert len(app.query(AssistantMessageView)) == 0

    @pytest.mark.asyncio
    async def test_query_kept_while_answer_streams(self, search_client, llm):
        """Test that a query sent during generation stays in the input."""
        llm.gate = asyncio.Event()
        app = SearchChatApp(llm=llm, search_client=search_client)

        async with app.run_test() as pilot:
            chat_input = app.query_one("#chat-input", Input)
            chat_input.value = "weather today"
            await pilot.press("enter")
            for _ in range(20):
                await pilot.pause()
                if len(app.query(AssistantMessageView)) == 1:
                    break

            assert app.orchestrator.in_flight is True
            chat_input.value = "and tomorrow?"
            await pilot.press("enter")
            await pilot.pause()

            assert chat_input.value == "and tomorrow?"
            assert len(search_client.requests) == 1

            llm.gate.set()
            await app.workers.wait_for_complete()
            await pilot.pause()
            await pilot.press("enter")
            await pilot.pause()
            await app.workers.wait_for_complete()

            assert chat_input.value == ""
            assert [r.query for r in search_client.requests] == ["weather today", "and tomorrow?"]
