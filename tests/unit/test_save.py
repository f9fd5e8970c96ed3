"""Tests for the save/load/list client."""

import pytest

from byof_client.errors import ByofError, ByofErrorCode
from byof_client.save import join_endpoint, list_saved_uis, load_ui, save_ui
from byof_client.types import ChatMessage, MessageRole, SaveMeta, StoredMessage


class TestJoinEndpoint:
    """Tests for join_endpoint."""

    def test_without_trailing_slash(self) -> None:
        assert join_endpoint("https://x.io/saves", "load") == "https://x.io/saves/load"

    def test_with_trailing_slash(self) -> None:
        assert join_endpoint("https://x.io/saves/", "list") == "https://x.io/saves/list"


class TestSaveUI:
    """Tests for save_ui."""

    @pytest.mark.asyncio
    async def test_save(self, save_url, recording_logger, fake_transport, fake_response) -> None:
        """Test saving posts the UI and returns the saved reference."""
        transport = fake_transport(
            fake_response(payload={"id": "ui-1", "name": "Dash", "updatedAt": "2026-01-01"})
        )

        result = await save_ui(
            save_url,
            "<html></html>",
            name="Dash",
            messages=[ChatMessage(role=MessageRole.USER, content="hi", ts=5)],
            context={"projectId": "p1"},
            meta=SaveMeta(byof_version="0.3.0"),
            logger=recording_logger,
            transport=transport,
        )

        assert result.id == "ui-1"
        assert result.name == "Dash"
        assert result.updated_at == "2026-01-01"
        call = transport.calls[0]
        assert call["url"] == save_url
        assert call["body"] == {
            "html": "<html></html>",
            "name": "Dash",
            "messages": [{"role": "user", "content": "hi", "ts": 5}],
            "context": {"projectId": "p1"},
            "meta": {"byofVersion": "0.3.0"},
        }
        assert recording_logger.at("info") == [
            ("Save completed", {"id": "ui-1", "name": "Dash"})
        ]

    @pytest.mark.asyncio
    async def test_minimal_body(
        self, save_url, recording_logger, fake_transport, fake_response
    ) -> None:
        """Test unset optional fields are not sent."""
        transport = fake_transport(fake_response(payload={"id": "ui-1"}))

        await save_ui(save_url, "<p/>", logger=recording_logger, transport=transport)

        assert transport.calls[0]["body"] == {"html": "<p/>"}

    @pytest.mark.asyncio
    async def test_empty_id_rejected(
        self, save_url, recording_logger, fake_transport, fake_response
    ) -> None:
        """Test an empty id fails with SAVE_ERROR."""
        transport = fake_transport(fake_response(payload={"id": ""}))

        with pytest.raises(ByofError) as exc_info:
            await save_ui(save_url, "<p/>", logger=recording_logger, transport=transport)

        assert exc_info.value.code == ByofErrorCode.SAVE_ERROR
        assert exc_info.value.message.startswith("Invalid response: id: ")

    @pytest.mark.asyncio
    async def test_http_error(
        self, save_url, recording_logger, fake_transport, fake_response
    ) -> None:
        """Test HTTP errors raise SAVE_ERROR."""
        transport = fake_transport(
            fake_response(status_code=403, reason_phrase="Forbidden", raw_text="nope")
        )

        with pytest.raises(ByofError) as exc_info:
            await save_ui(save_url, "<p/>", logger=recording_logger, transport=transport)

        assert exc_info.value.code == ByofErrorCode.SAVE_ERROR
        assert exc_info.value.message == "Save request failed: 403 Forbidden"

    @pytest.mark.asyncio
    async def test_invalid_message(self, save_url, recording_logger, fake_transport) -> None:
        """Test an invalid message dict raises SAVE_ERROR without a call."""
        transport = fake_transport(hang=True)

        with pytest.raises(ByofError) as exc_info:
            await save_ui(
                save_url,
                "<p/>",
                messages=[{"role": "user"}],
                logger=recording_logger,
                transport=transport,
            )

        assert exc_info.value.code == ByofErrorCode.SAVE_ERROR
        assert exc_info.value.message == "Invalid request: messages.0.content: Field required"
        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_relative_endpoint(self, recording_logger, fake_transport) -> None:
        """Test a relative endpoint raises NETWORK_ERROR without a call."""
        transport = fake_transport(hang=True)

        with pytest.raises(ByofError) as exc_info:
            await save_ui("/api/saves", "<p/>", logger=recording_logger, transport=transport)

        assert exc_info.value.code == ByofErrorCode.NETWORK_ERROR
        assert exc_info.value.message == "Save request failed"
        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_network_error(self, save_url, recording_logger, fake_transport) -> None:
        """Test transport failures raise NETWORK_ERROR."""
        transport = fake_transport(error=ConnectionResetError("reset"))

        with pytest.raises(ByofError) as exc_info:
            await save_ui(save_url, "<p/>", logger=recording_logger, transport=transport)

        assert exc_info.value.code == ByofErrorCode.NETWORK_ERROR


class TestLoadUI:
    """Tests for load_ui."""

    @pytest.mark.asyncio
    async def test_load(self, save_url, recording_logger, fake_transport, fake_response) -> None:
        """Test loading posts the id to <endpoint>/load."""
        transport = fake_transport(
            fake_response(
                payload={
                    "id": "ui-1",
                    "html": "<p/>",
                    "name": None,
                    "messages": [{"role": "assistant", "content": "ok", "ts": 9}],
                    "apiSpec": "{}",
                }
            )
        )

        result = await load_ui(save_url, "ui-1", logger=recording_logger, transport=transport)

        assert transport.calls[0]["url"] == f"{save_url}/load"
        assert transport.calls[0]["body"] == {"id": "ui-1"}
        assert result.html == "<p/>"
        assert result.name is None
        assert result.api_spec == "{}"
        assert result.messages == [StoredMessage(role=MessageRole.ASSISTANT, content="ok", ts=9)]

    @pytest.mark.asyncio
    async def test_invalid_role(
        self, save_url, recording_logger, fake_transport, fake_response
    ) -> None:
        """Test unknown message roles fail with LOAD_ERROR."""
        transport = fake_transport(
            fake_response(
                payload={
                    "id": "ui-1",
                    "html": "<p/>",
                    "messages": [{"role": "robot", "content": "x", "ts": 1}],
                }
            )
        )

        with pytest.raises(ByofError) as exc_info:
            await load_ui(save_url, "ui-1", logger=recording_logger, transport=transport)

        assert exc_info.value.code == ByofErrorCode.LOAD_ERROR
        assert "messages.0.role: " in exc_info.value.message

    @pytest.mark.asyncio
    async def test_missing_timestamp(
        self, save_url, recording_logger, fake_transport, fake_response
    ) -> None:
        """Test a stored message without a timestamp fails with LOAD_ERROR."""
        transport = fake_transport(
            fake_response(
                payload={
                    "id": "ui-1",
                    "html": "<p/>",
                    "messages": [{"role": "user", "content": "hi"}],
                }
            )
        )

        with pytest.raises(ByofError) as exc_info:
            await load_ui(save_url, "ui-1", logger=recording_logger, transport=transport)

        assert exc_info.value.code == ByofErrorCode.LOAD_ERROR
        assert exc_info.value.message.startswith("Invalid response: messages.0.ts: ")

    @pytest.mark.asyncio
    async def test_fractional_timestamp(
        self, save_url, recording_logger, fake_transport, fake_response
    ) -> None:
        """Test stored timestamps may be any number."""
        transport = fake_transport(
            fake_response(
                payload={
                    "id": "ui-1",
                    "html": "<p/>",
                    "messages": [{"role": "user", "content": "hi", "ts": 1.5}],
                }
            )
        )

        result = await load_ui(save_url, "ui-1", logger=recording_logger, transport=transport)

        assert result.messages[0].ts == 1.5


class TestListSavedUIs:
    """Tests for list_saved_uis."""

    @pytest.mark.asyncio
    async def test_list(self, save_url, recording_logger, fake_transport, fake_response) -> None:
        """Test listing posts the project filter to <endpoint>/list."""
        transport = fake_transport(
            fake_response(payload={"items": [{"id": "a"}, {"id": "b", "name": "B"}]})
        )

        result = await list_saved_uis(
            save_url + "/",
            project_id="p1",
            logger=recording_logger,
            transport=transport,
        )

        assert transport.calls[0]["url"] == f"{save_url}/list"
        assert transport.calls[0]["body"] == {"projectId": "p1"}
        assert [item.id for item in result.items] == ["a", "b"]
        assert result.items[1].name == "B"

    @pytest.mark.asyncio
    async def test_list_unfiltered(
        self, save_url, recording_logger, fake_transport, fake_response
    ) -> None:
        """Test listing without a project sends an empty body."""
        transport = fake_transport(fake_response(payload={"items": []}))

        result = await list_saved_uis(save_url, logger=recording_logger, transport=transport)

        assert transport.calls[0]["body"] == {}
        assert result.items == []

    @pytest.mark.asyncio
    async def test_timeout(self, save_url, recording_logger, fake_transport) -> None:
        """Test timeouts raise NETWORK_ERROR."""
        transport = fake_transport(hang=True)

        with pytest.raises(ByofError) as exc_info:
            await list_saved_uis(
                save_url, timeout_ms=10, logger=recording_logger, transport=transport
            )

        assert exc_info.value.code == ByofErrorCode.NETWORK_ERROR
        assert exc_info.value.message == "List request timed out or was aborted"
