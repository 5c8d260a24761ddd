import asyncio
import json
from datetime import date
from unittest.mock import MagicMock

import pytest

from logstream.stream.export import export_filename, write_export
from logstream.stream.session import TailSession, TailStats

from helpers import log_envelope, make_entry

URL = "ws://logs.test/ws?mode=subscribe"


@pytest.fixture
def session(tmp_path, connector):
    return TailSession(URL, export_dir=tmp_path, reconnect_delay=0.05, connector=connector)


def feed(session, **data):
    session.connection.handle_message(log_envelope(**data))


class TestPause:
    """Test the hard ingestion gate"""

    def test_paused_messages_are_not_buffered(self, session):
        feed(session, id="1")
        session.pause()
        feed(session, id="2")
        feed(session, id="3")

        assert len(session.buffer) == 1
        assert session.connection.discarded == 2

    def test_resume_ingests_subsequent_messages(self, session):
        session.pause()
        feed(session, id="dropped")
        session.resume()
        feed(session, id="kept")

        assert [entry.id for entry in session.buffer] == ["kept"]

    def test_pause_keeps_existing_entries(self, session):
        feed(session, id="1")
        session.pause()

        assert len(session.buffer) == 1

    def test_toggle_pause_returns_new_state(self, session):
        assert session.toggle_pause() is True
        assert session.toggle_pause() is False


class TestControls:
    """Test clear, filters and derived state"""

    def test_clear_keeps_projects_and_resets_errors(self, session):
        feed(session, id="1", project="A", level="error")
        feed(session, id="2", project="B")

        session.clear()

        assert len(session.buffer) == 0
        assert session.buffer.known_projects() == ["A", "B"]
        assert session.stats() == TailStats(total=0, showing=0, errors=0)

    def test_malformed_message_does_not_touch_buffer(self, session):
        feed(session, id="1")
        session.connection.handle_message("{not json")

        assert len(session.buffer) == 1
        assert session.connection.decode_failures == 1

    def test_set_filter_updates_visible(self, session):
        feed(session, id="1", project="web", level="info", message="boot ok")
        feed(session, id="2", project="api", level="error", message="boot fail")

        session.set_filter(level="error", query="boot")
        assert [entry.id for entry in session.visible()] == ["2"]

        session.set_filter(level="")
        assert [entry.id for entry in session.visible()] == ["2", "1"]

        session.reset_filters()
        assert session.criteria.is_active is False

    def test_stats(self, session):
        feed(session, id="1", project="web", level="fatal")
        feed(session, id="2", project="api", level="info")
        session.set_filter(project="api")

        assert session.stats() == TailStats(total=2, showing=1, errors=1)


class TestNotifications:
    """Test the single change listener"""

    def test_every_mutation_notifies_once(self, session):
        listener = MagicMock()
        session.subscribe(listener)

        feed(session)
        session.pause()
        session.resume()
        session.clear()
        session.set_filter(query="x")

        assert listener.call_count == 5

    def test_noop_changes_do_not_notify(self, session):
        listener = MagicMock()
        session.subscribe(listener)

        session.resume()
        session.set_filter(query="")
        session.connection.handle_message("{bad")

        listener.assert_not_called()

    def test_subscribe_replaces_listener(self, session):
        first, second = MagicMock(), MagicMock()
        session.subscribe(first)
        session.subscribe(second)

        feed(session)

        first.assert_not_called()
        second.assert_called_once()


class TestExport:
    """Test exporting the filtered view"""

    def test_export_filename(self):
        assert export_filename(date(2024, 5, 1)) == "logs-2024-05-01.json"

    def test_export_writes_only_filtered_entries(self, session, tmp_path):
        feed(session, id="1", project="web")
        feed(session, id="2", project="api", traceId="abc")
        session.set_filter(project="api")

        path = session.export(day=date(2024, 5, 1))

        assert path == tmp_path / "logs-2024-05-01.json"
        data = json.loads(path.read_text(encoding="utf-8"))
        assert [item["id"] for item in data] == ["2"]
        assert data[0]["traceId"] == "abc"

    def test_export_is_pretty_printed(self, tmp_path):
        path = write_export([make_entry()], tmp_path, date(2024, 1, 2))
        assert "\n  " in path.read_text(encoding="utf-8")

    def test_export_creates_directory(self, tmp_path):
        target = tmp_path / "nested" / "exports"
        path = write_export([], target, date(2024, 1, 2))

        assert path.exists()
        assert json.loads(path.read_text(encoding="utf-8")) == []

    def test_export_defaults_to_today(self, tmp_path):
        path = write_export([make_entry()], tmp_path)
        assert path.name == export_filename(date.today())


class TestReconnect:
    """Test that reconnecting keeps history"""

    def test_buffer_survives_reconnect(self, session, connector):
        listener = MagicMock()

        async def scenario():
            session.subscribe(listener)
            session.start()
            await asyncio.sleep(0.01)
            assert session.connected
            assert listener.call_count == 1

            connector.sockets[0].send(log_envelope(id="before"))
            await asyncio.sleep(0.01)
            assert listener.call_count == 2

            connector.sockets[0].close()
            await asyncio.sleep(0.01)
            assert not session.connected
            assert listener.call_count == 3

            await asyncio.sleep(0.15)
            assert session.connected
            assert listener.call_count == 4

            connector.sockets[1].send(log_envelope(id="after"))
            await asyncio.sleep(0.01)

            assert [entry.id for entry in session.buffer] == ["after", "before"]
            await session.close()

        asyncio.run(scenario())
        assert connector.attempts == 2
        # Closing detaches the listener before the final status flip
        assert listener.call_count == 5
