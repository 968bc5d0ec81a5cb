# Area: Shared Tests
"""Tests for the EventLogger observability hook."""

import io

from party_core._core.event_bus import EventBus
from party_core._shared.event_logger import EventLogger


class TestEventLogger:
    """EventLogger prints every envelope it sees."""

    def test_attach_receives_all_events(self):
        bus = EventBus()
        stream = io.StringIO()
        event_logger = EventLogger(stream=stream, color=False)
        event_logger.attach(bus)

        bus.publish("LIFECYCLE/INIT", gameId="quiz")
        bus.publish("PHASE/ENTER", phaseId="intro")
        bus.publish("ACTION/DISPATCH", action="ADVANCE", phaseId="intro", payload=None)

        lines = stream.getvalue().splitlines()
        assert len(lines) == 3
        assert [e.type for e in event_logger.history] == [
            "LIFECYCLE/INIT", "PHASE/ENTER", "ACTION/DISPATCH",
        ]

    def test_tracks_game_and_phase(self):
        bus = EventBus()
        stream = io.StringIO()
        event_logger = EventLogger(stream=stream, color=False)
        event_logger.attach(bus)

        bus.publish("LIFECYCLE/INIT", gameId="quiz")
        bus.publish("PHASE/ENTER", phaseId="play")
        bus.publish("CONTENT/NEXT", index=1)

        last = stream.getvalue().splitlines()[-1]
        assert "GAME: quiz" in last
        assert "PHASE: play" in last
        assert "CONTENT/NEXT" in last
        assert "index=1" in last

    def test_none_values_omitted(self):
        event_logger = EventLogger(color=False)
        bus = EventBus()
        stream = io.StringIO()
        event_logger.stream = stream
        event_logger.attach(bus)

        bus.publish("ACTION/DISPATCH", action="BACK", payload=None)

        line = stream.getvalue()
        assert "action=BACK" in line
        assert "payload" not in line

    def test_color_by_namespace(self):
        event_logger = EventLogger(color=True)
        bus = EventBus()
        stream = io.StringIO()
        event_logger.stream = stream
        event_logger.attach(bus)

        bus.publish("ERROR", error="boom")

        assert stream.getvalue().startswith("\033[31m")

    def test_detach_stops_output(self):
        bus = EventBus()
        stream = io.StringIO()
        event_logger = EventLogger(stream=stream, color=False)
        detach = event_logger.attach(bus)

        detach()
        bus.publish("PHASE/ENTER", phaseId="intro")

        assert stream.getvalue() == ""
        assert len(bus) == 0

    def test_reattach_does_not_duplicate(self):
        bus = EventBus()
        stream = io.StringIO()
        event_logger = EventLogger(stream=stream, color=False)
        event_logger.attach(bus)
        event_logger.attach(bus)

        bus.publish("PHASE/ENTER", phaseId="intro")

        assert len(stream.getvalue().splitlines()) == 1
