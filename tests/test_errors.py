# Area: Shared Tests
"""Tests for the exception hierarchy."""

from party_core.errors import (
    ConfigValidationError,
    DuplicateModuleError,
    GameLoadError,
    MissingControllerError,
    MissingScreenError,
    ModuleNotReadyError,
    PartyCoreError,
    TransitionError,
)


class TestEventPayloads:
    """Errors render into ERROR envelope payloads."""

    def test_transition_error_payload(self):
        payload = TransitionError("bad move", phase_id="play").to_event_payload()
        assert payload == {"error": "bad move", "kind": "TRANSITION_ERROR", "phase_id": "play"}

    def test_missing_screen_payload(self):
        payload = MissingScreenError("play", "question").to_event_payload()
        assert payload["kind"] == "MISSING_SCREEN"
        assert payload["screen_id"] == "question"
        assert "question" in payload["error"]

    def test_missing_controller_message(self):
        assert str(MissingControllerError("intro")) == "No controller for phase intro"

    def test_duplicate_module_message(self):
        assert str(DuplicateModuleError("a")) == "Module with id a already registered"

    def test_config_validation_collects_errors(self):
        err = ConfigValidationError(["phases: too short", "id: missing"], source="game.json")
        assert err.errors == ["phases: too short", "id: missing"]
        assert "game.json" in str(err)
        assert err.to_event_payload()["validation_errors"] == err.errors

    def test_game_load_error_keeps_cause(self):
        cause = RuntimeError("no content")
        err = GameLoadError("quiz", cause)
        assert err.cause is cause
        assert err.context() == {"game_id": "quiz", "cause": "RuntimeError"}

    def test_all_share_base_class(self):
        for err in (
            ModuleNotReadyError(),
            TransitionError("x"),
            MissingControllerError(None),
        ):
            assert isinstance(err, PartyCoreError)


class TestFormatErrorLog:
    """Tests for the structured log block."""

    def test_block_contains_type_message_and_context(self):
        block = MissingScreenError("play", "question").format_error_log()
        assert "PARTY CORE ERROR" in block
        assert "Error Type:   MISSING_SCREEN" in block
        assert '"screen_id": "question"' in block

    def test_block_without_context(self):
        block = ModuleNotReadyError("not yet").format_error_log()
        assert "Message:      not yet" in block
        assert "CONTEXT" not in block
