from __future__ import annotations

import pytest

from yaml_edit.runtime import telemetry


def test_configure_rejects_config_and_preset_together() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="development")


def test_configure_rejects_unknown_preset() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="nonexistent")


def test_get_logger_is_cached() -> None:
    assert telemetry.get_logger("yaml_edit.test") is telemetry.get_logger("yaml_edit.test")


def test_span_records_metadata_and_reraises() -> None:
    with pytest.raises(KeyError):
        with telemetry.span("test::span", metadata={"ops": 2}) as handle:
            handle.add_metadata("stage", "before")
            raise KeyError("boom")

    assert handle.metadata == {"ops": "2", "stage": "before"}


def test_record_event_accepts_payload() -> None:
    telemetry.record_event("test::event", data={"lines": 3})
