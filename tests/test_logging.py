"""
Tests for the structlog configuration.
"""

from core.config import settings
from core.logging import add_service_context, configure_logging, get_logger


def test_service_context_is_added():
    """Test that events are stamped with the service name and backend."""
    event = add_service_context(None, "info", {"event": "Item created"})

    assert event["service"] == settings.app_name
    assert event["storage_backend"] == settings.storage_backend


def test_service_context_keeps_explicit_values():
    """Test that a caller-bound service value is not overwritten."""
    event = add_service_context(None, "info", {"event": "x", "service": "other"})

    assert event["service"] == "other"


def test_configured_logger_emits_service(capsys):
    """Test that a configured logger writes the service name."""
    configure_logging()

    get_logger(__name__).info("Item created", item_id="abc")

    out = capsys.readouterr().out
    assert "Item created" in out
    assert settings.app_name in out
