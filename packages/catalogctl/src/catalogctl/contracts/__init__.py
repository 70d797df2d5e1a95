"""Structured log event contract."""

from .events import LOG_EVENT_SCHEMA, load_event_schema, validate_event

__all__ = ["LOG_EVENT_SCHEMA", "load_event_schema", "validate_event"]
