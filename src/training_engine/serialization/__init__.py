"""Serialization module — convert engine results to JSON-safe records."""

from training_engine.serialization.records import to_json_string, to_record

__all__ = ["to_json_string", "to_record"]
