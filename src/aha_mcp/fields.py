"""Split update payloads into standard attributes and custom fields.

The Aha! REST API accepts a record's native attributes at the top level of the
record object and everything else under a nested `custom_fields` object:

    {"feature": {"name": "...", "due_date": "...", "custom_fields": {"go_live_date": "..."}}}

Callers pass one flat mapping; membership in the standard name set decides
where each key goes.
"""
from typing import Any, Mapping

from pydantic import BaseModel, Field


# Native feature attributes from the Aha! API documentation
STANDARD_FEATURE_FIELDS: frozenset[str] = frozenset({
    "name", "workflow_kind", "workflow_status", "release", "description",
    "created_by", "assigned_to_user", "tags",
    "initial_estimate_text", "detailed_estimate_text", "remaining_estimate_text",
    "initial_estimate", "detailed_estimate", "remaining_estimate",
    "start_date", "due_date", "release_phase", "initiative", "epic",
    "progress_source", "progress", "team", "team_workflow_status",
    "iteration", "program_increment",
})

# Native release attributes from the Aha! API documentation
STANDARD_RELEASE_FIELDS: frozenset[str] = frozenset({
    "name", "start_date", "release_date", "development_started_on",
    "external_release_date", "external_date_resolution", "parking_lot",
    "owner", "theme", "workflow_status",
})

CUSTOM_FIELDS_KEY = "custom_fields"


class FieldPartition(BaseModel):
    """An update payload split at the standard/custom boundary."""

    standard: dict[str, Any] = Field(default_factory=dict)
    extension: dict[str, Any] = Field(default_factory=dict)

    def to_body(self, wrapper: str) -> dict[str, Any]:
        """Build the mutation body, e.g. {"feature": {..., "custom_fields": {...}}}.

        `custom_fields` is left out entirely when there are no extension fields.
        """
        record: dict[str, Any] = dict(self.standard)
        if self.extension:
            record[CUSTOM_FIELDS_KEY] = dict(self.extension)
        return {wrapper: record}


def partition_fields(
    fields: Mapping[str, Any],
    standard_names: frozenset[str] = STANDARD_FEATURE_FIELDS,
) -> FieldPartition:
    """Partition a flat payload by membership in `standard_names`."""
    partition = FieldPartition()
    for key, value in fields.items():
        if key in standard_names:
            partition.standard[key] = value
        else:
            partition.extension[key] = value
    return partition
