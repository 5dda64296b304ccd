"""Summary: Convert SuggestionsReport values to and from the durable JSON shape.
Why: Reports written by any version must load back field-for-field in later ones."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Final, cast

from tagsmith.platform.logging import logger
from tagsmith.shared.errors import ReportParseError
from tagsmith.shared.track_metadata import TagField, TrackMetadata

from .models import Confidence, MetadataSuggestion, SuggestionsReport

_REQUIRED_KEYS: Final[tuple[str, ...]] = (
    "file_path",
    "timestamp",
    "current_metadata",
    "suggestions",
)
# Reports written before the rename stored the narrative under this key.
_LEGACY_ANALYSIS_KEY: Final[str] = "llm_analysis"


def suggestion_to_dict(suggestion: MetadataSuggestion) -> dict[str, Any]:
    return {
        "field": suggestion.field.value,
        "current_value": suggestion.current_value,
        "suggested_value": suggestion.suggested_value,
        "confidence": suggestion.confidence.value,
        "reason": suggestion.reason,
    }


def report_to_dict(report: SuggestionsReport) -> dict[str, Any]:
    """Serialise ``report`` using the stable artifact keys."""

    return {
        "file_path": report.file_path,
        "timestamp": report.timestamp,
        "current_metadata": report.current_metadata.to_dict(),
        "suggestions": [suggestion_to_dict(s) for s in report.suggestions],
        "raw_analysis": report.raw_analysis,
    }


def report_from_dict(data: object) -> SuggestionsReport:
    """Rebuild a report from parsed JSON.

    Raises:
        ReportParseError: On missing keys, wrong types, or invalid values.
    """

    if not isinstance(data, dict):
        raise ReportParseError("Suggestions report must be a JSON object")
    payload = cast(dict[str, Any], data)

    missing = [key for key in _REQUIRED_KEYS if key not in payload]
    if missing:
        raise ReportParseError(f"Suggestions report is missing keys: {', '.join(missing)}")

    file_path = _require_str(payload, "file_path")
    if not file_path.strip():
        raise ReportParseError("'file_path' must not be empty")

    timestamp = _require_str(payload, "timestamp")
    try:
        _ = datetime.fromisoformat(timestamp)
    except ValueError as exc:
        raise ReportParseError(f"'timestamp' is not ISO-8601: {timestamp!r}") from exc

    metadata = _metadata_from_payload(payload["current_metadata"])

    raw_suggestions = payload["suggestions"]
    if not isinstance(raw_suggestions, list):
        raise ReportParseError("'suggestions' must be an array")
    suggestions = tuple(
        suggestion
        for index, item in enumerate(cast(list[object], raw_suggestions))
        if (suggestion := _suggestion_from_payload(index, item)) is not None
    )

    raw_analysis: object = payload.get("raw_analysis", payload.get(_LEGACY_ANALYSIS_KEY, ""))
    if raw_analysis is None:
        raw_analysis = ""
    if not isinstance(raw_analysis, str):
        raise ReportParseError("'raw_analysis' must be a string")

    return SuggestionsReport(
        file_path=file_path,
        timestamp=timestamp,
        current_metadata=metadata,
        suggestions=suggestions,
        raw_analysis=raw_analysis,
    )


def _require_str(payload: dict[str, Any], key: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str):
        raise ReportParseError(f"'{key}' must be a string")
    return value


def _metadata_from_payload(raw: object) -> TrackMetadata:
    if not isinstance(raw, dict):
        raise ReportParseError("'current_metadata' must be an object")
    mapping = cast(dict[str, Any], raw)

    for tag_field in TagField:
        value = mapping.get(tag_field.value)
        if value is None:
            continue
        if tag_field.is_numeric:
            if isinstance(value, bool) or not isinstance(value, (int, str)):
                raise ReportParseError(f"'current_metadata.{tag_field.value}' must be a number")
            if isinstance(value, str) and value.strip() and TrackMetadata(
                **{tag_field.value: value}
            ).value_of(tag_field) is None:
                raise ReportParseError(
                    f"'current_metadata.{tag_field.value}' is not numeric: {value!r}"
                )
        elif not isinstance(value, str):
            raise ReportParseError(f"'current_metadata.{tag_field.value}' must be a string")

    return TrackMetadata.from_dict(mapping)


def _suggestion_from_payload(index: int, raw: object) -> MetadataSuggestion | None:
    where = f"suggestions[{index}]"
    if not isinstance(raw, dict):
        raise ReportParseError(f"{where} must be an object")
    item = cast(dict[str, Any], raw)

    for key in ("field", "suggested_value", "confidence"):
        if key not in item:
            raise ReportParseError(f"{where} is missing '{key}'")

    field_name = item["field"]
    if not isinstance(field_name, str):
        raise ReportParseError(f"{where}.field must be a string")
    tag_field = TagField.from_label(field_name)
    if tag_field is None:
        logger.warning("Dropping suggestion for unrecognized field %r in %s", field_name, where)
        return None

    current_value = item.get("current_value")
    if isinstance(current_value, (int, float)) and not isinstance(current_value, bool):
        current_value = str(current_value)
    if current_value is not None and not isinstance(current_value, str):
        raise ReportParseError(f"{where}.current_value must be a string or null")

    suggested_value = item["suggested_value"]
    if isinstance(suggested_value, int) and not isinstance(suggested_value, bool):
        suggested_value = str(suggested_value)
    if not isinstance(suggested_value, str) or not suggested_value.strip():
        raise ReportParseError(f"{where}.suggested_value must be a non-empty string")

    confidence_raw = item["confidence"]
    if not isinstance(confidence_raw, str):
        raise ReportParseError(f"{where}.confidence must be a string")
    try:
        confidence = Confidence.parse(confidence_raw)
    except ValueError as exc:
        raise ReportParseError(f"{where}.confidence: {exc}") from exc

    reason = item.get("reason", "")
    if reason is None:
        reason = ""
    if not isinstance(reason, str):
        raise ReportParseError(f"{where}.reason must be a string")

    return MetadataSuggestion(
        field=tag_field,
        current_value=current_value,
        suggested_value=suggested_value,
        confidence=confidence,
        reason=reason,
    )


__all__ = ["report_from_dict", "report_to_dict", "suggestion_to_dict"]
