"""Turn a free-form model reply into a narrative and structured suggestions.

Where: src/tagsmith/features/suggestions/usecases/reply_parser.py
What: Tolerant, line-oriented scan of the reply: locate the suggestions
      section, group its lines into per-field blocks, and pull a value,
      confidence, and reason out of each block.
Why: Models follow the requested ``FIELD: value | confidence | reason`` shape
     only loosely, so malformed parts are dropped instead of failing the run.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Final

from tagsmith.platform.logging import logger
from tagsmith.shared.track_metadata import TagField, TrackMetadata

from ..domain.models import Confidence, MetadataSuggestion, ParsedReply
from .prompt_builder import NO_SUGGESTIONS_MARKER, SUGGESTIONS_DELIMITER, UNKNOWN_MARKER

# A line holding nothing but the keyword (plus markdown); the exact delimiter wins.
_STANDALONE_HEADING: Final[re.Pattern[str]] = re.compile(
    r"^[ \t>#*_=\-]*suggestions[ \t]*:?[ \t*_:\r]*$",
    re.IGNORECASE | re.MULTILINE,
)
# A line that starts (after markdown decoration or numbering) with the keyword.
_HEADING: Final[re.Pattern[str]] = re.compile(
    r"^[ \t>#*_=\-]*(?:\d+[.)][ \t]*)?[*_ \t]*suggestions\b[^\n]*$",
    re.IGNORECASE | re.MULTILINE,
)
_INLINE_DELIMITER: Final[re.Pattern[str]] = re.compile(r"suggestions\s*:", re.IGNORECASE)
_HEADING_KEYWORD: Final[re.Pattern[str]] = re.compile(r"suggestions\b", re.IGNORECASE)

_LINE_PREFIX: Final[re.Pattern[str]] = re.compile(r"^\s*(?:(?:[-*•+>]|\d+[.)]|#+)\s*)*")
_LABELLED_LINE: Final[re.Pattern[str]] = re.compile(
    r"^[*_`\"']*(?P<label>[A-Za-z][A-Za-z _.#]{0,30}?)[*_`\"']*"
    r"\s*(?:[:=]|->|→|\s[-–—]\s)\s*(?P<rest>.*)$"
)
_VALUE_SEPARATOR: Final[re.Pattern[str]] = re.compile(r"\s+(?:--|-|–|—)\s+")
_CONFIDENCE_PARENTHETICAL: Final[re.Pattern[str]] = re.compile(
    r"\s*[(\[](?P<inner>[^()\[\]]*\b(?:high|medium|low)\b[^()\[\]]*)[)\]]\s*$",
    re.IGNORECASE,
)
_PURE_CONFIDENCE: Final[re.Pattern[str]] = re.compile(
    r"^\W*(?:confidence\W*)?(?:high|medium|low)(?:\W*confidence)?\W*$",
    re.IGNORECASE,
)
_REASON_LABEL: Final[re.Pattern[str]] = re.compile(
    r"^(?:reason|rationale|why|because)\s*[:=\-]\s*", re.IGNORECASE
)

_CONFIDENCE_LABELS: Final[frozenset[str]] = frozenset({"confidence", "confidence level"})
_REASON_LABELS: Final[frozenset[str]] = frozenset({"reason", "rationale", "why", "because"})
_VALUE_QUOTES: Final[str] = "\"'`*_“”‘’ \t"
_PLACEHOLDER_VALUES: Final[frozenset[str]] = frozenset(
    {UNKNOWN_MARKER.lower(), "n/a", "na", "none", "-", "null", "(missing)"}
)


@dataclass(slots=True)
class _Block:
    """Lines collected for one candidate suggestion."""

    tag_field: TagField
    value_text: str
    confidence_texts: list[str] = field(default_factory=list)
    reason_texts: list[str] = field(default_factory=list)
    extra_texts: list[str] = field(default_factory=list)


def _find_standalone_heading(reply: str) -> re.Match[str] | None:
    candidates = list(_STANDALONE_HEADING.finditer(reply))
    for match in candidates:
        if match.group(0).strip(" \t\r>#*_=-") == SUGGESTIONS_DELIMITER:
            return match
    return candidates[0] if candidates else None


def split_reply(reply: str) -> tuple[str, str]:
    """Split ``reply`` into ``(narrative, suggestions_region)``.

    A line holding only the keyword is preferred, the exact ``SUGGESTIONS:``
    first. Failing that, the first line beginning with ``suggestions`` wins,
    then the first ``suggestions:`` anywhere. Without any of these, the whole
    reply is narrative and the region is empty.
    """

    standalone = _find_standalone_heading(reply)
    if standalone is not None:
        return reply[: standalone.start()].strip(), reply[standalone.end():]

    heading = _HEADING.search(reply)
    if heading is not None:
        line = heading.group(0)
        keyword = _HEADING_KEYWORD.search(line)
        tail = line[keyword.end():] if keyword else ""
        tail = tail.lstrip(" \t*_#:=-")
        region = tail + reply[heading.end():]
        return reply[: heading.start()].strip(), region

    inline = _INLINE_DELIMITER.search(reply)
    if inline is not None:
        return reply[: inline.start()].strip(), reply[inline.end():]

    return reply.strip(), ""


def _label_of(stripped: str) -> tuple[str, str] | None:
    match = _LABELLED_LINE.match(stripped)
    if match is None:
        return None
    label = " ".join(match.group("label").strip().lower().split())
    return label, match.group("rest").strip()


def _tokenize(region: str) -> list[_Block]:
    blocks: list[_Block] = []
    current: _Block | None = None

    for raw_line in region.splitlines():
        if not raw_line.strip():
            current = None
            continue

        indented = raw_line[:1] in {" ", "\t"}
        stripped = _LINE_PREFIX.sub("", raw_line).strip()
        if not stripped:
            continue

        labelled = _label_of(stripped)
        if labelled is not None:
            label, rest = labelled
            tag_field = TagField.from_label(label)
            if tag_field is not None:
                current = _Block(tag_field=tag_field, value_text=rest)
                blocks.append(current)
                continue
            if current is not None and label in _CONFIDENCE_LABELS:
                current.confidence_texts.append(rest)
                continue
            if current is not None and label in _REASON_LABELS:
                current.reason_texts.append(rest)
                continue
            if "|" in rest:
                logger.warning("Dropping suggestion for unrecognized field %r", label)
                current = None
                continue

        if current is not None and (indented or (labelled is None and not current.value_text)):
            if not current.value_text:
                current.value_text = stripped
            else:
                current.extra_texts.append(stripped)
            continue

        if stripped.strip(_VALUE_QUOTES).upper() != NO_SUGGESTIONS_MARKER:
            logger.debug("Skipping unmatched suggestion line: %r", stripped)
        current = None

    return blocks


def _clean_value(text: str) -> str:
    return text.strip().strip(_VALUE_QUOTES).rstrip(",;").strip(_VALUE_QUOTES)


def _pick_confidence(block: _Block, segments: list[str]) -> tuple[Confidence, int | None]:
    """Return the confidence and the index of a segment consumed by it."""

    for text in block.confidence_texts:
        found = Confidence.find(text)
        if found is not None:
            return found, None

    for index, segment in enumerate(segments):
        if _PURE_CONFIDENCE.match(segment):
            return Confidence.from_text(segment), index

    for text in [*segments, *block.reason_texts, *block.extra_texts]:
        found = Confidence.find(text)
        if found is not None:
            return found, None

    return Confidence.LOW, None


def _extract(block: _Block, snapshot: TrackMetadata) -> MetadataSuggestion | None:
    text = block.value_text
    if "|" in text:
        parts = [part.strip() for part in text.split("|")]
        value_part, segments = parts[0], [part for part in parts[1:] if part]
    else:
        pieces = _VALUE_SEPARATOR.split(text)
        value_part = pieces[0]
        segments = [piece.strip() for piece in pieces[1:] if piece.strip()]

    parenthetical = _CONFIDENCE_PARENTHETICAL.search(value_part)
    if parenthetical is not None:
        segments.insert(0, parenthetical.group("inner").strip())
        value_part = value_part[: parenthetical.start()]

    value = _clean_value(value_part)
    if not value or value.lower() in _PLACEHOLDER_VALUES:
        logger.debug("Skipping %s suggestion without a usable value", block.tag_field.value)
        return None

    confidence, consumed = _pick_confidence(block, segments)
    reason_parts = [
        _REASON_LABEL.sub("", segment).strip()
        for index, segment in enumerate(segments)
        if index != consumed
    ]
    reason_parts.extend(text.strip() for text in block.reason_texts)
    reason_parts.extend(text.strip() for text in block.extra_texts)
    reason = " ".join(part for part in reason_parts if part)

    return MetadataSuggestion(
        field=block.tag_field,
        current_value=snapshot.value_of(block.tag_field),
        suggested_value=value,
        confidence=confidence,
        reason=reason,
    )


def parse_suggestions(region: str, snapshot: TrackMetadata) -> tuple[MetadataSuggestion, ...]:
    """Extract suggestions from the text after the delimiter.

    Only the first suggestion per field is kept; reply order is priority order.
    """

    suggestions: list[MetadataSuggestion] = []
    seen: set[TagField] = set()
    for block in _tokenize(region):
        if block.tag_field in seen:
            logger.debug("Ignoring repeated suggestion for %s", block.tag_field.value)
            continue
        suggestion = _extract(block, snapshot)
        if suggestion is None:
            continue
        seen.add(block.tag_field)
        suggestions.append(suggestion)
    return tuple(suggestions)


def parse_reply(reply: str, snapshot: TrackMetadata) -> ParsedReply:
    """Parse a model reply; never raises for any text input.

    Args:
        reply: Raw model reply.
        snapshot: Metadata the prompt was built from; supplies ``current_value``.

    Returns:
        ParsedReply: Narrative text and suggestions in reply order.
    """

    narrative, region = split_reply(reply or "")
    return ParsedReply(narrative=narrative, suggestions=parse_suggestions(region, snapshot))


__all__ = ["parse_reply", "parse_suggestions", "split_reply"]
