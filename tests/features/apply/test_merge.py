"""Tests for folding suggestions into a snapshot and for suggestion filters."""

from __future__ import annotations

import logging

import pytest

from tagsmith.features.apply.domain.models import (
    accept_all,
    all_of,
    confidence_at_least,
    only_fields,
)
from tagsmith.features.apply.usecases.merge import merge_suggestions
from tagsmith.features.suggestions.domain.models import Confidence, MetadataSuggestion
from tagsmith.shared.track_metadata import TagField, TrackMetadata


def _suggestion(
    tag_field: TagField, value: str, confidence: Confidence = Confidence.HIGH
) -> MetadataSuggestion:
    return MetadataSuggestion(
        field=tag_field, current_value=None, suggested_value=value, confidence=confidence
    )


def test_merge_applies_year_and_genre(grateful_dead_metadata: TrackMetadata) -> None:
    outcome = merge_suggestions(
        grateful_dead_metadata,
        [_suggestion(TagField.YEAR, "1970"), _suggestion(TagField.GENRE, "Folk Rock")],
    )

    assert outcome.metadata.year == 1970
    assert outcome.metadata.value_of(TagField.YEAR) == "1970"
    assert outcome.metadata.genre == "Folk Rock"
    assert outcome.metadata.title == grateful_dead_metadata.title
    assert outcome.metadata.artist == grateful_dead_metadata.artist
    assert outcome.metadata.album == grateful_dead_metadata.album
    assert outcome.metadata.track_number == 2
    assert len(outcome.applied) == 2
    assert outcome.skipped == ()
    assert grateful_dead_metadata.year is None


def test_merge_skips_unstorable_numeric_value(
    grateful_dead_metadata: TrackMetadata, caplog: pytest.LogCaptureFixture
) -> None:
    bad = _suggestion(TagField.YEAR, "early seventies")

    with caplog.at_level(logging.WARNING, logger="tagsmith"):
        outcome = merge_suggestions(grateful_dead_metadata, [bad])

    assert outcome.metadata == grateful_dead_metadata
    assert outcome.skipped == (bad,)
    assert "early seventies" in caplog.text


def test_merge_with_no_suggestions_is_identity(grateful_dead_metadata: TrackMetadata) -> None:
    assert merge_suggestions(grateful_dead_metadata, []).metadata == grateful_dead_metadata


def test_filters_compose() -> None:
    low_genre = _suggestion(TagField.GENRE, "Rock", Confidence.LOW)
    high_year = _suggestion(TagField.YEAR, "1970", Confidence.HIGH)
    medium_album = _suggestion(TagField.ALBUM, "American Beauty", Confidence.MEDIUM)

    at_least_medium = confidence_at_least(Confidence.MEDIUM)
    year_only = only_fields([TagField.YEAR])
    combined = all_of(at_least_medium, year_only)

    assert accept_all(low_genre)
    assert [at_least_medium(s) for s in (low_genre, high_year, medium_album)] == [False, True, True]
    assert [year_only(s) for s in (low_genre, high_year)] == [False, True]
    assert [combined(s) for s in (low_genre, high_year, medium_album)] == [False, True, False]


def test_merge_reports_only_fields_whose_value_changes(
    grateful_dead_metadata: TrackMetadata,
) -> None:
    outcome = merge_suggestions(
        grateful_dead_metadata,
        [
            _suggestion(TagField.TRACK_NUMBER, "02"),
            _suggestion(TagField.GENRE, "Folk Rock"),
            _suggestion(TagField.GENRE, "Americana"),
        ],
    )

    assert len(outcome.applied) == 3
    assert outcome.changed_fields == (TagField.GENRE,)
    assert outcome.metadata.genre == "Americana"
