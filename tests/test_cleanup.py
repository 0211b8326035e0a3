"""Tests for note deduplication and spacing."""

import pytest

from beatchart.core import Lane, LaneNote
from beatchart.processing import NoteCleanup


def note(time, salience=0.5, lane=Lane.UP):
    return LaneNote(time=time, lane=lane, strength=1.0, salience=salience)


class TestDeduplicate:
    """Tests for NoteCleanup.deduplicate."""

    def test_higher_salience_wins(self):
        notes = [note(1.0, 0.1, Lane.UP), note(1.0004, 0.5, Lane.DOWN)]

        result = NoteCleanup().deduplicate(notes)

        assert len(result) == 1
        assert result[0].lane == Lane.DOWN
        assert result[0].salience == 0.5

    def test_tie_keeps_first(self):
        notes = [note(2.0, 0.3, Lane.LEFT), note(2.0, 0.3, Lane.RIGHT)]

        result = NoteCleanup().deduplicate(notes)

        assert [n.lane for n in result] == [Lane.LEFT]

    def test_lower_salience_later_is_dropped(self):
        notes = [note(1.0, 0.9, Lane.UP), note(1.0, 0.2, Lane.DOWN)]

        assert NoteCleanup().deduplicate(notes)[0].lane == Lane.UP

    def test_different_milliseconds_kept(self):
        notes = [note(1.0), note(1.002)]

        assert len(NoteCleanup().deduplicate(notes)) == 2

    def test_result_sorted(self):
        notes = [note(3.0), note(1.0), note(2.0)]

        result = NoteCleanup().deduplicate(notes)

        assert [n.time for n in result] == [1.0, 2.0, 3.0]


class TestMinSeparation:
    """Tests for the greedy spacing filter."""

    def test_drops_notes_too_close_to_last_kept(self):
        notes = [note(t) for t in (0.0, 0.1, 0.2, 0.4)]

        result = NoteCleanup(min_separation=0.15).enforce_min_separation(notes)

        assert [n.time for n in result] == [0.0, 0.2, 0.4]

    def test_spacing_measured_from_last_kept_note(self):
        notes = [note(t) for t in (0.0, 0.125, 0.25, 0.375, 0.5, 0.625)]

        result = NoteCleanup(min_separation=0.25).enforce_min_separation(notes)

        assert [n.time for n in result] == [0.0, 0.25, 0.5]

    def test_first_note_always_kept(self):
        result = NoteCleanup(min_separation=10.0).enforce_min_separation([note(5.0), note(6.0)])

        assert [n.time for n in result] == [5.0]

    def test_override(self):
        notes = [note(0.0), note(0.1)]

        assert len(NoteCleanup(min_separation=0.3).enforce_min_separation(notes, 0.05)) == 2

    def test_empty(self):
        assert NoteCleanup().enforce_min_separation([]) == []


class TestCleanup:
    """Tests for the combined cleanup pass."""

    def test_stats(self):
        notes = [note(0.0), note(0.0, 0.9), note(0.05), note(0.5)]

        result, stats = NoteCleanup(min_separation=0.15).cleanup(notes, return_stats=True)

        assert [n.time for n in result] == [0.0, 0.5]
        assert result[0].salience == 0.9
        assert stats.original_count == 4
        assert stats.removed_duplicates == 1
        assert stats.removed_too_close == 1
        assert stats.final_count == 2
        assert stats.total_removed == 2

    def test_without_stats(self):
        assert NoteCleanup().cleanup([]) == []
