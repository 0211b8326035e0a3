"""MIDI export functionality."""

import pretty_midi
from typing import Dict, List
from pathlib import Path

from ..core import Lane, NoteEvent

# General MIDI percussion keys, so a chart can be auditioned as a drum track
LANE_PITCHES: Dict[Lane, int] = {
    Lane.UP: 38,  # Acoustic Snare
    Lane.DOWN: 36,  # Bass Drum 1
    Lane.LEFT: 42,  # Closed Hi-Hat
    Lane.RIGHT: 46,  # Open Hi-Hat
}


class MIDIExporter:
    """Export chart notes to MIDI format."""

    def __init__(
        self,
        tempo: float = 120.0,
        note_length: float = 0.1,
        strong_velocity: int = 110,
        weak_velocity: int = 70,
    ):
        """
        Initialize MIDIExporter.

        Args:
            tempo: Tempo in BPM
            note_length: Duration of each exported note in seconds
            strong_velocity: Velocity for up/down lane notes
            weak_velocity: Velocity for left/right lane notes
        """
        self.tempo = tempo
        self.note_length = note_length
        self.strong_velocity = strong_velocity
        self.weak_velocity = weak_velocity

    def export(self, notes: List[NoteEvent], output_path: str) -> None:
        """
        Export notes to MIDI file.

        Args:
            notes: Chart notes
            output_path: Path to output MIDI file
        """
        midi = self.notes_to_pretty_midi(notes)

        # Ensure output directory exists
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)

        midi.write(output_path)

    def notes_to_pretty_midi(self, notes: List[NoteEvent]) -> pretty_midi.PrettyMIDI:
        """Convert notes to PrettyMIDI object without saving."""
        midi = pretty_midi.PrettyMIDI(initial_tempo=self.tempo)

        instrument = pretty_midi.Instrument(program=0, is_drum=True, name="Chart")

        for note in notes:
            instrument.notes.append(
                pretty_midi.Note(
                    velocity=self.strong_velocity if note.is_strong else self.weak_velocity,
                    pitch=LANE_PITCHES[note.lane],
                    start=note.time,
                    end=note.time + self.note_length,
                )
            )

        midi.instruments.append(instrument)
        return midi
