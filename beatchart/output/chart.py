"""Chart file export (JSON)."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..core import NoteEvent


class ChartExporter:
    """Write and read charts as JSON documents."""

    def __init__(self, indent: Optional[int] = 2):
        self.indent = indent

    def to_dict(
        self,
        notes: List[NoteEvent],
        difficulty: str = "medium",
        beat_period: Optional[float] = None,
    ) -> Dict[str, Any]:
        """Build the JSON-serializable chart document."""
        return {
            "difficulty": difficulty,
            "beat_period": beat_period,
            "bpm": 60.0 / beat_period if beat_period else None,
            "note_count": len(notes),
            "notes": [n.to_dict() for n in notes],
        }

    def export(
        self,
        notes: List[NoteEvent],
        output_path: str,
        difficulty: str = "medium",
        beat_period: Optional[float] = None,
    ) -> None:
        """
        Export notes to a chart file.

        Args:
            notes: Chart notes
            output_path: Path to output JSON file
            difficulty: Difficulty name stored in the file
            beat_period: Estimated beat period stored in the file
        """
        document = self.to_dict(notes, difficulty=difficulty, beat_period=beat_period)

        # Ensure output directory exists
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(document, f, indent=self.indent)

    def load(self, path: str) -> List[NoteEvent]:
        """Read the notes back from a chart file."""
        with open(path, "r", encoding="utf-8") as f:
            document = json.load(f)
        return [NoteEvent.from_dict(n) for n in document.get("notes", [])]
