"""Command-line interface for beatchart.

Provides commands for:
- generate: Build a rhythm chart from an audio file
- compare: Show how each difficulty charts the same file
- info: Show audio file information
"""

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

app = typer.Typer(
    name="beatchart",
    help="Audio to rhythm-game chart generator",
    rich_markup_mode="markdown",
)
console = Console()


STAGES = ("load", "analyze", "export")


@dataclass
class ChartTimings:
    """Wall-clock seconds spent in each stage of ``generate``."""

    load: float = 0.0
    analyze: float = 0.0
    export: float = 0.0

    @contextmanager
    def measure(self, stage: str) -> Iterator[None]:
        if stage not in STAGES:
            raise ValueError(f"Unknown stage: {stage}")
        start = time.perf_counter()
        try:
            yield
        finally:
            setattr(self, stage, getattr(self, stage) + time.perf_counter() - start)

    @property
    def total(self) -> float:
        return self.load + self.analyze + self.export

    def print_summary(self) -> None:
        console.print("\n[bold]Timing Summary:[/bold]")
        for stage in STAGES:
            console.print(f"  {stage}: {getattr(self, stage):.3f}s")
        console.print(f"  [bold]Total: {self.total:.3f}s[/bold]")

    def to_dict(self) -> Dict[str, float]:
        result = {stage: getattr(self, stage) for stage in STAGES}
        result["total"] = self.total
        return result


def _setup_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


def _load_audio(input_file: Path):
    """Load audio or exit with an error message."""
    from .input import AudioLoader

    if not input_file.exists():
        console.print(f"[red]Error: File not found: {input_file}[/red]")
        raise typer.Exit(1)

    loader = AudioLoader()
    try:
        audio, sr = loader.load(str(input_file))
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    return loader, audio, sr


def _make_generator(difficulty: str):
    from .generator import ChartGenerator

    try:
        return ChartGenerator(difficulty)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def generate(
    input_file: Path = typer.Argument(..., help="Input audio file (WAV, MP3, FLAC, ...)"),
    difficulty: str = typer.Option(
        "medium", "-d", "--difficulty", help="Chart difficulty: easy/medium/hard"
    ),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Output chart file path (JSON)"
    ),
    midi: Optional[Path] = typer.Option(
        None, "--midi", help="Also write the chart as a MIDI drum track"
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose", help="Verbose output"
    ),
    timing: bool = typer.Option(
        False, "--timing", help="Show per-stage timing"
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Output results as JSON (for scripting)"
    ),
):
    """Generate a rhythm chart from an audio file.

    **Examples:**

        beatchart generate song.wav

        beatchart generate song.mp3 -d hard -o hard.json --midi hard.mid
    """
    from .core import InvalidAudioError
    from .output import ChartExporter, MIDIExporter

    _setup_logging(verbose)
    generator = _make_generator(difficulty)
    timings = ChartTimings()

    if output is None:
        output = input_file.parent / f"{input_file.stem}.{generator.profile.name}.json"

    if not json_output:
        console.print(f"[blue]Loading audio:[/blue] {input_file}")
    with timings.measure("load"):
        loader, audio, sr = _load_audio(input_file)
    duration = loader.get_duration(audio, sr)

    if verbose and not json_output:
        console.print(f"  Duration: {duration:.2f}s, Sample rate: {sr}Hz")

    if not json_output:
        console.print(f"[blue]Generating {generator.profile.name} chart...[/blue]")
    with timings.measure("analyze"):
        try:
            analysis = generator.analyze(audio, sr)
        except InvalidAudioError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(1)

    if not json_output:
        tempo_note = " (default)" if analysis.tempo.is_fallback else ""
        console.print(f"  Detected {len(analysis.onsets)} onsets")
        console.print(f"  Tempo: {analysis.tempo.bpm:.1f} BPM{tempo_note}")
        console.print(
            f"  Removed: {analysis.cleanup_stats.removed_duplicates} duplicates, "
            f"{analysis.cleanup_stats.removed_too_close} too close"
        )
        console.print(f"  Chart notes: {analysis.note_count}")

    with timings.measure("export"):
        ChartExporter().export(
            analysis.notes,
            str(output),
            difficulty=generator.profile.name,
            beat_period=analysis.tempo.beat_period,
        )
        if midi is not None:
            MIDIExporter(tempo=analysis.tempo.bpm).export(analysis.notes, str(midi))

    if json_output:
        result = {
            "input": str(input_file),
            "output": str(output),
            "difficulty": generator.profile.name,
            "notes_count": analysis.note_count,
            "onsets_count": len(analysis.onsets),
            "bpm": analysis.tempo.bpm,
            "tempo_fallback": analysis.tempo.is_fallback,
            "duration": duration,
        }
        if midi is not None:
            result["midi"] = str(midi)
        if timing:
            result["timing"] = timings.to_dict()
        console.print_json(data=result)
        return

    console.print(f"[green]Chart written to:[/green] {output}")
    if midi is not None:
        console.print(f"[green]MIDI written to:[/green] {midi}")

    if verbose and analysis.notes:
        _show_notes_table(analysis.notes[:20])
        if analysis.note_count > 20:
            console.print(f"   [dim]... and {analysis.note_count - 20} more notes[/dim]")

    if timing:
        timings.print_summary()


@app.command()
def compare(
    input_file: Path = typer.Argument(..., help="Input audio file"),
):
    """Chart a file at every difficulty and compare the results."""
    from .core import Difficulty, InvalidAudioError
    from .generator import ChartGenerator

    _, audio, sr = _load_audio(input_file)

    try:
        analyses = [ChartGenerator(d).analyze(audio, sr) for d in Difficulty]
    except InvalidAudioError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"Difficulty Comparison: {input_file.name}")
    table.add_column("Difficulty", style="cyan")
    table.add_column("Onsets", style="green")
    table.add_column("Notes", style="yellow")
    table.add_column("Strong", style="magenta")
    table.add_column("BPM", style="blue")
    table.add_column("Min gap (s)", style="white")

    for analysis in analyses:
        table.add_row(
            analysis.difficulty.name,
            str(len(analysis.onsets)),
            str(analysis.note_count),
            str(analysis.strong_count),
            f"{analysis.tempo.bpm:.1f}",
            f"{analysis.difficulty.min_separation:.2f}",
        )

    console.print(table)


@app.command()
def info(
    input_file: Path = typer.Argument(..., help="Input audio file"),
):
    """Show information about an audio file."""
    from .generator import ChartGenerator

    loader, audio, sr = _load_audio(input_file)

    console.print(f"\n[bold]Audio Info:[/bold] {input_file.name}")
    console.print(f"  Duration: {loader.get_duration(audio, sr):.2f} seconds")
    console.print(f"  Sample rate: {sr} Hz")
    console.print(f"  Samples: {len(audio):,}")

    if len(audio) == 0:
        return

    analysis = ChartGenerator().analyze(audio, sr)
    tempo_note = " (default)" if analysis.tempo.is_fallback else ""
    console.print(f"  Estimated tempo: {analysis.tempo.bpm:.1f} BPM{tempo_note}")
    console.print(f"  Onsets (medium): {len(analysis.onsets)}")


def _show_notes_table(notes: List):
    """Display chart notes in a table."""
    table = Table(title="Chart Notes")
    table.add_column("Time (s)", style="green")
    table.add_column("Lane", style="cyan")
    table.add_column("Type", style="magenta")

    for note in notes:
        table.add_row(
            f"{note.time:.3f}",
            f"{note.lane.symbol} {note.lane.value}",
            "strong" if note.is_strong else "weak",
        )

    console.print(table)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
