"""End-to-end tests for chart generation."""

import numpy as np
import pytest

from beatchart import (
    ChartGenerator,
    Difficulty,
    DifficultyProfile,
    InvalidAudioError,
    Lane,
    generate_level,
    get_profile,
)
from beatchart.core import OnsetCandidate
from beatchart.processing import LaneAssigner, NoteCleanup, Quantizer
from conftest import SR, HOP

DIFFICULTIES = ["easy", "medium", "hard"]


class TestScenarios:
    """Whole-pipeline behaviour on synthetic signals."""

    @pytest.mark.parametrize("difficulty", DIFFICULTIES)
    def test_silence_gives_empty_chart(self, silence, difficulty):
        assert generate_level(silence, SR, difficulty) == []

    @pytest.mark.parametrize("difficulty", DIFFICULTIES)
    def test_single_burst_gives_one_strong_note(self, single_burst, difficulty):
        analysis = ChartGenerator(difficulty).analyze(single_burst, SR)

        assert len(analysis.onsets) == 1
        assert len(analysis.notes) == 1
        note = analysis.notes[0]
        assert note.time == pytest.approx(11 * HOP / SR)
        assert note.lane == Lane.DOWN
        assert note.is_strong

    def test_single_onset_uses_default_tempo(self, single_burst):
        analysis = ChartGenerator().analyze(single_burst, SR)

        assert analysis.tempo.is_fallback
        assert analysis.tempo.beat_period == 0.5
        assert analysis.quantized[0].time == analysis.onsets[0].time

    def test_audio_shorter_than_one_window(self):
        assert generate_level(np.ones(500), SR) == []

    def test_first_channel_only(self, single_burst):
        quiet = np.zeros_like(single_burst)

        assert len(generate_level(np.stack([single_burst, quiet]), SR)) == 1
        assert generate_level(np.stack([quiet, single_burst]), SR) == []

    def test_analysis_intermediates(self, groove):
        analysis = ChartGenerator("medium").analyze(groove, SR)

        assert len(analysis.envelope) == len(analysis.onset_curve)
        assert len(analysis.quantized) == len(analysis.onsets)
        assert len(analysis.lane_notes) == len(analysis.quantized)
        assert analysis.cleanup_stats.final_count == analysis.note_count
        assert analysis.duration == pytest.approx(len(groove) / SR)


class TestChartProperties:
    """Invariants that hold for every valid input."""

    @pytest.mark.parametrize("difficulty", DIFFICULTIES)
    @pytest.mark.parametrize("signal", ["groove", "dense_groove"])
    def test_sorted_and_spaced(self, request, signal, difficulty):
        audio = request.getfixturevalue(signal)
        min_gap = get_profile(difficulty).min_separation

        notes = generate_level(audio, SR, difficulty)

        assert notes
        for a, b in zip(notes, notes[1:]):
            assert b.time > a.time
            assert b.time - a.time >= min_gap

    @pytest.mark.parametrize("difficulty", DIFFICULTIES)
    def test_lanes_are_the_four_symbols(self, groove, difficulty):
        notes = generate_level(groove, SR, difficulty)

        assert {n.lane for n in notes} <= set(Lane)
        assert all(n.to_dict()["key"].startswith("Arrow") for n in notes)

    def test_easy_spacing_on_dense_onsets(self, dense_groove):
        notes = generate_level(dense_groove, SR, "easy")

        gaps = np.diff([n.time for n in notes])
        assert np.all(gaps >= 0.3)

    def test_repeatable(self, groove):
        generator = ChartGenerator("hard")

        assert generator.generate(groove, SR) == generator.generate(groove, SR)


class TestDeduplicationScenario:
    """Two onsets that snap to the same grid line produce one note."""

    def test_more_salient_onset_survives(self):
        onsets = [
            OnsetCandidate(time=0.0, strength=1.0, salience=0.1),
            OnsetCandidate(time=1.0, strength=0.5, salience=0.2),
            OnsetCandidate(time=1.02, strength=0.4, salience=0.9),
        ]

        quantized = Quantizer(beat_period=0.5, grid=(1,)).quantize(onsets)
        lane_notes = LaneAssigner().assign(quantized)
        notes = NoteCleanup(min_separation=0.15).cleanup(lane_notes)

        assert [n.time for n in notes] == pytest.approx([0.0, 1.0])
        # the weak-lane note came from the 0.9 salience onset
        assert notes[1].lane == Lane.RIGHT
        assert notes[1].salience == 0.9


class TestInputValidation:
    """Ill-formed input is reported, not silently charted."""

    def test_empty_buffer(self):
        with pytest.raises(InvalidAudioError):
            generate_level(np.zeros(0), SR)

    def test_none_buffer(self):
        with pytest.raises(InvalidAudioError):
            generate_level(None, SR)

    @pytest.mark.parametrize("sr", [0, -22050])
    def test_bad_sample_rate(self, single_burst, sr):
        with pytest.raises(InvalidAudioError, match="Sample rate"):
            generate_level(single_burst, sr)

    def test_invalid_audio_is_value_error(self):
        with pytest.raises(ValueError):
            generate_level([], SR)

    def test_unknown_difficulty(self):
        with pytest.raises(ValueError, match="Unknown difficulty"):
            ChartGenerator("extreme")


class TestDifficulty:
    """Tests for difficulty profiles."""

    def test_profiles(self):
        easy = get_profile("easy")
        hard = get_profile(Difficulty.HARD)

        assert easy.min_separation == 0.3
        assert easy.sensitivity == 0.5
        assert easy.grid == (1.0, 0.5)
        assert hard.min_separation == 0.08
        assert hard.sensitivity == 1.2
        assert hard.grid == (1.0, 0.5, 0.25, 0.125)
        assert get_profile("MEDIUM").name == "medium"

    def test_custom_profile(self, single_burst):
        profile = DifficultyProfile(name="custom", min_separation=1.0, sensitivity=0.0, grid=(1.0,))

        generator = ChartGenerator(profile)

        assert generator.profile is profile
        assert len(generator.generate(single_burst, SR)) == 1

    def test_default_is_medium(self):
        assert ChartGenerator().profile.name == "medium"


class TestAnalysisConfig:
    """Tests for AnalysisConfig."""

    def test_defaults(self):
        from beatchart import AnalysisConfig

        config = AnalysisConfig()

        assert config.window_size == 1024
        assert config.hop_length == 512
        assert config.histogram_bins == 50
        assert config.fallback_beat_period == 0.5

    def test_even_smoothing_width_rejected(self):
        from beatchart import AnalysisConfig

        with pytest.raises(ValueError, match="odd"):
            AnalysisConfig(smooth_width=4)

    @pytest.mark.parametrize("min_bpm, max_bpm", [(0, 200), (-60, 200), (120, 60)])
    def test_invalid_tempo_band_rejected(self, min_bpm, max_bpm):
        from beatchart import AnalysisConfig

        with pytest.raises(ValueError, match="min_bpm"):
            AnalysisConfig(min_bpm=min_bpm, max_bpm=max_bpm)

    def test_custom_window_flows_to_stages(self, single_burst):
        from beatchart import AnalysisConfig

        generator = ChartGenerator(config=AnalysisConfig(window_size=2048))

        assert generator.envelope_extractor.hop_length == 1024
        assert generator.onset_picker.hop_length == 1024
        analysis = generator.analyze(single_burst, SR)
        assert len(analysis.envelope) == 1 + (len(single_burst) - 2048) // 1024
