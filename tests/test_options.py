import logging
import pathlib

import pytest

import miditrack
import miditrack.options


def test_defaults () -> None:

	"""Defaults match the standard 128 tick division with C4 as middle C."""

	options = miditrack.options.TrackOptions()

	assert options.ticks_per_beat == 128
	assert options.middle_c == "C4"


@pytest.mark.parametrize("ticks_per_beat", [0, -96, 0x8000, 96.0, True])
def test_invalid_ticks_per_beat (ticks_per_beat: object) -> None:

	"""The division must be a positive integer that fits the header field."""

	with pytest.raises(ValueError):
		miditrack.options.TrackOptions(ticks_per_beat=ticks_per_beat)  # type: ignore[arg-type]


def test_invalid_middle_c () -> None:

	"""middle_c must be a note name."""

	with pytest.raises(ValueError):
		miditrack.options.TrackOptions(middle_c="middle")


def test_load_options_missing_file_uses_defaults (tmp_path: pathlib.Path, caplog: pytest.LogCaptureFixture) -> None:

	"""A missing config file logs a warning and returns defaults."""

	with caplog.at_level(logging.WARNING, logger="miditrack.options"):
		options = miditrack.load_options(str(tmp_path / "missing.yaml"))

	assert options == miditrack.options.TrackOptions()
	assert "not found" in caplog.text


def test_load_options_reads_yaml (tmp_path: pathlib.Path) -> None:

	"""Values in the YAML mapping override the defaults."""

	path = tmp_path / "miditrack.yaml"
	path.write_text("ticks_per_beat: 480\nmiddle_c: C3\n")

	options = miditrack.load_options(str(path))

	assert options.ticks_per_beat == 480
	assert options.middle_c == "C3"


def test_load_options_empty_file (tmp_path: pathlib.Path) -> None:

	"""An empty file behaves like no overrides."""

	path = tmp_path / "empty.yaml"
	path.write_text("")

	assert miditrack.load_options(str(path)) == miditrack.options.TrackOptions()


def test_load_options_rejects_unknown_keys (tmp_path: pathlib.Path) -> None:

	"""Misspelt keys are reported instead of ignored."""

	path = tmp_path / "typo.yaml"
	path.write_text("ticks_per_quarter: 480\n")

	with pytest.raises(ValueError, match="ticks_per_quarter"):
		miditrack.load_options(str(path))


def test_load_options_rejects_non_mapping (tmp_path: pathlib.Path) -> None:

	"""The file must hold a mapping."""

	path = tmp_path / "list.yaml"
	path.write_text("- 480\n")

	with pytest.raises(ValueError, match="mapping"):
		miditrack.load_options(str(path))


def test_track_uses_options (read_track) -> None:

	"""A track renders durations and names with its own options."""

	track = miditrack.Track(options=miditrack.options.TrackOptions(ticks_per_beat=480, middle_c="C3"))
	track.add_event(miditrack.NoteEvent(pitch="C3", duration="4"))
	track.build_data()

	messages = read_track(track)

	assert [m.note for m in messages] == [60, 60]
	assert [m.time for m in messages] == [0, 480]
