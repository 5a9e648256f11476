import pytest

import miditrack.pitch


def test_note_name_to_midi_naturals () -> None:

	"""C4 is middle C (60)."""

	assert miditrack.pitch.note_name_to_midi("C4") == 60
	assert miditrack.pitch.note_name_to_midi("A4") == 69
	assert miditrack.pitch.note_name_to_midi("C-1") == 0
	assert miditrack.pitch.note_name_to_midi("G9") == 127


def test_note_name_to_midi_accidentals () -> None:

	"""Sharps raise and flats lower, and enharmonics agree."""

	assert miditrack.pitch.note_name_to_midi("C#4") == 61
	assert miditrack.pitch.note_name_to_midi("Db4") == 61
	assert miditrack.pitch.note_name_to_midi("B#3") == 60
	assert miditrack.pitch.note_name_to_midi("bb2") == 46
	assert miditrack.pitch.note_name_to_midi("F##4") == 67


@pytest.mark.parametrize("name", ["H2", "C", "4", "C#b4", ""])
def test_note_name_to_midi_rejects_unknown (name: str) -> None:

	"""Names that do not parse raise ValueError."""

	with pytest.raises(ValueError):
		miditrack.pitch.note_name_to_midi(name)


def test_resolve_pitch_shifts_names_only () -> None:

	"""middle_c moves note names; note numbers are written as given."""

	assert miditrack.pitch.resolve_pitch("C4") == 60
	assert miditrack.pitch.resolve_pitch("C3", middle_c="C3") == 60
	assert miditrack.pitch.resolve_pitch("D3", middle_c="C3") == 62
	assert miditrack.pitch.resolve_pitch(64, middle_c="C3") == 64
