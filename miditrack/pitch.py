"""Note names and MIDI note numbers.

Convention: **C4 = 60** (Middle C). Names are a letter, any number of ``#``
or ``b`` accidentals and an octave number, which may be negative
(``"C-1"`` is note 0).

Module-level helpers:
- `note_name_to_midi(name)`: Parse a note name into a MIDI note number.
- `resolve_pitch(pitch, middle_c)`: Turn an int or name into the note number to write.
"""

import re
import typing


PitchType = typing.Union[int, str]

NOTE_NAME_TO_PC: typing.Dict[str, int] = {
	"C": 0,
	"D": 2,
	"E": 4,
	"F": 5,
	"G": 7,
	"A": 9,
	"B": 11,
}

_NOTE_NAME_PATTERN = re.compile(r"^(?P<letter>[A-Ga-g])(?P<accidentals>#*|b*)(?P<octave>-?\d+)$")


def note_name_to_midi (name: str) -> int:

	"""Parse a note name and return its MIDI note number.

	Parameters:
		name: Note name (e.g. ``"C4"``, ``"F#3"``, ``"Bb2"``).

	Raises:
		ValueError: If the name cannot be parsed.

	Example:
		```python
		note_name_to_midi("C4")   # → 60
		note_name_to_midi("A4")   # → 69
		note_name_to_midi("Db4")  # → 61
		```
	"""

	match = _NOTE_NAME_PATTERN.match(name.strip())

	if match is None:
		raise ValueError(f"Unknown note name: {name!r}. Expected e.g. 'C4', 'F#3', 'Bb2'.")

	pc = NOTE_NAME_TO_PC[match.group("letter").upper()]
	accidentals = match.group("accidentals")

	if accidentals.startswith("#"):
		pc += len(accidentals)

	else:
		pc -= len(accidentals)

	return (int(match.group("octave")) + 1) * 12 + pc


def resolve_pitch (pitch: PitchType, middle_c: str = "C4") -> int:

	"""
	Return the MIDI note number for an int or a note name.

	Note numbers pass through unchanged. Names are shifted so that
	``middle_c`` lands on 60, for instruments that call middle C "C3".
	"""

	if isinstance(pitch, str):
		return note_name_to_midi(pitch) + 60 - note_name_to_midi(middle_c)

	return pitch
