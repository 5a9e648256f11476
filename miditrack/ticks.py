"""Duration notation to tick conversion.

Durations can be given three ways:

- **Notation strings** - ``"4"`` is a quarter note, ``"8"`` an eighth, ``"1"`` a
  whole note. Prefix one ``d`` per dot (``"d4"``, ``"dd8"``), suffix ``t`` for a
  triplet (``"8t"``) or ``t<n>`` for any tuplet that fits ``n`` notes into the
  space of two (``"4t5"``). ``"T96"`` is an explicit count of 96 ticks and
  ``"0"`` is no time at all.
- **Numbers** - a length in beats (quarter notes), see
  ``miditrack.constants.durations``.
- **Lists** - any mix of the above, summed (``["2", "8"]`` ties a half note
  to an eighth).
"""

import re
import typing

import miditrack.constants
import miditrack.quantizer


DurationType = typing.Union[str, int, float, typing.Sequence[typing.Union[str, int, float]]]

_NOTATION_PATTERN = re.compile(r"^(?P<dotted>d+)?(?P<base>\d+)(?:t(?P<tuplet>\d*))?$")


def duration_multiplier (notation: str) -> float:

	"""
	Return the length of a notation string in quarter notes.

	Raises ``ValueError`` for anything that is not valid notation.
	"""

	if notation == "0":
		return 0.0

	match = _NOTATION_PATTERN.match(notation)

	if match is None:
		raise ValueError(f"{notation!r} is not a valid duration")

	base = int(match.group("base"))

	# Only 1 and powers of two name a note value
	if base < 1 or base & (base - 1):
		raise ValueError(f"{notation!r} is not a valid duration")

	quarters = 4.0 / base

	dotted = match.group("dotted")

	if dotted:
		divisor = 2 ** len(dotted)
		quarters += quarters * (divisor - 1) / divisor

	tuplet = match.group("tuplet")

	if tuplet is not None:
		notes = int(tuplet or "3")

		if notes <= 0:
			raise ValueError(f"{notation!r} is not a valid duration")

		quarters = quarters * 2 / notes

	return quarters


def tick_duration (duration: DurationType, ticks_per_beat: int = miditrack.constants.TICKS_PER_BEAT) -> typing.Union[int, float]:

	"""Convert a duration into ticks.

	Parameters:
		duration: Notation string, number of beats, or a list of either.
		ticks_per_beat: Tick resolution of a quarter note.

	Returns:
		The length in ticks, snapped to a whole tick when within float noise
		of one. Tuplets usually leave a fractional part, which the quantizer
		resolves when the track is built.

	Example:
		```python
		tick_duration("4")          # 128
		tick_duration("d8")         # 96
		tick_duration("8t")         # 42.666...
		tick_duration(["2", "T5"])  # 261
		```
	"""

	if isinstance(duration, (list, tuple)):
		return miditrack.quantizer.round_if_close(sum(tick_duration(d, ticks_per_beat) for d in duration))

	if isinstance(duration, bool):
		raise ValueError(f"{duration!r} is not a valid duration")

	if isinstance(duration, (int, float)):

		if duration < 0:
			raise ValueError(f"{duration!r} is not a valid duration")

		return miditrack.quantizer.round_if_close(duration * ticks_per_beat)

	if not isinstance(duration, str):
		raise ValueError(f"{duration!r} is not a valid duration")

	if duration.startswith("T"):

		try:
			ticks = int(duration[1:])
		except ValueError:
			raise ValueError(f"{duration!r} is not a valid duration") from None

		if ticks < 0:
			raise ValueError(f"{duration!r} is not a valid duration")

		return ticks

	return miditrack.quantizer.round_if_close(ticks_per_beat * duration_multiplier(duration))
