"""Track events and the paired note entity.

Every event that ends up in a track is a small mutable dataclass with two
timing fields the track owns:

- ``tick`` - absolute position on the track timeline, ``None`` until known.
- ``delta`` - ticks since the previous event in playback order.

and a ``payload()`` that renders the event's own bytes (everything after the
variable-length offset). ``render()`` puts the two together. Payload bytes
come from ``mido`` messages, so out-of-range values (note 200, channel 16)
raise ``ValueError`` when the track is built.

``kind`` is a closed tag the track dispatches on instead of checking classes:
paired notes expand into on/off events, tempo events win ties at the same
tick, end-of-track markers are only synthesized when missing.

``NoteEvent`` is not itself a track event. It is an immutable description of
a note that ``expand()`` turns into a fresh ``NoteOnEvent`` / ``NoteOffEvent``
pair.
"""

from __future__ import annotations

import dataclasses
import enum
import math
import typing

import mido
import mido.midifiles.meta

import miditrack.constants.velocity
import miditrack.pitch
import miditrack.quantizer
import miditrack.ticks

if typing.TYPE_CHECKING:
	import miditrack.options


class EventKind (enum.Enum):

	"""
	Variant tag shared by track events and the entities that produce them.
	"""

	PAIRED_NOTE = "paired_note"
	NOTE = "note"
	TEMPO = "tempo"
	GENERIC = "generic"
	END_OF_TRACK = "end_of_track"


def encode_delta (ticks: int) -> bytes:

	"""
	Encode a whole tick offset as a MIDI variable-length quantity.

	Raises ``ValueError`` for negative or non-integer offsets.
	"""

	return bytes(mido.midifiles.meta.encode_variable_int(ticks))


@dataclasses.dataclass(kw_only=True)
class Event:

	"""
	Base for everything stored in ``Track.events``.
	"""

	name: typing.ClassVar[str] = "event"
	kind: typing.ClassVar[EventKind] = EventKind.GENERIC

	tick: typing.Optional[float] = None
	delta: float = 0

	def payload (self, options: miditrack.options.TrackOptions) -> bytes:

		"""
		Return the encoded event without its offset.
		"""

		raise NotImplementedError

	def render (self, ticks: int, options: miditrack.options.TrackOptions) -> bytes:

		"""
		Return the offset (already quantized to ``ticks``) followed by the payload.
		"""

		return encode_delta(ticks) + self.payload(options)


# ─── Note halves ─────────────────────────────────────────────────────

@dataclasses.dataclass
class NoteOnEvent (Event):

	name: typing.ClassVar[str] = "note_on"
	kind: typing.ClassVar[EventKind] = EventKind.NOTE

	pitch: miditrack.pitch.PitchType
	velocity: int = miditrack.constants.velocity.DEFAULT_VELOCITY
	channel: int = 0

	def payload (self, options: miditrack.options.TrackOptions) -> bytes:
		note = miditrack.pitch.resolve_pitch(self.pitch, options.middle_c)
		return bytes(mido.Message(self.name, channel=self.channel, note=note, velocity=self.velocity).bytes())


@dataclasses.dataclass
class NoteOffEvent (NoteOnEvent):

	name: typing.ClassVar[str] = "note_off"


# ─── Tempo and track markers ─────────────────────────────────────────

@dataclasses.dataclass
class TempoEvent (Event):

	"""
	A tempo change. Tempo events sort before any other event placed at the same tick.
	"""

	name: typing.ClassVar[str] = "set_tempo"
	kind: typing.ClassVar[EventKind] = EventKind.TEMPO

	bpm: float

	def payload (self, options: miditrack.options.TrackOptions) -> bytes:
		return bytes(mido.MetaMessage(self.name, tempo=mido.bpm2tempo(self.bpm)).bytes())


@dataclasses.dataclass
class EndOfTrackEvent (Event):

	name: typing.ClassVar[str] = "end_of_track"
	kind: typing.ClassVar[EventKind] = EventKind.END_OF_TRACK

	def payload (self, options: miditrack.options.TrackOptions) -> bytes:
		return bytes(mido.MetaMessage(self.name).bytes())


# ─── Text meta events ────────────────────────────────────────────────

@dataclasses.dataclass
class TextEvent (Event):

	"""
	A text meta event. Subclasses change the meta type, and the two name
	events store their text in mido's ``name`` attribute.
	"""

	name: typing.ClassVar[str] = "text"
	text_field: typing.ClassVar[str] = "text"

	text: str

	def payload (self, options: miditrack.options.TrackOptions) -> bytes:
		return bytes(mido.MetaMessage(self.name, **{self.text_field: self.text}).bytes())


@dataclasses.dataclass
class CopyrightEvent (TextEvent):
	name: typing.ClassVar[str] = "copyright"


@dataclasses.dataclass
class TrackNameEvent (TextEvent):
	name: typing.ClassVar[str] = "track_name"
	text_field: typing.ClassVar[str] = "name"


@dataclasses.dataclass
class InstrumentNameEvent (TextEvent):
	name: typing.ClassVar[str] = "instrument_name"
	text_field: typing.ClassVar[str] = "name"


@dataclasses.dataclass
class MarkerEvent (TextEvent):
	name: typing.ClassVar[str] = "marker"


@dataclasses.dataclass
class CuePointEvent (TextEvent):
	name: typing.ClassVar[str] = "cue_marker"


@dataclasses.dataclass
class LyricEvent (TextEvent):
	name: typing.ClassVar[str] = "lyrics"


# ─── Signatures ──────────────────────────────────────────────────────

@dataclasses.dataclass
class TimeSignatureEvent (Event):

	name: typing.ClassVar[str] = "time_signature"

	numerator: int = 4
	denominator: int = 4
	clocks_per_click: int = 24
	notated_32nd_notes_per_beat: int = 8

	def payload (self, options: miditrack.options.TrackOptions) -> bytes:

		message = mido.MetaMessage(
			self.name,
			numerator = self.numerator,
			denominator = self.denominator,
			clocks_per_click = self.clocks_per_click,
			notated_32nd_notes_per_beat = self.notated_32nd_notes_per_beat
		)

		return bytes(message.bytes())


@dataclasses.dataclass
class KeySignatureEvent (Event):

	"""
	A key signature, named the way mido names keys: ``"C"``, ``"F#"``, ``"Bbm"``.
	"""

	name: typing.ClassVar[str] = "key_signature"

	key: str = "C"

	def payload (self, options: miditrack.options.TrackOptions) -> bytes:
		return bytes(mido.MetaMessage(self.name, key=self.key).bytes())


# ─── Channel messages ────────────────────────────────────────────────

@dataclasses.dataclass
class ControllerChangeEvent (Event):

	name: typing.ClassVar[str] = "control_change"

	control: int
	value: int
	channel: int = 0

	def payload (self, options: miditrack.options.TrackOptions) -> bytes:
		return bytes(mido.Message(self.name, channel=self.channel, control=self.control, value=self.value).bytes())


@dataclasses.dataclass
class ProgramChangeEvent (Event):

	name: typing.ClassVar[str] = "program_change"

	program: int
	channel: int = 0

	def payload (self, options: miditrack.options.TrackOptions) -> bytes:
		return bytes(mido.Message(self.name, channel=self.channel, program=self.program).bytes())


def bend_to_pitchwheel (bend: float) -> int:

	"""
	Scale a bend in [-1, 1] onto mido's signed 14-bit pitchwheel range.

	-1 maps to -8192, 0 to 0 (no bend) and 1 to 8191. Values outside the
	range are clamped.
	"""

	bend = max(-1.0, min(float(bend), 1.0))

	if bend <= 0:
		value = math.floor(16384 * (bend + 1) / 2)

	else:
		value = math.floor(16383 * (bend + 1) / 2)

	return value - 8192


@dataclasses.dataclass
class PitchBendEvent (Event):

	name: typing.ClassVar[str] = "pitchwheel"

	bend: float
	channel: int = 0

	def payload (self, options: miditrack.options.TrackOptions) -> bytes:
		return bytes(mido.Message(self.name, channel=self.channel, pitch=bend_to_pitchwheel(self.bend)).bytes())


# ─── Paired note entity ──────────────────────────────────────────────

@dataclasses.dataclass(frozen=True)
class NoteEvent:

	"""
	A note with a length, expanded into a note on / note off pair by the track.

	Parameters:
		pitch: MIDI note number or note name (``"C4"``, ``"F#3"``).
		duration: Time between the note on and the note off. Notation string,
			beats, or a list of either (see ``miditrack.ticks``).
		wait: Rest before the note on when the note is placed in insertion
			order. Ignored when ``tick`` is given.
		velocity: Note on and note off velocity (0-127).
		channel: MIDI channel (0-15).
		tick: Explicit start tick. Notes with a tick are set aside and merged
			into the timeline when the track is built.

	Example::

		track.add_event([
			NoteEvent(pitch="C4", duration="4"),
			NoteEvent(pitch="E4", duration="8", wait="8"),
			NoteEvent(pitch=67, duration="2", tick=512),
		])
	"""

	name: typing.ClassVar[str] = "note"
	kind: typing.ClassVar[EventKind] = EventKind.PAIRED_NOTE

	pitch: miditrack.pitch.PitchType
	duration: miditrack.ticks.DurationType = "4"
	wait: miditrack.ticks.DurationType = 0
	velocity: int = miditrack.constants.velocity.DEFAULT_VELOCITY
	channel: int = 0
	tick: typing.Optional[float] = None

	def with_fields (self, **overrides: typing.Any) -> NoteEvent:

		"""
		Return a copy of this note with some fields replaced.
		"""

		return dataclasses.replace(self, **overrides)

	def expand (self, ticks_per_beat: int = miditrack.constants.TICKS_PER_BEAT) -> typing.Tuple[NoteOnEvent, NoteOffEvent]:

		"""
		Build a new note on / note off pair for this note.

		Untimed notes carry their wait and duration as offsets and get their
		ticks from the track. Timed notes get absolute ticks straight away:
		the note on at ``tick`` and the note off ``duration`` later.
		"""

		duration = miditrack.ticks.tick_duration(self.duration, ticks_per_beat)

		if self.tick is None:
			wait = miditrack.ticks.tick_duration(self.wait, ticks_per_beat)
			note_on = NoteOnEvent(self.pitch, self.velocity, self.channel, delta=wait)
			note_off = NoteOffEvent(self.pitch, self.velocity, self.channel, delta=duration)

		else:
			start = miditrack.quantizer.round_if_close(self.tick)
			note_on = NoteOnEvent(self.pitch, self.velocity, self.channel, tick=start)
			note_off = NoteOffEvent(self.pitch, self.velocity, self.channel, tick=miditrack.quantizer.round_if_close(start + duration), delta=duration)

		return note_on, note_off


EntityType = typing.Union[NoteEvent, Event]
