import copy
import logging
import typing

import miditrack.constants
import miditrack.events
import miditrack.options
import miditrack.quantizer


logger = logging.getLogger(__name__)


MapFunctionType = typing.Callable[[int, miditrack.events.NoteEvent], typing.Optional[typing.Dict[str, typing.Any]]]


def _to_list (events: typing.Union[miditrack.events.EntityType, typing.Sequence[miditrack.events.EntityType]]) -> typing.List[miditrack.events.EntityType]:

	if isinstance(events, (list, tuple)):
		return list(events)

	return [events]


class Track:

	"""
	One track of a MIDI file: an ordered list of events and the bytes they render to.

	Events without a tick play in the order they were added, each one
	``delta`` ticks after the previous. Events with an explicit tick (and
	notes with a ``tick``) are held back in ``explicit_tick_events`` and
	spliced into the timeline when the track is built.

	``build_data()`` runs in two phases:

	1. **Stage** - give every event in insertion order its absolute tick, then
	   sort the held-back events and splice each one in after the last event
	   at or before its tick, recomputing the offsets that follow.
	2. **Materialize** - walk the final list once, quantize each offset
	   (carrying the rounding residual forward) and concatenate the bytes.

	The result is left in ``data`` with its four byte big-endian length in
	``size``, ready for the file assembler to wrap in an ``MTrk`` chunk.

	Example::

		track = miditrack.Track()
		track.set_tempo(90)
		track.add_track_name("Lead")
		track.add_event([
			miditrack.NoteEvent(pitch="C4", duration="4"),
			miditrack.NoteEvent(pitch="E4", duration="4"),
		])
		track.add_event(miditrack.NoteEvent(pitch="G4", duration="2", tick=512))
		track.build_data()
	"""

	def __init__ (self, options: typing.Optional[miditrack.options.TrackOptions] = None) -> None:

		"""
		Create an empty track.
		"""

		self.options = options or miditrack.options.TrackOptions()
		self.type = miditrack.constants.TRACK_CHUNK_TYPE

		self.events: typing.List[miditrack.events.Event] = []
		self.explicit_tick_events: typing.List[miditrack.events.EntityType] = []

		# Absolute tick of the last event walked by the most recent build
		self.tick_pointer: float = 0

		self.data: bytes = b""
		self.size: bytes = b""


	def add_event (self, events: typing.Union[miditrack.events.EntityType, typing.Sequence[miditrack.events.EntityType]], map_function: typing.Optional[MapFunctionType] = None) -> "Track":

		"""Add one event or a list of events to the track.

		Parameters:
			events: An event, a ``NoteEvent``, or a list of them.
			map_function: Optional ``(index, note) -> dict`` called for each
				``NoteEvent``. The returned fields replace the note's own
				(the caller's note is not modified).

		Events with a tick are set aside until the next build. Untimed notes
		expand into their note on / note off pair immediately. Field values
		are not checked here; bad values raise when the track is built.
		"""

		for i, event in enumerate(_to_list(events)):

			if map_function is not None and event.kind is miditrack.events.EventKind.PAIRED_NOTE:
				overrides = map_function(i, event)
				if isinstance(overrides, dict):
					event = event.with_fields(**overrides)

			# Ticks are written onto stored events, each stored event is its own copy
			if event.kind is not miditrack.events.EventKind.PAIRED_NOTE:
				event = copy.copy(event)

			if event.tick is not None:
				self.explicit_tick_events.append(event)

			elif event.kind is miditrack.events.EventKind.PAIRED_NOTE:
				self.events.extend(event.expand(self.options.ticks_per_beat))

			else:
				self.events.append(event)

		return self


	def build_data (self) -> "Track":

		"""
		Rebuild ``data`` and ``size`` from the current events.

		Building twice without changing the track produces identical bytes.
		"""

		self._assign_ticks()
		self._merge_pending()
		self._materialize()

		return self


	def _assign_ticks (self) -> None:

		"""
		Give every event added in insertion order its absolute tick.
		"""

		cursor: float = 0

		for event in self.events:

			if event.tick is None:
				event.tick = miditrack.quantizer.round_if_close(cursor + event.delta)

			cursor = event.tick


	def _merge_pending (self) -> None:

		"""
		Splice the held-back explicit tick events into the timeline, earliest first.
		"""

		if not self.explicit_tick_events:
			return

		# sorted() is stable, so events at the same tick keep their insertion order.
		pending = sorted(self.explicit_tick_events, key=lambda entity: entity.tick)
		self.explicit_tick_events = []

		for entity in pending:

			if entity.kind is miditrack.events.EventKind.PAIRED_NOTE:
				for event in entity.expand(self.options.ticks_per_beat):
					self.merge_single_event(event)

			else:
				self.merge_single_event(entity)

		logger.debug(f"Merged {len(pending)} explicit tick event(s), track now holds {len(self.events)} events")


	def _materialize (self) -> None:

		"""
		Render the ordered events into ``data`` and ``size`` in a single pass.
		"""

		data = bytearray()
		residual = 0.0
		self.tick_pointer = 0

		for event in self.events:

			event.delta = miditrack.quantizer.round_if_close(event.tick - self.tick_pointer)

			ticks, residual = miditrack.quantizer.quantize(event.delta, residual)
			data += event.render(ticks, self.options)

			self.tick_pointer = miditrack.quantizer.round_if_close(event.tick)

		if not self.events or self.events[-1].kind is not miditrack.events.EventKind.END_OF_TRACK:
			data += miditrack.events.EndOfTrackEvent().render(0, self.options)

		self.data = bytes(data)
		self.size = len(self.data).to_bytes(4, "big")


	def merge_explicit_tick_events (self) -> "Track":

		"""
		Splice the held-back explicit tick events in and rebuild the track.

		Does nothing when no events are waiting.
		"""

		if not self.explicit_tick_events:
			return self

		return self.build_data()


	def merge_single_event (self, event: miditrack.events.Event) -> "Track":

		"""Insert one event with an absolute tick into the ordered timeline.

		The event goes in after the last event whose tick is at or before its
		own, so events at the same tick keep the order they were merged in.
		The exception is a tempo event at exactly the same tick: the new event
		goes straight after it, ahead of anything else already at that tick.

		Every offset from the insertion point on is recomputed from the
		absolute ticks. Events added in insertion order since the last build
		are given their ticks first.
		"""

		self._assign_ticks()

		if not self.events:

			if event.tick is None:
				return self.add_event(event)

			event.delta = event.tick
			self.events = [event]
			return self

		if event.tick is None:
			raise ValueError(f"Cannot merge a {event.name} event without a tick into a track that already has events")

		index = self._insert_index(event.tick)
		events = self.events[:index] + [event] + self.events[index:]

		event.delta = event.tick - (events[index - 1].tick if index > 0 else 0)

		for i in range(index + 1, len(events)):
			events[i].delta = events[i].tick - events[i - 1].tick

		self.events = events

		logger.debug(f"Spliced {event.name} at tick {event.tick} into position {index}")

		return self


	def _insert_index (self, tick: float) -> int:

		"""
		Return the position a new event at ``tick`` should be inserted at.
		"""

		last_index = -1

		for i, existing in enumerate(self.events):

			if existing.tick == tick and existing.kind is miditrack.events.EventKind.TEMPO:
				last_index = i
				break

			if existing.tick > tick:
				break

			last_index = i

		return last_index + 1


	def merge_track (self, track: "Track") -> "Track":

		"""Merge another track's events into this one on a shared timeline.

		Both tracks are built first so every event has an absolute tick, then
		copies of the other track's events are spliced in one by one. The
		other track is left intact. Its end-of-track markers are skipped,
		this track writes its own. Call ``build_data()`` afterwards to render
		the merged result.
		"""

		self.build_data()

		merged = 0

		for event in track.build_data().events:

			if event.kind is miditrack.events.EventKind.END_OF_TRACK:
				continue

			self.merge_single_event(copy.copy(event))
			merged += 1

		logger.info(f"Merged {merged} events from another track")

		return self


	def remove_events_by_name (self, event_name: str) -> "Track":

		"""
		Remove every event whose name matches, e.g. ``"note_on"`` or ``"set_tempo"``.
		"""

		self.events = [event for event in self.events if event.name != event_name]

		return self


	# ─── Convenience helpers ─────────────────────────────────────────

	def set_tempo (self, bpm: float, tick: float = 0) -> "Track":

		"""
		Set the tempo in beats per minute, starting at ``tick``.
		"""

		return self.add_event(miditrack.events.TempoEvent(bpm, tick=tick))


	def set_time_signature (self, numerator: int, denominator: int, clocks_per_click: int = 24, notated_32nd_notes_per_beat: int = 8) -> "Track":

		"""
		Set the time signature, e.g. ``set_time_signature(6, 8)``.
		"""

		return self.add_event(miditrack.events.TimeSignatureEvent(numerator, denominator, clocks_per_click, notated_32nd_notes_per_beat))


	def set_key_signature (self, key: str) -> "Track":

		"""
		Set the key signature. Minor keys end in ``m`` (``"Am"``, ``"F#m"``).
		"""

		return self.add_event(miditrack.events.KeySignatureEvent(key))


	def add_text (self, text: str) -> "Track":
		return self.add_event(miditrack.events.TextEvent(text))


	def add_copyright (self, text: str) -> "Track":
		return self.add_event(miditrack.events.CopyrightEvent(text))


	def add_track_name (self, text: str) -> "Track":
		return self.add_event(miditrack.events.TrackNameEvent(text))


	def add_instrument_name (self, text: str) -> "Track":
		return self.add_event(miditrack.events.InstrumentNameEvent(text))


	def add_marker (self, text: str) -> "Track":
		return self.add_event(miditrack.events.MarkerEvent(text))


	def add_cue_point (self, text: str) -> "Track":
		return self.add_event(miditrack.events.CuePointEvent(text))


	def add_lyric (self, text: str) -> "Track":
		return self.add_event(miditrack.events.LyricEvent(text))


	def set_pitch_bend (self, bend: float, channel: int = 0) -> "Track":

		"""
		Bend the pitch. ``bend`` ranges from -1 (full down) to 1 (full up), 0 is no bend.
		"""

		return self.add_event(miditrack.events.PitchBendEvent(bend, channel))


	def controller_change (self, number: int, value: int, channel: int = 0, delta: float = 0) -> "Track":

		"""
		Send a control change, ``delta`` ticks after the previous event.
		"""

		return self.add_event(miditrack.events.ControllerChangeEvent(number, value, channel, delta=delta))


	def program_change (self, program: int, channel: int = 0) -> "Track":
		return self.add_event(miditrack.events.ProgramChangeEvent(program, channel))


	def all_notes_off (self, channel: int = 0) -> "Track":

		"""
		Silence every sounding note on a channel (CC 123).
		"""

		return self.controller_change(miditrack.constants.CC_ALL_NOTES_OFF, 0, channel)


	def poly_mode_on (self, channel: int = 0) -> "Track":

		"""
		Switch a channel to polyphonic mode (CC 127).
		"""

		return self.controller_change(miditrack.constants.CC_POLY_MODE_ON, 0, channel)
