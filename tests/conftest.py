import io
import struct
import typing

import mido
import pytest

import miditrack


MessageType = typing.Union[mido.Message, mido.MetaMessage]


def _read_track (track: miditrack.Track) -> typing.List[MessageType]:

	"""Wrap a built track in a one-track MIDI file and read it back with mido.

	The trailing end_of_track marker is dropped so tests can compare the
	events they added directly.
	"""

	header = struct.pack(">4sIHHH", b"MThd", 6, 0, 1, track.options.ticks_per_beat)
	midi_file = mido.MidiFile(file=io.BytesIO(header + track.type + track.size + track.data))

	return [message for message in midi_file.tracks[0] if message.type != "end_of_track"]


@pytest.fixture
def track () -> miditrack.Track:

	"""A fresh track with default options."""

	return miditrack.Track()


@pytest.fixture
def read_track () -> typing.Callable[[miditrack.Track], typing.List[MessageType]]:

	"""Return a helper that parses a built track's bytes with mido."""

	return _read_track
