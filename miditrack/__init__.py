"""
miditrack - build byte-accurate MIDI file tracks from Python.

A ``Track`` collects events and renders them into the bytes of a standard
MIDI file track chunk. Events can be placed two ways, and mixed freely:

- **In order.** Events without a tick play one after another, each a
  ``wait`` or ``delta`` after the previous. Notes are written as a pitch and
  a duration and expand into their note on / note off pair.
- **At a tick.** Events with an explicit ``tick`` are held back and spliced
  into the timeline when the track is built, with every following offset
  recomputed so nothing else moves.

What it takes care of:

- **No drift.** Tuplets rarely come out as a whole number of ticks. Each
  offset's rounding error is carried into the next, so a thousand triplets
  still end on the beat.
- **Tempo first.** An event placed on the same tick as a tempo change always
  lands straight after it.
- **Merging tracks.** ``track.merge_track(other)`` folds two independently
  written tracks into one timeline.
- **Deterministic output.** Building an unchanged track twice gives the same
  bytes.

Minimal example:

    ```python
    import miditrack

    track = miditrack.Track()
    track.set_tempo(100)
    track.add_event([
        miditrack.NoteEvent(pitch="C4", duration="8t"),
        miditrack.NoteEvent(pitch="D4", duration="8t"),
        miditrack.NoteEvent(pitch="E4", duration="8t"),
    ])
    track.add_event(miditrack.NoteEvent(pitch="G3", duration="4", tick=0))
    track.build_data()

    chunk = track.type + track.size + track.data
    ```

The header chunk and file writing are left to the caller.

Package-level exports: ``Track``, ``TrackOptions``, ``load_options``,
``NoteEvent`` and the event classes in ``miditrack.events``.
"""

import miditrack.events
import miditrack.options
import miditrack.track


Track = miditrack.track.Track
TrackOptions = miditrack.options.TrackOptions
load_options = miditrack.options.load_options

EventKind = miditrack.events.EventKind
NoteEvent = miditrack.events.NoteEvent
NoteOnEvent = miditrack.events.NoteOnEvent
NoteOffEvent = miditrack.events.NoteOffEvent
TempoEvent = miditrack.events.TempoEvent
EndOfTrackEvent = miditrack.events.EndOfTrackEvent
TextEvent = miditrack.events.TextEvent
CopyrightEvent = miditrack.events.CopyrightEvent
TrackNameEvent = miditrack.events.TrackNameEvent
InstrumentNameEvent = miditrack.events.InstrumentNameEvent
MarkerEvent = miditrack.events.MarkerEvent
CuePointEvent = miditrack.events.CuePointEvent
LyricEvent = miditrack.events.LyricEvent
TimeSignatureEvent = miditrack.events.TimeSignatureEvent
KeySignatureEvent = miditrack.events.KeySignatureEvent
ControllerChangeEvent = miditrack.events.ControllerChangeEvent
ProgramChangeEvent = miditrack.events.ProgramChangeEvent
PitchBendEvent = miditrack.events.PitchBendEvent
