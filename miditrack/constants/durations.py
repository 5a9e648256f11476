"""Beat-based duration constants for note lengths and waits.

All values are in **beats**, where 1.0 = one quarter note. Numbers passed as a
``duration`` or ``wait`` are read as beats, so these can be used anywhere the
string notation (``"4"``, ``"8t"``, ``"d8"``) is accepted::

    import miditrack.constants.durations as dur

    track.add_event(miditrack.NoteEvent(pitch="C4", duration=dur.DOTTED_EIGHTH))
    track.add_event(miditrack.NoteEvent(pitch="E4", duration=3 * dur.TRIPLET_EIGHTH))
"""

SIXTYFOURTH = 0.0625
THIRTYSECOND = 0.125
SIXTEENTH = 0.25
DOTTED_SIXTEENTH = 0.375
TRIPLET_EIGHTH = 1 / 3
EIGHTH = 0.5
DOTTED_EIGHTH = 0.75
TRIPLET_QUARTER = 2 / 3
QUARTER = 1.0
DOTTED_QUARTER = 1.5
HALF = 2.0
DOTTED_HALF = 3.0
WHOLE = 4.0
