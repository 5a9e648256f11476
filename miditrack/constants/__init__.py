"""Constants for miditrack.

- ``miditrack.constants.durations`` - Beat-based durations for note lengths and waits
- ``miditrack.constants.velocity`` - MIDI velocity constants

Tick resolution and chunk identifiers live here directly.
"""

# Ticks per quarter note written into the file header by the assembler.
TICKS_PER_BEAT = 128

TRACK_CHUNK_TYPE = b"MTrk"

# Channel mode controller numbers
CC_ALL_NOTES_OFF = 123
CC_POLY_MODE_ON = 127
