import dataclasses
import logging
import os
import typing

import yaml

import miditrack.constants
import miditrack.pitch


logger = logging.getLogger(__name__)


@dataclasses.dataclass
class TrackOptions:

	"""
	Settings that shape how a track turns its events into bytes.

	Parameters:
		ticks_per_beat: Tick resolution of a quarter note. Must match the
			division the file assembler writes into the header.
		middle_c: The note name that renders as note 60. Only note names are
			shifted, raw note numbers are written as given.

	Example::

		track = miditrack.Track(options=TrackOptions(middle_c="C3"))
	"""

	ticks_per_beat: int = miditrack.constants.TICKS_PER_BEAT
	middle_c: str = "C4"

	def __post_init__ (self) -> None:
		if isinstance(self.ticks_per_beat, bool) or not isinstance(self.ticks_per_beat, int):
			raise ValueError("ticks_per_beat must be an integer")
		if not 0 < self.ticks_per_beat < 0x8000:
			raise ValueError("ticks_per_beat must be between 1 and 32767")
		# Raises ValueError for an unparseable name.
		miditrack.pitch.note_name_to_midi(self.middle_c)


def load_options (config_path: str = "miditrack.yaml") -> TrackOptions:

	"""
	Load track options from a YAML file.

	A missing file is not an error: defaults are returned. Keys that are not
	``TrackOptions`` fields raise ``ValueError`` so typos do not pass silently.
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return TrackOptions()

	with open(config_path, "r") as f:
		config = yaml.safe_load(f) or {}

	if not isinstance(config, dict):
		raise ValueError(f"Config file {config_path} must contain a mapping")

	known = {field.name for field in dataclasses.fields(TrackOptions)}
	unknown = sorted(set(config) - known)

	if unknown:
		raise ValueError(f"Unknown option(s) in {config_path}: {unknown}")

	return TrackOptions(**config)
