import miditrack.quantizer


# ---------------------------------------------------------------------------
# Rounding helpers
# ---------------------------------------------------------------------------

def test_round_half_up_rounds_halves_up () -> None:

	"""Halves round up rather than to the nearest even number."""

	assert miditrack.quantizer.round_half_up(2.5) == 3
	assert miditrack.quantizer.round_half_up(3.5) == 4
	assert miditrack.quantizer.round_half_up(2.4999) == 2


def test_round_if_close_snaps_float_noise () -> None:

	"""Values within float noise of an integer snap onto it; others are untouched."""

	assert miditrack.quantizer.round_if_close(127.9999999) == 128
	assert miditrack.quantizer.round_if_close(128 / 3 * 3) == 128
	assert miditrack.quantizer.round_if_close(42.5) == 42.5


def test_precision_loss_is_signed () -> None:

	"""Rounding up reports a positive loss, rounding down a negative one."""

	assert abs(miditrack.quantizer.precision_loss(42.75) - 0.25) < 1e-9
	assert abs(miditrack.quantizer.precision_loss(42.25) + 0.25) < 1e-9
	assert miditrack.quantizer.precision_loss(42) == 0


# ---------------------------------------------------------------------------
# quantize()
# ---------------------------------------------------------------------------

def test_quantize_integer_offset_is_exact () -> None:

	"""Whole tick offsets pass through with no residual."""

	assert miditrack.quantizer.quantize(96) == (96, 0)


def test_quantize_returns_residual () -> None:

	"""A fractional offset rounds and reports the error for the next call."""

	ticks, residual = miditrack.quantizer.quantize(128 / 3)

	assert ticks == 43
	assert abs(residual - (43 - 128 / 3)) < 1e-9


def test_quantize_folds_in_incoming_residual () -> None:

	"""The incoming residual is subtracted before rounding."""

	ticks, residual = miditrack.quantizer.quantize(128 / 3, 1 / 3)

	assert ticks == 42
	assert residual < 0


def test_triplets_land_on_the_beat () -> None:

	"""Three triplet eighths add up to exactly one beat."""

	residual = 0.0
	emitted = []

	for _ in range(3):
		ticks, residual = miditrack.quantizer.quantize(128 / 3, residual)
		emitted.append(ticks)

	assert sum(emitted) == 128
	assert residual == 0


def test_cumulative_drift_stays_bounded () -> None:

	"""However many fractional offsets are quantized, the total error stays under one tick."""

	offset = 128 / 7
	residual = 0.0
	total = 0

	for n in range(1, 2001):
		ticks, residual = miditrack.quantizer.quantize(offset, residual)
		total += ticks
		assert abs(total - n * offset) < 1
