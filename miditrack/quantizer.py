"""Fractional-to-integer tick quantization.

Note lengths are frequently not a whole number of ticks (a triplet eighth at
128 ticks per beat is 42.666... ticks). Rounding every offset independently
lets the error pile up, so a long run of triplets drifts audibly away from the
beat. Instead each call to ``quantize()`` receives the residual left over by
the previous call and folds it into the next rounding decision::

    residual = 0.0
    for offset in offsets:
        ticks, residual = quantize(offset, residual)

The sum of the emitted ticks then differs from the sum of the ideal offsets by
the last residual only, which is never more than half a tick.
"""

import math
import typing


CLOSE_TOLERANCE = 0.000001


def round_half_up (value: float) -> int:

	"""
	Round to the nearest integer, halves rounding up.
	"""

	return int(math.floor(value + 0.5))


def round_if_close (value: float) -> typing.Union[int, float]:

	"""
	Snap a tick position onto the nearest integer when it is within float noise of it.
	"""

	rounded = round_half_up(value)

	if abs(rounded - value) < CLOSE_TOLERANCE:
		return rounded

	return value


def precision_loss (value: float) -> float:

	"""
	Return the signed error introduced by rounding ``value`` to a whole tick.
	"""

	return round_half_up(value) - value


def quantize (offset: float, residual: float = 0.0) -> typing.Tuple[int, float]:

	"""Convert a fractional offset into whole ticks, carrying the rounding error.

	Parameters:
		offset: Ideal offset in ticks since the previous event.
		residual: Residual returned by the previous call (0.0 for the first event).

	Returns:
		A tuple of (ticks, residual) where ``ticks`` is the integer offset to
		write and ``residual`` must be passed to the next call.
	"""

	desired = round_if_close(offset - residual)

	return round_half_up(desired), precision_loss(desired)
