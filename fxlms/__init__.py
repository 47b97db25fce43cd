"""Filtered-reference LMS adaptive filtering."""
import logging
import numbers

import numpy as np

from fxlms.utils import fifo_append_left

logger = logging.getLogger(__name__)


class InvalidConfiguration(ValueError):
    """Raised when an adaptive filter is constructed with invalid parameters."""


def fir(xbuff, h):
    """Evaluate a FIR filter on the current state of a delay line.

    Computes ``sum(h[i] * xbuff[i])`` over the first ``min(len(h), len(xbuff))``
    elements. The longer input is silently truncated.

    Parameters
    ----------
    xbuff : array_like
        Delay line, most recent sample first.
    h : array_like
        Filter taps.

    Returns
    -------
    y : float
        Filter output. Zero if either input is empty.

    Examples
    --------
    >>> fir([1, 2, 3], [0.5, 0.25])
    1.0
    >>> fir([], [1, 2])
    0.0

    """
    xbuff = np.asarray(xbuff, dtype=float)
    h = np.asarray(h, dtype=float)
    n = min(h.shape[0], xbuff.shape[0])
    return float(np.dot(h[:n], xbuff[:n]))


class FxLMSFilter:
    """A sample-wise filtered-reference Least-Mean-Square adaptive filter."""

    def __init__(self, length, stepsize, sec_path_est, initial_coeff=None):
        """Create sample-wise FxLMS adaptive filter object.

        Each sample is processed in two steps which must be called in order:
        `FxLMSFilter.filt` with the reference sample, then `FxLMSFilter.adapt`
        with the error sample that results from playing the output through the
        secondary path.

        Parameters
        ----------
        length : int > 0
            Number of adaptive filter taps.
        stepsize : float
            Adaptation step size. Not normalized with signal power.
        sec_path_est : array_like
            FIR model of the secondary path used to filter the reference signal.
            Only the first `length` taps are effective.
        initial_coeff : (length,) array_like or None, optional
            Initial filter coefficient vector. If `None` defaults to zeros.

        Raises
        ------
        InvalidConfiguration
            If `length` is not a positive integer, `stepsize` is not finite,
            `sec_path_est` is not one-dimensional or `initial_coeff` has the
            wrong length.

        """
        if not isinstance(length, numbers.Integral) or length <= 0:
            raise InvalidConfiguration(f"`length` must be a positive integer: {length!r}")
        if not isinstance(stepsize, numbers.Real) or not np.isfinite(stepsize):
            raise InvalidConfiguration(f"`stepsize` must be a finite real: {stepsize!r}")

        sec_path_est = np.array(np.atleast_1d(sec_path_est), dtype=float)
        if sec_path_est.ndim != 1:
            raise InvalidConfiguration(
                f"`sec_path_est` must be one-dimensional: shape {sec_path_est.shape}"
            )
        sec_path_est.flags.writeable = False

        self.length = int(length)
        self.stepsize = float(stepsize)
        self.sec_path_est = sec_path_est

        self.reset()

        if initial_coeff is not None:
            initial_coeff = np.asarray(initial_coeff, dtype=float)
            if initial_coeff.shape != (self.length,):
                raise InvalidConfiguration(
                    f"`initial_coeff` must have shape ({self.length},): "
                    f"{initial_coeff.shape}"
                )
            self._w[:] = initial_coeff

        logger.debug(
            "FxLMSFilter with %d taps, stepsize %g and %d secondary path taps",
            self.length,
            self.stepsize,
            self.sec_path_est.shape[0],
        )

    @property
    def w(self):
        """Read-only view of the filter coefficients."""
        w = self._w.view()
        w.flags.writeable = False
        return w

    @property
    def reference_history(self):
        """Read-only view of the reference delay line, most recent first."""
        xbuff = self._xbuff.view()
        xbuff.flags.writeable = False
        return xbuff

    @property
    def filtered_reference_history(self):
        """Read-only view of the filtered reference delay line, most recent first."""
        xfiltbuff = self._xfiltbuff.view()
        xfiltbuff.flags.writeable = False
        return xfiltbuff

    def get_weights(self):
        """Return the current filter coefficients. See `FxLMSFilter.w`."""
        return self.w

    def reset(self):
        """Zero the filter coefficients and both delay lines."""
        self._w = np.zeros(self.length)
        self._xbuff = np.zeros(self.length)
        self._xfiltbuff = np.zeros(self.length)

    def filt(self, x):
        """Filtering step.

        Also feeds the reference through the secondary path estimate for the
        next call of `FxLMSFilter.adapt`.

        Parameters
        ----------
        x : float
            Reference signal.

        Returns
        -------
        y : float
            Filter output, before it passes the secondary path.

        """
        fifo_append_left(self._xbuff, x)
        fifo_append_left(self._xfiltbuff, fir(self._xbuff, self.sec_path_est))
        return float(self._w.dot(self._xbuff))

    def adapt(self, e):
        """Adaptation step.

        Parameters
        ----------
        e : float
            Error signal, i.e. the disturbance minus the filter output after the
            secondary path (`d - u`).

        """
        self._w += self.stepsize * e * self._xfiltbuff
