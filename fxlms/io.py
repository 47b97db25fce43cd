"""Simulated plants and run loops that drive an adaptive filter."""
import logging
from itertools import cycle

import numpy as np

from fxlms import fir
from fxlms.utils import fifo_append_left

logger = logging.getLogger(__name__)


class FakeInterface:
    """A fake sample-wise signal interface."""

    def __init__(self, signal, h_pri=[1], h_sec=[1], noise=None):
        """Create a fake sample-wise signal interface.

        Parameters
        ----------
        signal : array_like
            The reference signal of shape (n,). Cycled through indefinitely.
        h_pri : array_like, optional
            Primary path impulse response from reference to error sensor.
        h_sec : array_like, optional
            Secondary path impulse response from actuator to error sensor.
        noise : array_like or None, optional
            Additive noise at the error sensor of shape (n,). Cycled along with
            `signal`.

        """
        signal = np.atleast_1d(np.asarray(signal, dtype=float))
        h_pri = np.atleast_1d(np.asarray(h_pri, dtype=float))
        h_sec = np.atleast_1d(np.asarray(h_sec, dtype=float))

        assert signal.ndim == 1 and signal.shape[0] > 0, "signal must be of shape (n,)"
        assert h_pri.ndim == 1 and h_pri.shape[0] > 0, "h_pri must be of shape (m,)"
        assert h_sec.ndim == 1 and h_sec.shape[0] > 0, "h_sec must be of shape (l,)"

        if noise is not None:
            noise = np.asarray(noise, dtype=float)
            assert noise.shape == signal.shape, "Incompatible signal and noise shapes"

        self._orig_signal = signal
        self._orig_noise = noise
        self.h_pri = h_pri
        self.h_sec = h_sec

        self.reset()

    def rec(self):
        """Record one sample of the disturbance after the primary path.

        Returns
        -------
        x, e, u, d : float
            See `FakeInterface.playrec`.

        """
        return self.playrec(0.0)

    def playrec(self, y, send_signal=True):
        """Simultaneously play through secondary path while recording the result.

        Parameters
        ----------
        y : float
            Control signal.
        send_signal : bool, optional
            If `False`, turn off the disturbance. Can be used to 'measure' the
            secondary path.

        Returns
        -------
        x, e, u, d : float
            Reference signal, error signal, control signal at error sensor, primary
            at error sensor.

        """
        if send_signal:
            x = next(self.signal)  # reference signal
        else:
            x = 0.0

        fifo_append_left(self._xbuff, x)
        fifo_append_left(self._ybuff, y)

        d = fir(self._xbuff, self.h_pri)  # primary path signal at error sensor
        u = fir(self._ybuff, self.h_sec)  # secondary path signal at error sensor

        e = d - u  # error signal

        if self.noise is not None:
            e += next(self.noise)

        return x, e, u, d

    def reset(self):
        """Reset interface to initial condition."""
        self.signal = cycle(self._orig_signal.tolist())

        if self._orig_noise is not None:
            self.noise = cycle(self._orig_noise.tolist())
        else:
            self.noise = None

        self._xbuff = np.zeros(self.h_pri.shape[0])
        self._ybuff = np.zeros(self.h_sec.shape[0])


def simulate(filt, x, d, h_sec=[1]):
    """Run an adaptive filter over a whole signal with a simulated secondary path.

    For every sample the filter output is routed through `h_sec` and subtracted
    from the disturbance before it is fed back to `filt.adapt`.

    Parameters
    ----------
    filt : FxLMSFilter
        The adaptive filter. Its state is advanced by `len(x)` samples.
    x : (N,) array_like
        Reference signal.
    d : (N,) array_like
        Disturbance at the error sensor.
    h_sec : array_like, optional
        Secondary path impulse response.

    Returns
    -------
    y : (N,) numpy.ndarray
        Filter output.
    u : (N,) numpy.ndarray
        Filter output at error sensor.
    e : (N,) numpy.ndarray
        Error signal.
    w : (N, length) numpy.ndarray
        Filter coefficients before each adaptation step.

    """
    x = np.atleast_1d(np.asarray(x, dtype=float))
    d = np.atleast_1d(np.asarray(d, dtype=float))
    h_sec = np.atleast_1d(np.asarray(h_sec, dtype=float))
    assert x.ndim == 1
    assert x.shape == d.shape
    assert h_sec.ndim == 1 and h_sec.shape[0] > 0

    N = x.shape[0]
    w = np.zeros((N, filt.length))  # filter history
    e = np.zeros(N)  # error signal
    y = np.zeros(N)  # filter output
    u = np.zeros(N)  # control signal at error sensor
    ybuff = np.zeros(h_sec.shape[0])

    for n in range(N):
        w[n] = filt.w
        y[n] = filt.filt(x[n])

        fifo_append_left(ybuff, y[n])
        u[n] = fir(ybuff, h_sec)
        e[n] = d[n] - u[n]

        filt.adapt(e[n])

        logger.debug("n=%d x=%g d=%g y=%g e=%g", n, x[n], d[n], y[n], e[n])

    logger.info("Final weights: %s", np.array2string(filt.w, precision=6))

    return y, u, e, w
