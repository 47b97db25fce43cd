import numpy as np


def fifo_append_left(a, b):
    """Left-extend a with b and pop the same number of elements on the right.

    Works in place, `a` is never reallocated.

    """
    a[1:] = a[:-1]
    a[:1] = b


def moving_average(x, n):
    """Trailing moving average of `x` over `n` samples.

    Returns
    -------
    numpy.ndarray, shape (len(x) - n + 1,)
        Element `i` is the mean of `x[i:i + n]`.

    """
    x = np.asarray(x, dtype=float)
    assert 0 < n <= x.shape[0], f"0 < {n} <= {x.shape[0]}"
    return np.convolve(x, np.ones(n) / n, mode="valid")


def wgn(x, snr, unit=None):
    """Create white Gaussian noise with relative noise level SNR.

    Parameters
    ----------
    x : ndarray
        Signal.
    snr : float
        Relative magnitude of noise, i.e. SNR = E(x)/E(n).
    unit : None or str, optional
        If `dB`, SNR is specified in dB, i.e. SNR = 10*log(E(x)/E(n)).

    Returns
    -------
    n: numpy.ndarray
        Noise.

    Examples
    --------
    Add noise with 0dB SNR to a sinusoidal signal:

    >>> t = np.linspace(0, 1, 1000000, endpoint=False)
    >>> x = np.sin(2*np.pi*10*t)
    >>> snr = 2
    >>> snrdB = 10*np.log10(snr)
    >>> n = wgn(x, snrdB, "dB")
    >>> xn = x + n
    >>> energy_x = np.linalg.norm(x)**2
    >>> energy_n = np.linalg.norm(n)**2
    >>> np.allclose(snr * energy_n, energy_x)
    True

    """
    x = np.asarray(x)

    if unit == "dB":
        snr = 10 ** (snr / 10)

    n = np.random.standard_normal(x.shape)
    n *= 1 / np.sqrt(snr) * np.linalg.norm(x) / np.linalg.norm(n)

    return n
