"""Offline estimation of the secondary path."""
import logging

import numpy as np
import tqdm
from scipy.linalg import lstsq, solve_toeplitz, toeplitz

logger = logging.getLogger(__name__)


def least_squares(x, y, M, chop=False, progress=False, **lstsq_kwargs):
    """Estimate a FIR path from its excitation and response.

    Typically `x` is noise played through the actuator with the disturbance
    turned off and `y` what the error sensor picked up. The result can be
    passed as `sec_path_est` to `fxlms.FxLMSFilter`.

    Parameters
    ----------
    x : (N,) array_like
        Excitation signal.
    y : (N,) array_like
        Response of the path to `x`.
    M : int
        Number of taps to estimate.
    chop : bool, optional
        If `True`, average the solutions of square Toeplitz sub-problems instead
        of solving the full rectangular problem. Needs O(M N) instead of
        O(M^2 N) operations.
    progress : bool, optional
        Show a progress bar over the sub-problems when `chop` is `True`.
    **lstsq_kwargs
        Passed to `scipy.linalg.lstsq`.

    Returns
    -------
    h : (M,) numpy.ndarray
        Estimated impulse response.

    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)

    if x.shape != y.shape or x.ndim != 1:
        raise ValueError(f"x and y must be of same shape (N,): {x.shape}, {y.shape}")
    if M <= 0:
        raise ValueError(f"M must be positive: {M}")

    y = y[M - 1 :]  # first M - 1 samples can not be used in estimation
    N = len(y)
    if N < M:
        raise ValueError(f"Not enough data: need at least {2 * M - 1} samples")

    X = toeplitz(x[M - 1 :], np.flip(x[:M]))  # convolution matrix shape N x M
    if not chop:
        return lstsq(X, y, check_finite=False, **lstsq_kwargs)[0]

    # estimate h from mean over sub-problems
    Nseg = N // M
    Xseg = X[: Nseg * M].reshape(Nseg, M, M)
    yseg = y[: Nseg * M].reshape(Nseg, M)
    logger.debug("Solving %d Toeplitz systems of size %d", Nseg, M)

    h = np.zeros(M)
    for Xs, ys in tqdm.tqdm(zip(Xseg, yseg), total=Nseg, disable=not progress):
        h += solve_toeplitz((Xs[:, 0], Xs[0, :]), ys, check_finite=False) / Nseg

    return h
