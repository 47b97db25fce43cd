"""Print every sample of a short FxLMS run to the console."""

import logging

from fxlms import FxLMSFilter
from fxlms.io import simulate

logging.basicConfig(level=logging.DEBUG, format="%(message)s")

length = 8  # number of adaptive FIR filter taps
stepsize = 0.01  # adaptation step size

# secondary path, assumed to be known exactly
h_sec = [0.5, 0.3, 0.2]

# reference signal and disturbance at the error sensor
x = [1, 0.5, -0.2, 0.3, -0.7, 0.6, 0.1, -0.3, 0.4, -0.5]
d = [0.9, 0.4, -0.1, 0.2, -0.6, 0.55, 0.05, -0.25, 0.35, -0.45]

filt = FxLMSFilter(length, stepsize, h_sec)
simulate(filt, x, d, h_sec)
