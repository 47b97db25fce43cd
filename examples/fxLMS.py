"""A filtered-reference Least-Mean-Square (FxLMS) filter."""

import logging

import numpy as np
import matplotlib.pyplot as plt

from fxlms import FxLMSFilter
from fxlms.io import FakeInterface
from fxlms.utils import moving_average, wgn

logging.basicConfig(level=logging.INFO)

length = 64  # number of adaptive FIR filter taps
stepsize = 0.005  # adaptation step size
n_samples = 20000  # size of simulation

# primary and secondary paths
h_pri = np.zeros(48)
h_pri[40] = 1
h_pri[44] = -0.5
h_sec = np.zeros(24)
h_sec[16] = 1
h_sec[17] = 0.3

# white noise signal
signal = np.random.normal(0, 1, size=n_samples)

# simulates an audio interface with primary and secondary paths and 40 dB SNR noise
# at the error sensor
sim = FakeInterface(
    signal,
    h_pri=h_pri,
    h_sec=h_sec,
    noise=wgn(signal, 40, "dB"),
)

# secondary path estimate has to account for the control signal being played one
# sample late
filt = FxLMSFilter(length, stepsize, np.concatenate(([0], h_sec)))

# aggregate signals during simulation
xlog = []
elog = []
wslog = []
ylog = []

y = 0.0  # control signal is zero for first sample
for i in range(n_samples):
    # record reference signal x and error signal e while playing back y
    x, e, _, _ = sim.playrec(y)
    # filter
    y = filt.filt(x)
    # adapt filter
    filt.adapt(e)

    xlog.append(x)
    elog.append(e)
    ylog.append(y)
    wslog.append(filt.w.copy())

# plot
fig, ax = plt.subplots(ncols=2, nrows=2, figsize=(14, 8), constrained_layout=True)

ax[0, 0].set_title("Signals")
ax[0, 0].plot(xlog, label="x", alpha=1)
ax[0, 0].plot(ylog, label="y", alpha=0.8)
ax[0, 0].plot(elog, label="e", alpha=0.7)
ax[0, 0].set_xlabel("Sample")
ax[0, 0].legend()

ax[0, 1].set_title("Filter weights")
ax[0, 1].plot(wslog)
ax[0, 1].set_xlabel("Sample")

ax[1, 0].set_title("Error Energy")
ax[1, 0].plot(10 * np.log10(moving_average(np.array(elog) ** 2, 256)))
ax[1, 0].set_xlabel("Sample")
ax[1, 0].set_ylabel("Error [dB]")

ax[1, 1].set_title("Final filter")
ax[1, 1].plot(filt.w)
ax[1, 1].set_xlabel("Tap")

plt.show()
