"""Measure the secondary path offline, then use the estimate for control."""

import logging

import numpy as np
import matplotlib.pyplot as plt

from fxlms import FxLMSFilter
from fxlms.io import FakeInterface
from fxlms.static import least_squares
from fxlms.utils import moving_average, wgn

logging.basicConfig(level=logging.INFO)

length = 32  # number of adaptive FIR filter taps
n_taps = 24  # number of estimated secondary path taps
n_identification = 48000  # samples of identification noise
n_samples = 20000  # size of control simulation

# primary and secondary paths
h_pri = np.zeros(32)
h_pri[20] = 1
h_sec = np.zeros(16)
h_sec[8] = 1
h_sec[9] = -0.4

signal = np.random.normal(0, 1, size=n_samples)
sim = FakeInterface(signal, h_pri=h_pri, h_sec=h_sec, noise=wgn(signal, 30, "dB"))

# play identification noise with the disturbance turned off
ys = np.random.normal(0, 1, size=n_identification)
es = np.array([sim.playrec(y, send_signal=False)[1] for y in ys])

# e = d - u and d is zero
h_sec_est = least_squares(ys, -es, n_taps, chop=True, progress=True)

sim.reset()
filt = FxLMSFilter(length, 0.005, np.concatenate(([0], h_sec_est)))

elog = []
y = 0.0
for i in range(n_samples):
    x, e, _, _ = sim.playrec(y)
    y = filt.filt(x)
    filt.adapt(e)
    elog.append(e)

fig, ax = plt.subplots(ncols=2, figsize=(14, 4), constrained_layout=True)

ax[0].set_title("Secondary path")
ax[0].plot(h_sec, "o-", label="true")
ax[0].plot(h_sec_est, "x--", label="estimate")
ax[0].set_xlabel("Tap")
ax[0].legend()

ax[1].set_title("Error Energy")
ax[1].plot(10 * np.log10(moving_average(np.array(elog) ** 2, 256)))
ax[1].set_xlabel("Sample")
ax[1].set_ylabel("Error [dB]")

plt.show()
