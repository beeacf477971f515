"""Numerical constants — single source of truth for the scheme kernels.

These values are part of the reproducible numeric contract of the schemes.
Import from here instead of defining local constants.
"""

# WENO
WENO_EPS = 1e-6               # Smoothness regularisation in a_k = c_k / (s_k + eps)^2
WENO_C1 = 0.1                 # Linear weight, stencil 1
WENO_C2 = 0.6                 # Linear weight, stencil 2
WENO_C3 = 0.3                 # Linear weight, stencil 3

# Stencil half-widths (nodes without a full stencil get a zero increment)
ENO_MARGIN = 3
WENO_MARGIN = 3

# Initial square pulse
PULSE_HIGH = 1.0
PULSE_LOW = 0.0
