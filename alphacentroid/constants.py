"""Constants for Mexican-Hat wavelet centroiding.

The wavelet is tabulated once over its effective support and reused for
every translation of the transform. The defaults (60000 points over [-5, 5])
resolve the wavelet far more finely than any practical scale level needs.
"""

# =============================================================================
# Wavelet table
# =============================================================================

# Number of tabulated wavelet values
WAVELET_NPOINTS = 60000

# Effective support boundaries (wavelet-domain units)
WAVELET_ESL = -5
WAVELET_ESR = 5

# c = 2 / (sqrt(3) * pi^(1/4))
MEXHAT_NORM = 0.8673250705840776

# Substituted for a zero window width
TINY_WINDOW = 1e-200

# =============================================================================
# Sample buffer
# =============================================================================

DEFAULT_BUFFER_CAPACITY = 100
