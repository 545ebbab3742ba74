import math

import numpy as np

LN2 = math.log(2.0)


def decay_constant(half_life_h):
    """Elimination rate constant λ = ln(2) / t½ (1/h)."""
    return LN2 / half_life_h


def concentration(amount_mg, half_life_h, elapsed_h):
    """
    Amount left from a single intake after `elapsed_h` hours.

      C(Δt) = amount * exp(-λ Δt)   for Δt >= 0
      C(Δt) = 0                      for Δt < 0   (intake hasn't happened yet)

    Parameters:
      amount_mg   : amount taken (mg), scalar or array
      half_life_h : elimination half-life (h), must be > 0
      elapsed_h   : hours since the intake, scalar or array

    Returns a float for scalar input, otherwise an ndarray broadcast from
    amount_mg and elapsed_h.
    """
    elapsed = np.asarray(elapsed_h, dtype=float)
    lam = decay_constant(half_life_h)

    # Clip before exp so future intakes can't overflow, then mask them out
    C = np.asarray(amount_mg, dtype=float) * np.exp(-lam * np.maximum(elapsed, 0.0))
    C = np.where(elapsed >= 0.0, C, 0.0)

    if C.ndim == 0:
        return float(C)
    return C
