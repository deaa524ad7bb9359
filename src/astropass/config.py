"""Precision of the arrays astropass returns.

The propagators work in Python floats (double precision) whatever the
setting; :func:`set_dtype` only chooses the float type of the arrays handed
back to callers and used by the coordinate transforms: propagated
positions and velocities, station geometry and Sun positions.

JAX defaults to single precision and so does astropass.  Pass prediction
bisects elevations to the second, for which single precision is too
coarse near the horizon; call ``set_dtype(jnp.float64)`` (which also turns
on ``jax_enable_x64``) before predicting passes.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp

_DTYPES = {
    "float16": jnp.float16,
    "bfloat16": jnp.bfloat16,
    "float32": jnp.float32,
    "float64": jnp.float64,
}

_dtype = jnp.float32


def set_dtype(dtype) -> None:
    """Choose the float type of returned arrays.

    Args:
        dtype: ``jnp.float16``, ``jnp.bfloat16``, ``jnp.float32`` or
            ``jnp.float64``, or one of those names as a string.

    Raises:
        ValueError: If ``dtype`` is not one of the supported float types.
    """
    global _dtype
    chosen = _DTYPES.get(dtype) if isinstance(dtype, str) else dtype
    if chosen not in _DTYPES.values():
        raise ValueError(
            f"Unsupported dtype {dtype}; expected one of {', '.join(_DTYPES)}"
        )
    if chosen == jnp.float64:
        jax.config.update("jax_enable_x64", True)
    _dtype = chosen


def get_dtype():
    """The float type of returned arrays (``jnp.float32`` unless changed)."""
    return _dtype
