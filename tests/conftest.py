import jax.numpy as jnp
import pytest

from astropass.config import set_dtype


@pytest.fixture(autouse=True)
def _ensure_float64():
    """Set float64 precision before every test.

    Reference vectors are compared to better than single precision, and
    pass times are refined to the second, so every test runs in float64
    unless it explicitly overrides it (test_config.py sets float32).
    """
    set_dtype(jnp.float64)
