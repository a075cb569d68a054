import jax.numpy as jnp
import pytest

from coordconv.config import set_dtype, set_min_site_elevation, set_refraction_floor


@pytest.fixture(autouse=True)
def _ensure_float64():
    """Set float64 precision before every test.

    test_config.py switches the dtype and the physical limits; this fixture
    restores the defaults so every other test starts from the same state.
    """
    set_dtype(jnp.float64)
    set_refraction_floor(5.0)
    set_min_site_elevation(-500.0)
