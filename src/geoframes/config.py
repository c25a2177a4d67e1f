"""Module-wide floating-point precision configuration.

Provides ``set_dtype`` and ``get_dtype`` to control the float dtype used
throughout geoframes.  The default is ``jnp.float64``: ECEF coordinates are
of order 1e6 to 1e7 m, and single precision cannot resolve them to better
than about half a metre.  JAX's 64-bit mode (``jax_enable_x64``) is
switched on the first time the float64 default is read through
``get_dtype``, not at import.  That setting is process-wide, so every JAX
program in the same interpreter runs in 64-bit mode from then on.

Call ``set_dtype`` **before** any JIT compilation, just like JAX's own
``jax.config.update("jax_enable_x64", True)``.  Under JIT, ``get_dtype()``
runs during tracing and its result is baked into the compiled program.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp

_VALID_DTYPES = (jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64)

_dtype = jnp.float64


def set_dtype(dtype) -> None:
    """Set the module-wide float dtype for geoframes.

    Must be called **before** any ``jax.jit`` compilation.  In eager mode
    the change takes effect immediately.

    If *dtype* is ``jnp.float64``, JAX's 64-bit mode is automatically
    enabled via ``jax.config.update("jax_enable_x64", True)``.

    Args:
        dtype: One of ``jnp.float16``, ``jnp.bfloat16``, ``jnp.float32``,
            or ``jnp.float64``.

    Raises:
        ValueError: If *dtype* is not a supported float type.
    """
    global _dtype
    if dtype not in _VALID_DTYPES:
        raise ValueError(
            f"Unsupported dtype {dtype}. Must be one of: "
            f"jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64"
        )
    if dtype == jnp.float64:
        jax.config.update("jax_enable_x64", True)
    _dtype = dtype


def get_dtype():
    """Return the current module-wide float dtype.

    If the active dtype is ``jnp.float64`` and JAX's 64-bit mode is still
    off, it is enabled here.

    Returns:
        The active float dtype (default ``jnp.float64``).
    """
    if _dtype == jnp.float64 and not jax.config.jax_enable_x64:
        jax.config.update("jax_enable_x64", True)
    return _dtype


def get_elevation_eq_tolerance() -> float:
    """Return the dtype-adaptive tolerance for elevation comparisons.

    Used when comparing the reference elevation of two
    :class:`~geoframes.SphericalCoordinates` instances.

    - ``float64``:  1e-6 m
    - ``float32``:  1e-3 m
    - ``float16``:  0.1 m
    - ``bfloat16``: 0.1 m

    Returns:
        float: Tolerance in metres.
    """
    if _dtype == jnp.float64:
        return 1e-6
    if _dtype == jnp.float32:
        return 1e-3
    # float16 and bfloat16
    return 0.1
