"""Elementary frame rotations about the coordinate axes.

``Rx``, ``Ry`` and ``Rz`` are *passive* rotations: they re-express a fixed
vector in axes rotated counter-clockwise by ``angle``, following the SOFA
sign convention.  Each is the active Rodrigues rotation of
:func:`~coordconv.math_utils.compute_rotation_matrix` by ``-angle``.
"""

import jax.numpy as jnp

from coordconv.math_utils import compute_rotation_matrix

_X_AXIS = (1.0, 0.0, 0.0)
_Y_AXIS = (0.0, 1.0, 0.0)
_Z_AXIS = (0.0, 0.0, 1.0)


def _to_degrees(angle, use_degrees: bool):
    return angle if use_degrees else jnp.rad2deg(angle)


def Rx(angle: float, use_degrees: bool = False) -> jnp.ndarray:
    """Rotation matrix, for a rotation about the x-axis.

    Args:
        angle (float): Counter-clockwise angle of rotation as viewed
            looking back along the postive direction of the rotation axis.
        use_degrees (bool): Handle input in degrees. Default: ``False``

    Returns:
        jnp.ndarray: Rotation matrix.

    References:

        1. O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and Applications*, 2012, p.27.
    """
    return compute_rotation_matrix(_X_AXIS, -_to_degrees(angle, use_degrees))


def Ry(angle: float, use_degrees: bool = False) -> jnp.ndarray:
    """Rotation matrix, for a rotation about the y-axis.

    Args:
        angle (float): Counter-clockwise angle of rotation as viewed
            looking back along the postive direction of the rotation axis.
        use_degrees (bool): Handle input in degrees. Default: ``False``

    Returns:
        jnp.ndarray: Rotation matrix.
    """
    return compute_rotation_matrix(_Y_AXIS, -_to_degrees(angle, use_degrees))


def Rz(angle: float, use_degrees: bool = False) -> jnp.ndarray:
    """Rotation matrix, for a rotation about the z-axis.

    Args:
        angle (float): Counter-clockwise angle of rotation as viewed
            looking back along the postive direction of the rotation axis.
        use_degrees (bool): Handle input in degrees. Default: ``False``

    Returns:
        jnp.ndarray: Rotation matrix.
    """
    return compute_rotation_matrix(_Z_AXIS, -_to_degrees(angle, use_degrees))
