"""Exception types for the geometry core."""


class ZeroVectorError(ValueError):
    """Raised when an operation would construct or normalize the zero vector.

    The zero vector has no direction, so it is never a valid Vector. Hitting
    this error means a caller broke a precondition, e.g. asking a sphere for
    its normal at the sphere's own center.
    """
