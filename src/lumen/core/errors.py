"""Error types shared across the rendering pipeline."""


class DegenerateGeometryError(ValueError):
    """Raised when geometry has no well-defined direction.

    Normalising a zero-length vector or building a rotation about a
    zero-length axis has no meaningful result, so these operations fail
    fast instead of propagating non-finite values into the render.
    """
