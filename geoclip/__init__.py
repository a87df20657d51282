from .core.geo import (
    Geometry,
    Rectangle,
    UnsupportedGeometryError,
    clip,
    clip_boundary,
    from_dict,
)

__version__ = "0.1.0"


def clip_by_rect(
    geometry: Geometry,
    xmin: float,
    ymin: float,
    xmax: float,
    ymax: float,
    boundary: bool = False,
) -> Geometry:
    """
    Clips a geometry by the rectangle given through its bounds.

    Raises:
        ValueError: If the bounds do not describe a non-empty rectangle.
    """
    rect = Rectangle(xmin, ymin, xmax, ymax)
    if boundary:
        return clip_boundary(geometry, rect)
    return clip(geometry, rect)


__all__ = [
    "Rectangle",
    "UnsupportedGeometryError",
    "clip",
    "clip_boundary",
    "clip_by_rect",
    "from_dict",
]
