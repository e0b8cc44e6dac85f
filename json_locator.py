# Locate the polyline and the route name in an AllTrails JSON document
#
# AllTrails serves the same route in two shapes:
# - detail=offline: "trails" array at the root (/trails/0/defaultMap/routes/0/...)
# - detail=deep: "maps" array at the root (/maps/0/routes/0/...)

from collections import namedtuple

from conversion_errors import (
    PolylineNotFound, PolylineNotString, RouteNameNotFound, RouteNameNotString,
)

TrailShape = namedtuple("TrailShape", ["name", "polyline_path", "route_name_path"])

# Tried in this order, first match wins
TRAIL_SHAPES = (
    TrailShape(
        "offline",
        "/trails/0/defaultMap/routes/0/lineSegments/0/polyline/pointsData",
        "/trails/0/name",
    ),
    TrailShape(
        "deep",
        "/maps/0/routes/0/lineSegments/0/polyline/pointsData",
        "/maps/0/name",
    ),
)

POLYLINE_PATHS = [shape.polyline_path for shape in TRAIL_SHAPES]
ROUTE_NAME_PATHS = [shape.route_name_path for shape in TRAIL_SHAPES]

_MISSING = object()
_DIGITS = "0123456789"


def _unescape(token):
    return token.replace("~1", "/").replace("~0", "~")


def _lookup(document, path):
    # Returns _MISSING instead of None so that a JSON null still counts as present
    if path == "":
        return document
    if not path.startswith("/"):
        return _MISSING

    current = document
    for token in path[1:].split("/"):
        token = _unescape(token)
        if isinstance(current, dict):
            if token not in current:
                return _MISSING
            current = current[token]
        elif isinstance(current, list):
            if not token or token.strip(_DIGITS) or (len(token) > 1 and token[0] == "0"):
                return _MISSING
            index = int(token)
            if index >= len(current):
                return _MISSING
            current = current[index]
        else:
            return _MISSING
    return current


def resolve_pointer(document, path):
    """
    Resolves a JSON pointer (RFC 6901) against a parsed JSON document.

    Args:
        document: Parsed JSON value (dicts, lists and scalars).
        path (str): Pointer such as "/maps/0/name".

    Returns:
        The value at the pointer, or None if any step of the lookup fails.
    """
    value = _lookup(document, path)
    return None if value is _MISSING else value


def find_in_json(document, paths, default=None):
    """
    Returns the value at the first of the given pointers that resolves.
    A JSON null at a pointer is a match. Returns default if nothing resolves.
    """
    for path in paths:
        value = _lookup(document, path)
        if value is not _MISSING:
            return value
    return default


def extract_polyline(document):
    value = find_in_json(document, POLYLINE_PATHS, default=_MISSING)
    if value is _MISSING:
        raise PolylineNotFound()
    if not isinstance(value, str):
        raise PolylineNotString()
    return value


def extract_route_name(document):
    value = find_in_json(document, ROUTE_NAME_PATHS, default=_MISSING)
    if value is _MISSING:
        raise RouteNameNotFound()
    if not isinstance(value, str):
        raise RouteNameNotString()
    return value
