# Decode the encoded polyline of an AllTrails route into (longitude, latitude) pairs

import polyline

from conversion_errors import PolylineDecodeError

POLYLINE_PRECISION = 5

# Every encoded chunk is a 5-bit value plus a continuation flag, offset by 63
_CHUNK_OFFSET = 63
_CONTINUATION_BIT = 0x20
_MAX_CHUNK = 0x3f


def _check_encoding(text):
    """
    Checks that the text is a complete sequence of (latitude, longitude) values.

    The polyline library fails with an IndexError on truncated input and silently
    accepts characters outside the encoding alphabet, so both are rejected here.
    """
    values = 0
    continued = False
    for position, char in enumerate(text):
        chunk = ord(char) - _CHUNK_OFFSET
        if chunk < 0 or chunk > _MAX_CHUNK:
            raise PolylineDecodeError(f"invalid character {char!r} at position {position}")
        continued = chunk >= _CONTINUATION_BIT
        if not continued:
            values += 1

    if continued:
        raise PolylineDecodeError("encoding ends in the middle of a value")
    if values % 2:
        raise PolylineDecodeError("latitude without a matching longitude")


def decode(text, precision=POLYLINE_PRECISION):
    """
    Decodes a Google encoded polyline.

    The encoding stores latitude first and longitude second; geojson=True makes the
    library return the pairs as (longitude, latitude).

    Args:
        text (str): Encoded polyline, may be empty.
        precision (int): Number of decimal digits the deltas were scaled by.

    Returns:
        list: [(longitude, latitude), ...] in path order.
    """
    if not text:
        return []

    _check_encoding(text)
    try:
        coordinates = polyline.decode(text, precision, geojson=True)
    except (IndexError, ValueError, TypeError) as e:
        raise PolylineDecodeError(e) from e

    return [(float(lon), float(lat)) for lon, lat in coordinates]
