# Build a GPX track from decoded coordinates and serialize it

import re

import gpxpy
import gpxpy.gpx

from conversion_errors import OutputWriteFailure

GPX_VERSION = "1.1"
GPX_CREATOR = "alltrailsgpx"

# Complement of the XML 1.0 Char production
_XML_INVALID_CHAR = re.compile(r"[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def create_gpx(coordinates, name):
    """
    Creates a named GPX track with a single segment from (longitude, latitude) pairs.
    """
    # Create a GPX track
    gpx_track = gpxpy.gpx.GPXTrack(name=name)

    # Create a GPX segment
    gpx_segment = gpxpy.gpx.GPXTrackSegment()
    gpx_track.segments.append(gpx_segment)

    # Add points to the segment, no elevation or time
    for lon, lat in coordinates:
        gpx_segment.points.append(gpxpy.gpx.GPXTrackPoint(lat, lon))

    return gpx_track


def build_document(gpx_track):
    # Create a new GPX object holding only this track
    gpx = gpxpy.gpx.GPX()
    gpx.version = GPX_VERSION
    gpx.creator = GPX_CREATOR
    gpx.tracks.append(gpx_track)
    return gpx


def check_xml_text(text, field):
    """
    Rejects text that cannot appear in an XML 1.0 document (control characters,
    lone surrogates, U+FFFE/U+FFFF). gpxpy escapes markup but copies these as-is.
    """
    match = _XML_INVALID_CHAR.search(text)
    if match:
        raise OutputWriteFailure(
            f"{field} contains character {match.group()!r} not allowed in XML at position {match.start()}")


def gpx_to_bytes(gpx_track):
    if gpx_track.name is not None:
        check_xml_text(gpx_track.name, "track name")

    gpx = build_document(gpx_track)
    try:
        xml = gpx.to_xml(version=GPX_VERSION)
        return xml.encode("utf-8")
    except (gpxpy.gpx.GPXException, ValueError, TypeError) as e:
        raise OutputWriteFailure(e) from e


def write_gpx(gpx_track, sink):
    """
    Serializes the track as a GPX document and writes it to a binary sink.

    The document is rendered completely before the sink is touched, so a
    serialization error never leaves half a document behind.
    """
    data = gpx_to_bytes(gpx_track)
    try:
        sink.write(data)
    except OSError as e:
        raise OutputWriteFailure(e) from e
