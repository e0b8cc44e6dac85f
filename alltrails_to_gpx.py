# converts an AllTrails route JSON document to a gpx track

import argparse
import json
import os
import sys
import tempfile

from dotenv import load_dotenv

from conversion_errors import (
    ConversionError, InputNotFound, InputUnreadable, MalformedJson, OutputWriteFailure,
)
from json_locator import extract_polyline, extract_route_name
from polyline_decode import POLYLINE_PRECISION, decode
from track_writer import create_gpx, gpx_to_bytes, write_gpx

__version__ = "0.1.0"

STDIO = "-"


def display_name(path, stream):
    return stream if path is None or path == STDIO else path


def log(message, verbose):
    # stdout may carry the gpx document, progress goes to stderr
    if verbose:
        print(message, file=sys.stderr)


def build_track(document):
    """
    Extracts the polyline and the route name from a parsed document and builds the track.
    """
    polyline_text = extract_polyline(document)
    route_name = extract_route_name(document)
    coordinates = decode(polyline_text, POLYLINE_PRECISION)
    return create_gpx(coordinates, route_name)


def _reject_constant(name):
    raise ValueError(f"{name} is not valid JSON")


def parse_document(data):
    try:
        return json.loads(data, parse_constant=_reject_constant)
    except (ValueError, UnicodeDecodeError) as e:
        raise MalformedJson(e) from e
    except RecursionError as e:
        raise MalformedJson("document is nested too deeply") from e


def convert(data, verbose=False):
    """
    Converts the bytes of an AllTrails JSON document to the bytes of a GPX document.
    """
    gpx_track = build_track(parse_document(data))
    log(f"Route: {gpx_track.name}", verbose)
    log(f"Points: {gpx_track.get_points_no()}, length: {gpx_track.length_2d() / 1000:.2f} km", verbose)
    return gpx_to_bytes(gpx_track)


def run(reader, writer):
    """
    Reads a JSON document from a binary reader and writes the GPX document to a binary writer.
    Nothing is written unless the whole conversion succeeds.
    """
    try:
        data = reader.read()
    except OSError as e:
        raise InputUnreadable(getattr(reader, "name", STDIO)) from e

    write_gpx(build_track(parse_document(data)), writer)


def read_input(path):
    if path is None or path == STDIO:
        try:
            return sys.stdin.buffer.read()
        except OSError as e:
            raise InputUnreadable("<stdin>") from e

    try:
        with open(path, "rb") as f:
            return f.read()
    except FileNotFoundError as e:
        raise InputNotFound(path) from e
    except OSError as e:
        raise InputUnreadable(path) from e


def write_output(data, path):
    """
    Writes the finished document to stdout or to a file.

    A file is written under a temporary name in the destination directory and
    moved into place afterwards, so a failed run never leaves a truncated file.
    """
    if path is None or path == STDIO:
        try:
            sys.stdout.buffer.write(data)
            sys.stdout.buffer.flush()
        except OSError as e:
            raise OutputWriteFailure(e, "<stdout>") from e
        return

    directory = os.path.dirname(os.path.abspath(path))
    tmp_path = None
    try:
        with tempfile.NamedTemporaryFile("wb", dir=directory, prefix=".alltrailsgpx-",
                                         suffix=".gpx", delete=False) as f:
            tmp_path = f.name
            f.write(data)
        # temporary files are private, give the result the usual permissions
        umask = os.umask(0)
        os.umask(umask)
        os.chmod(tmp_path, 0o666 & ~umask)
        os.replace(tmp_path, path)
    except OSError as e:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise OutputWriteFailure(e, path) from e


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="alltrailsgpx",
        description="Convert an AllTrails route JSON document to a GPX track.",
    )
    parser.add_argument('-i', '--input', default=os.getenv("ALLTRAILSGPX_INPUT"),
                        help="The input JSON file containing the polyline data. Defaults to stdin.")
    parser.add_argument('-o', '--output', default=os.getenv("ALLTRAILSGPX_OUTPUT"),
                        help="The GPX file to create. Defaults to stdout.")
    parser.add_argument('--verbose', action='store_true', help="Report progress on stderr")
    parser.add_argument('-V', '--version', action='version', version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def main(argv=None):
    load_dotenv()
    args = parse_args(argv)

    try:
        log(f"Reading {display_name(args.input, '<stdin>')}", args.verbose)
        data = read_input(args.input)
        output = convert(data, verbose=args.verbose)
        write_output(output, args.output)
    except ConversionError as e:
        sys.exit(f"Error: {e}")

    log(f"Done! GPX written to {display_name(args.output, '<stdout>')}", args.verbose)


if __name__ == "__main__":
    main()
