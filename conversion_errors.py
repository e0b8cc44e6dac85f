# Errors raised while converting an AllTrails JSON document to GPX


class ConversionError(Exception):
    """Base class for every failure of a conversion run."""


class InputNotFound(ConversionError):
    def __init__(self, path):
        self.path = path
        super().__init__(f"Failed to open file: {path}")


class InputUnreadable(ConversionError):
    def __init__(self, path):
        self.path = path
        super().__init__(f"Failed to read input: {path}")


class MalformedJson(ConversionError):
    def __init__(self, cause):
        super().__init__(f"Failed to parse JSON input: {cause}")


class PolylineNotFound(ConversionError):
    def __init__(self):
        super().__init__("Polyline data not found in JSON")


class PolylineNotString(ConversionError):
    def __init__(self):
        super().__init__("Polyline data is not a string")


class RouteNameNotFound(ConversionError):
    def __init__(self):
        super().__init__("Route name not found in JSON")


class RouteNameNotString(ConversionError):
    def __init__(self):
        super().__init__("Route name is not a string")


class PolylineDecodeError(ConversionError):
    def __init__(self, detail):
        super().__init__(f"Failed to decode polyline: {detail}")


class OutputWriteFailure(ConversionError):
    def __init__(self, cause, path=None):
        self.path = path
        if path is None:
            super().__init__(f"Error writing GPX data: {cause}")
        else:
            super().__init__(f"Error writing GPX data: {path} ({cause})")
