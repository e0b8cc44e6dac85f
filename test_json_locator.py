import pytest

from conversion_errors import (
    PolylineNotFound, PolylineNotString, RouteNameNotFound, RouteNameNotString,
)
from json_locator import (
    POLYLINE_PATHS, ROUTE_NAME_PATHS, TRAIL_SHAPES,
    extract_polyline, extract_route_name, find_in_json, resolve_pointer,
)


def offline_document(polyline="abc", name="Offline Trail"):
    return {
        "trails": [
            {
                "name": name,
                "defaultMap": {"routes": [{"lineSegments": [{"polyline": {"pointsData": polyline}}]}]},
            }
        ]
    }


def deep_document(polyline="xyz", name="Deep Trail"):
    return {
        "maps": [
            {
                "name": name,
                "routes": [{"lineSegments": [{"polyline": {"pointsData": polyline}}]}],
            }
        ]
    }


def test_shapes_are_tried_offline_first():
    assert [shape.name for shape in TRAIL_SHAPES] == ["offline", "deep"]
    assert POLYLINE_PATHS == [
        "/trails/0/defaultMap/routes/0/lineSegments/0/polyline/pointsData",
        "/maps/0/routes/0/lineSegments/0/polyline/pointsData",
    ]
    assert ROUTE_NAME_PATHS == ["/trails/0/name", "/maps/0/name"]


def test_resolve_pointer_walks_objects_and_arrays():
    document = {"a": [{"b": 1}, {"b": 2}]}
    assert resolve_pointer(document, "/a/1/b") == 2
    assert resolve_pointer(document, "") is document


def test_resolve_pointer_unescapes_tokens():
    document = {"a/b": {"m~n": 7}}
    assert resolve_pointer(document, "/a~1b/m~0n") == 7


@pytest.mark.parametrize("path", [
    "/missing",
    "/a/5",
    "/a/-1",
    "/a/01",
    "/a/x",
    "/a/0/b/c",
    "a/0/b",
    "/a/",
])
def test_resolve_pointer_failed_lookups_return_none(path):
    document = {"a": [{"b": 1}]}
    assert resolve_pointer(document, path) is None


def test_find_in_json_returns_first_match():
    document = {"first": 1, "second": 2}
    assert find_in_json(document, ["/nope", "/second", "/first"]) == 2


def test_find_in_json_returns_default_when_nothing_matches():
    assert find_in_json({"a": 1}, ["/b", "/c"]) is None
    assert find_in_json({"a": 1}, ["/b"], default="fallback") == "fallback"


def test_find_in_json_treats_null_as_present():
    assert find_in_json({"a": None, "b": 1}, ["/a", "/b"], default="missing") is None


def test_extract_from_offline_shape():
    document = offline_document()
    assert extract_polyline(document) == "abc"
    assert extract_route_name(document) == "Offline Trail"


def test_extract_from_deep_shape():
    document = deep_document()
    assert extract_polyline(document) == "xyz"
    assert extract_route_name(document) == "Deep Trail"


def test_offline_shape_takes_precedence():
    document = {**offline_document(), **deep_document()}
    assert extract_polyline(document) == "abc"
    assert extract_route_name(document) == "Offline Trail"


def test_falls_back_to_deep_shape_when_offline_is_incomplete():
    document = deep_document()
    document["trails"] = [{"defaultMap": {"routes": []}}]
    assert extract_polyline(document) == "xyz"
    assert extract_route_name(document) == "Deep Trail"


def test_missing_polyline():
    with pytest.raises(PolylineNotFound):
        extract_polyline({"other": []})


def test_polyline_not_string():
    with pytest.raises(PolylineNotString):
        extract_polyline(offline_document(polyline=[1, 2]))


def test_null_polyline_is_not_a_string():
    with pytest.raises(PolylineNotString):
        extract_polyline(deep_document(polyline=None))


def test_missing_route_name():
    document = offline_document()
    del document["trails"][0]["name"]
    with pytest.raises(RouteNameNotFound):
        extract_route_name(document)


def test_route_name_not_string():
    with pytest.raises(RouteNameNotString):
        extract_route_name(deep_document(name=42))


def test_route_name_is_not_sanitized():
    name = "  <Ridge & Valley> Loop é  "
    assert extract_route_name(offline_document(name=name)) == name
