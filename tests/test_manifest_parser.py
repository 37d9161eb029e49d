import json

import pytest

from pwacheck.manifest.parser import parse_manifest
from pwacheck.manifest.types import IconDescriptor

MANIFEST_URL = "https://example.com/static/manifest.json"
DOC_URL = "https://example.com/index.html"


def parse(obj) -> object:
    text = obj if isinstance(obj, str) else json.dumps(obj)
    return parse_manifest(text, MANIFEST_URL, DOC_URL)


@pytest.mark.parametrize("text", ["", "   ", "{,:}", "{\"name\": ", "not json"])
def test_invalid_json_has_no_value(text):
    manifest = parse(text)
    assert manifest.raw == text
    assert manifest.value is None
    assert manifest.is_parse_failure
    assert "isn't valid JSON" in manifest.debug_string


@pytest.mark.parametrize("text", ["[]", "[{}]", "42", "\"manifest\"", "null", "true"])
def test_non_object_top_level_has_no_value(text):
    manifest = parse(text)
    assert manifest.value is None
    assert manifest.debug_string == "ERROR: manifest is not a JSON object"


def test_empty_object_has_all_fields_absent():
    manifest = parse("{}")
    assert manifest.value is not None
    assert manifest.debug_string is None
    for fv in (manifest.value.start_url, manifest.value.short_name,
               manifest.value.name, manifest.value.icons):
        assert fv.raw is None
        assert fv.value is None
        assert fv.debug_string is None


def test_names_are_trimmed():
    manifest = parse({"name": "  My App ", "short_name": "App"})
    assert manifest.value.name.value == "My App"
    assert manifest.value.name.raw == "  My App "
    assert manifest.value.short_name.value == "App"


def test_non_string_name_is_invalid_without_affecting_siblings():
    manifest = parse({"name": 7, "short_name": "App", "start_url": "/"})
    assert manifest.value.name.value is None
    assert manifest.value.name.raw == 7
    assert manifest.value.name.debug_string == "ERROR: expected a string."
    assert manifest.value.short_name.value == "App"
    assert manifest.value.start_url.value == "https://example.com/"


def test_blank_short_name_is_invalid():
    manifest = parse({"short_name": "   "})
    assert manifest.value.short_name.value is None
    assert "short_name" in manifest.value.short_name.debug_string


def test_start_url_resolves_against_manifest_url():
    manifest = parse({"start_url": "app/?src=pwa"})
    assert manifest.value.start_url.value == "https://example.com/static/app/?src=pwa"


def test_start_url_absolute_same_origin():
    manifest = parse({"start_url": "https://example.com:443/home"})
    assert manifest.value.start_url.value == "https://example.com:443/home"
    assert manifest.value.start_url.debug_string is None


@pytest.mark.parametrize(
    "raw, message",
    [
        ("", "ERROR: start_url string empty"),
        (5, "ERROR: expected a string."),
        (["/"], "ERROR: expected a string."),
        ("https://other.example.com/", "ERROR: start_url must be same-origin as document"),
        ("http://example.com/", "ERROR: start_url must be same-origin as document"),
        ("http://[::1/", f"ERROR: invalid start_url relative to {MANIFEST_URL}"),
    ],
)
def test_invalid_start_url(raw, message):
    fv = parse({"start_url": raw}).value.start_url
    assert fv.value is None
    assert fv.raw == raw
    assert fv.debug_string == message


def test_icons_are_parsed():
    manifest = parse({
        "icons": [
            {"src": "icon-192.png", "sizes": "192x192", "type": "image/png"},
            {"src": "/icon-512.png", "sizes": "512x512 256x256 any", "density": 2},
        ]
    })
    icons = manifest.value.icons.value
    assert icons == (
        IconDescriptor(
            src="https://example.com/static/icon-192.png",
            sizes=frozenset({"192x192"}),
            type="image/png",
        ),
        IconDescriptor(
            src="https://example.com/icon-512.png",
            sizes=frozenset({"512x512", "256x256", "any"}),
            density=2.0,
        ),
    )
    assert manifest.value.icons.debug_string is None
    assert icons[1].dimensions() == [(512, 512), (256, 256)]


def test_icons_without_src_are_dropped():
    fv = parse({"icons": [{"sizes": "48x48"}, {"src": ""}, "icon.png", {"src": "ok.png"}]}).value.icons
    assert [i.src for i in fv.value] == ["https://example.com/static/ok.png"]
    assert "3 icon(s)" in fv.debug_string


def test_icon_bad_members_fall_back():
    icon = parse({"icons": [{"src": "a.png", "sizes": 192, "type": 1, "density": -1}]}).value.icons.value[0]
    assert icon.sizes == frozenset()
    assert icon.type is None
    assert icon.density == 1.0


def test_icons_not_an_array():
    fv = parse({"icons": {"src": "a.png"}}).value.icons
    assert fv.value is None
    assert fv.debug_string == "ERROR: 'icons' expected to be an array but is not."


def test_empty_icons_array_is_empty_tuple():
    fv = parse({"icons": []}).value.icons
    assert fv.value == ()
    assert fv.debug_string is None


def test_parse_is_referentially_transparent():
    text = json.dumps({"name": "App", "icons": [{"src": "a.png"}], "start_url": "/"})
    assert parse(text) == parse(text)


def test_to_dict_uses_debug_string_key():
    data = parse({"name": 1}).to_dict()
    assert data["value"]["name"] == {"raw": 1, "value": None, "debugString": "ERROR: expected a string."}
    assert parse("[]").to_dict()["value"] is None


def test_deeply_nested_json_is_a_parse_failure():
    text = '{"name": ' + "[" * 100000 + "]" * 100000 + "}"
    manifest = parse(text)
    assert manifest.value is None
    assert "isn't valid JSON" in manifest.debug_string
