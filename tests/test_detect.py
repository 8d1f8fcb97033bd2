import datetime

import pytest

from webswags.discovery.detect import detect_format, load_tree, looks_like_json, yaml_to_json_tree
from webswags.discovery.errors import NotASpecDocument


class TestDetectFormat:
    def test_json_extension_wins_over_content(self):
        assert detect_format("api/openapi.json", b"openapi: 3.0.0") == "json"

    def test_yaml_extensions_win_over_content(self):
        assert detect_format("api/openapi.yaml", b'{"openapi": "3.0.0"}') == "yaml"
        assert detect_format("api/openapi.yml", b'{"openapi": "3.0.0"}') == "yaml"

    def test_extension_is_case_insensitive(self):
        assert detect_format("API/OPENAPI.JSON", b"") == "json"
        assert detect_format("api/spec.YML", b"{}") == "yaml"

    def test_unknown_extension_sniffs_object(self):
        assert detect_format("spec.txt", b' \t\r\n{"swagger": "2.0"}') == "json"

    def test_unknown_extension_sniffs_array(self):
        assert detect_format("spec", b"\n[1, 2]") == "json"

    def test_unknown_extension_defaults_to_yaml(self):
        assert detect_format("spec.txt", b"swagger: '2.0'") == "yaml"
        assert detect_format("spec", b"") == "yaml"


class TestLooksLikeJson:
    def test_accepts_str_and_bytes(self):
        assert looks_like_json("  {}") is True
        assert looks_like_json(b"  []") is True

    def test_rejects_yaml(self):
        assert looks_like_json("key: {a: 1}") is False


class TestLoadTree:
    def test_json_content(self):
        assert load_tree(b'{"openapi": "3.1.0", "paths": {}}') == {"openapi": "3.1.0", "paths": {}}

    def test_yaml_keys_become_strings(self):
        tree = load_tree(b"responses:\n  200:\n    description: ok\n  true: x\n")
        assert tree == {"responses": {"200": {"description": "ok"}, "true": "x"}}

    def test_yaml_dates_become_iso_strings(self):
        tree = load_tree(b"info:\n  version: 2024-05-01\n")
        assert tree == {"info": {"version": "2024-05-01"}}

    def test_utf8_bom_is_tolerated(self):
        assert load_tree('\ufeff{"swagger": "2.0"}'.encode("utf-8")) == {"swagger": "2.0"}

    def test_invalid_json_raises(self):
        with pytest.raises(NotASpecDocument) as exc:
            load_tree(b'{"openapi": ', "bad.json")
        assert exc.value.path == "bad.json"
        assert "invalid JSON" in str(exc.value)

    def test_invalid_yaml_raises(self):
        with pytest.raises(NotASpecDocument, match="invalid YAML"):
            load_tree(b"key: [unclosed\n  - x: y: z")

    def test_binary_content_raises(self):
        with pytest.raises(NotASpecDocument, match="not UTF-8"):
            load_tree(b"\xff\xfe\x00\x81")

    def test_cyclic_yaml_anchor_raises(self):
        with pytest.raises(NotASpecDocument) as exc:
            load_tree(b"a: &a\n  - *a\n", "anchors.yaml")
        assert exc.value.reason == "document nests too deeply"

    def test_deeply_nested_json_raises(self):
        with pytest.raises(NotASpecDocument, match="nests too deeply"):
            load_tree(b"[" * 100000 + b"]" * 100000, "deep.json")


class TestYamlToJsonTree:
    def test_nested_conversion(self):
        value = {1: [datetime.date(2020, 1, 2), {None: 1.5}]}
        assert yaml_to_json_tree(value) == {"1": ["2020-01-02", {"null": 1.5}]}

    def test_scalars_pass_through(self):
        assert yaml_to_json_tree("text") == "text"
        assert yaml_to_json_tree(None) is None
