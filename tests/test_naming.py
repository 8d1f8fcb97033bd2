import os

import pytest

from webswags.discovery.naming import (
    DEFAULT_SERVICE_NAME,
    derive_name,
    file_stem_strategy,
    format_service_name,
    marker_parent_strategy,
    parent_dir_strategy,
    split_path,
    title_strategy,
)


def _p(*parts: str) -> str:
    return os.sep.join(parts)


class TestFormatServiceName:
    def test_separators_become_spaces(self):
        assert format_service_name("user-service_api") == "User Service Api"

    def test_whitespace_is_collapsed_and_trimmed(self):
        assert format_service_name("  order \t  history  ") == "Order History"

    def test_each_word_is_capitalized_rest_lowered(self):
        assert format_service_name("HEllo wORLD") == "Hello World"

    def test_camel_case_acronyms_are_one_word(self):
        assert format_service_name("UserAPI") == "Userapi"

    def test_only_separators_formats_to_empty(self):
        assert format_service_name("--__") == ""


class TestDeriveName:
    def test_title_wins_over_path(self):
        assert derive_name("  loyalty  ", _p("connector", "loyalty", "spec", "loyalty.yaml")) == "Loyalty"

    def test_segment_before_spec_dir(self):
        assert derive_name("", _p("connector", "loyalty", "spec", "loyalty.yaml")) == "Loyalty"

    def test_parent_dir_with_hyphen(self):
        assert derive_name("", _p("apis", "user-service", "openapi.yaml")) == "User Service"

    def test_generic_docs_dir_falls_to_parent(self):
        assert derive_name("", _p("docs", "petstore", "swagger.json")) == "Petstore"

    def test_deepest_marker_is_preferred(self):
        path = _p("billing", "api", "invoices", "spec", "v1.yaml")
        assert derive_name("", path) == "Invoices"

    def test_generic_dir_before_marker_is_skipped(self):
        # docs/spec is skipped, the next marker up is used
        path = _p("payments", "api", "docs", "spec", "openapi.yaml")
        assert derive_name("", path) == "Payments"

    def test_filename_fallback_strips_extension(self):
        assert derive_name("", _p("docs", "order_events.yaml")) == "Order Events"

    def test_bare_filename(self):
        assert derive_name(None, "inventory-api.json") == "Inventory Api"

    def test_blank_title_is_ignored(self):
        assert derive_name("   ", _p("svc", "catalog", "openapi.yaml")) == "Catalog"

    def test_title_formatting_to_empty_falls_through(self):
        assert derive_name("---", _p("svc", "catalog", "openapi.yaml")) == "Catalog"

    def test_absolute_path(self):
        path = os.sep + _p("srv", "shipping", "swagger", "api.yaml")
        assert derive_name("", path) == "Shipping"

    def test_empty_path_and_title_still_named(self):
        assert derive_name("", "") == DEFAULT_SERVICE_NAME

    @pytest.mark.parametrize(
        "path",
        [
            _p("a", "b", "c.yaml"),
            _p("spec", "x.json"),
            _p("docs", "doc", "documentation.yml"),
            ".hidden.yaml",
            _p("specs", "openapi", "oas.json"),
        ],
    )
    def test_never_empty(self, path):
        assert derive_name("", path)


class TestStrategies:
    def test_title_strategy_declines_blank(self):
        assert title_strategy("  ", ["a", "b.yaml"]) is None
        assert title_strategy("pet store", []) == "Pet Store"

    def test_marker_parent_considers_the_last_segment(self):
        assert marker_parent_strategy("", ["orders", "openapi"]) == "Orders"
        assert derive_name("", _p("x", "spec", "api")) == "Spec"

    def test_marker_file_name_with_extension_is_not_a_marker(self):
        assert marker_parent_strategy("", ["orders", "openapi.yaml"]) is None

    def test_marker_parent_needs_preceding_segment(self):
        assert marker_parent_strategy("", ["api", "openapi.yaml"]) is None

    def test_marker_parent_marker_check_is_case_insensitive(self):
        assert marker_parent_strategy("", ["Orders", "OpenAPI", "v1.yaml"]) == "Orders"

    def test_parent_dir_rejects_generic(self):
        assert parent_dir_strategy("", ["Documentation", "x.yaml"]) is None
        assert parent_dir_strategy("", ["x.yaml"]) is None

    def test_file_stem(self):
        assert file_stem_strategy("", ["a", "my_api.v2.yaml"]) == "My Api.v2"
        assert file_stem_strategy("", []) is None


class TestSplitPath:
    def test_normalizes_before_splitting(self):
        assert split_path(_p("a", ".", "b", "..", "c.yaml")) == ["a", "c.yaml"]

    def test_empty(self):
        assert split_path("") == []
