import pytest

from origin import cors_headers, preflight_headers, resolve_origin


@pytest.mark.parametrize("pattern", ["*", "", None])
@pytest.mark.parametrize("origin", ["https://a.example.com", "", None, "garbage"])
def test_wildcard_or_empty_pattern_allows_everyone(pattern, origin):
    assert resolve_origin(pattern, origin) == "*"


def test_missing_request_origin_returns_pattern():
    assert resolve_origin("https://site.com", None) == "https://site.com"
    assert resolve_origin("*.example.com", "") == "*.example.com"


class TestSubdomainWildcard:
    pattern = "*.example.com"

    def test_subdomain_is_echoed(self):
        assert resolve_origin(self.pattern, "https://a.example.com") == "https://a.example.com"

    def test_nested_subdomain_with_port_is_echoed(self):
        origin = "http://a.b.example.com:8080"
        assert resolve_origin(self.pattern, origin) == origin

    def test_base_domain_is_echoed(self):
        assert resolve_origin(self.pattern, "https://example.com") == "https://example.com"

    def test_other_domain_rejected(self):
        assert resolve_origin(self.pattern, "https://evil.com") == ""

    def test_bare_suffix_is_not_a_match(self):
        assert resolve_origin(self.pattern, "https://notexample.com") == ""

    def test_suffix_inside_label_is_not_a_match(self):
        assert resolve_origin(self.pattern, "https://example.com.evil.com") == ""

    def test_unparseable_origin_rejected(self):
        assert resolve_origin(self.pattern, "not a url") == ""
        assert resolve_origin(self.pattern, "http://[::1") == ""


def test_exact_pattern():
    assert resolve_origin("https://site.com", "https://site.com") == "https://site.com"
    assert resolve_origin("https://site.com", "https://other.com") == ""
    assert resolve_origin("https://site.com", "http://site.com") == ""


def test_header_builders():
    h = cors_headers("https://site.com")
    assert h == {
        "Access-Control-Allow-Origin": "https://site.com",
        "Access-Control-Allow-Methods": "GET, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type",
    }
    assert preflight_headers("")["Access-Control-Max-Age"] == "86400"
    assert preflight_headers("")["Access-Control-Allow-Origin"] == ""
