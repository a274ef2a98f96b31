"""
Tests for reference page lookup.
"""

import pytest

from glsl_sdk.lang.docs import MAN_PAGE_BASE_URL, man_page_url, symbol_at


class TestManPageUrl:
    """Reference page URLs for builtins."""

    def test_builtin_function(self):
        assert man_page_url("smoothstep") == MAN_PAGE_BASE_URL + "smoothstep.xhtml"

    def test_builtin_variable(self):
        assert man_page_url("gl_Position") == MAN_PAGE_BASE_URL + "gl_Position.xhtml"

    @pytest.mark.parametrize("symbol, page", [
        ("dFdy", "dFdx"),
        ("dFdxFine", "dFdx"),
        ("fwidthCoarse", "fwidth"),
        ("packSnorm4x8", "packUnorm"),
        ("unpackUnorm2x16", "unpackUnorm"),
        ("floatBitsToUint", "floatBitsToInt"),
        ("imulExtended", "umulExtended"),
    ])
    def test_shared_pages(self, symbol, page):
        assert man_page_url(symbol) == f"{MAN_PAGE_BASE_URL}{page}.xhtml"

    @pytest.mark.parametrize("symbol", ["texture2D", "gl_FragColor", "vec4", "for", "myFunc", ""])
    def test_no_page(self, symbol):
        assert man_page_url(symbol) is None

    def test_custom_base_url(self):
        assert man_page_url("mix", "http://docs.local/") == "http://docs.local/mix.xhtml"


class TestSymbolAt:
    """Finding the identifier under a cursor offset."""

    LINE = "vec4 color = mix(a, b, t);"

    def test_inside_word(self):
        assert symbol_at(self.LINE, 15) == "mix"

    def test_right_after_word(self):
        assert symbol_at(self.LINE, 16) == "mix"
        assert symbol_at(self.LINE, 4) == "vec4"

    def test_start_of_text(self):
        assert symbol_at(self.LINE, 0) == "vec4"

    def test_not_on_a_word(self):
        assert symbol_at(self.LINE, 11) is None

    def test_number_is_not_a_symbol(self):
        assert symbol_at("x = 12;", 5) is None

    def test_out_of_range(self):
        assert symbol_at(self.LINE, -1) is None
        assert symbol_at(self.LINE, len(self.LINE) + 1) is None

    def test_lookup_under_cursor(self):
        assert man_page_url(symbol_at(self.LINE, 14)) == MAN_PAGE_BASE_URL + "mix.xhtml"
