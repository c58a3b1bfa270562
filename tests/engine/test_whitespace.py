"""Tests for whitespace collapsing."""

import pytest

from jsminifier.engine.whitespace import collapse_whitespace


class TestCollapseWhitespace:
    """Tests for the whitespace collapser."""

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("a  =  b", "a=b"),
            ("var   x", "var x"),
            ("if (a) { b(); }", "if(a){b();}"),
            ("f( a , b )", "f(a,b)"),
            ("x = [ 1, 2 ]", "x=[1,2]"),
            ("o = { k : v }", "o={k:v}"),
            ("return x", "return x"),
            ("a < b > c", "a<b>c"),
            ("   foo   ", "foo"),
        ],
    )
    def test_collapse(self, source: str, expected: str) -> None:
        """Test spaces next to symbols vanish and others shrink to one."""
        assert collapse_whitespace(source) == expected

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("a + +b", "a+ +b"),
            ("a - -b", "a- -b"),
            ("a++ + b", "a++ +b"),
            ("a + ++b", "a+ ++b"),
            ("a-- - b", "a-- -b"),
            ("x < !y", "x< !y"),
        ],
    )
    def test_keeps_space_between_merging_operators(self, source: str, expected: str) -> None:
        """Test a space that keeps two operators apart is not removed."""
        assert collapse_whitespace(source) == expected

    @pytest.mark.parametrize(
        "source",
        ["a + +b", "function f ( ) {  return  1 ; }", "x  y   z", "a++ + b", "a - -b"],
    )
    def test_idempotent(self, source: str) -> None:
        """Test collapsing its own output changes nothing."""
        once = collapse_whitespace(source)

        assert collapse_whitespace(once) == once
