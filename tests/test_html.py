"""Tests for minifying scripts embedded in HTML."""

import pytest

from jsminifier import minify_embedded
from jsminifier.errors import ScriptTagError
from jsminifier.html import (
    CLOSE_TAG_SENTINEL,
    find_script_elements,
    is_javascript_element,
    mask_template_close_tags,
    split_script_element,
    strip_hiding_comments,
)


class TestMinifyEmbedded:
    """Tests for the HTML wrapper."""

    def test_only_script_bodies_change(self, sample_html: str) -> None:
        """Test markup outside script elements is byte-identical."""
        expected = sample_html.replace(
            "<script>\n  var x = 1 + 2; // sum\n</script>",
            "<script>var x=1+2;</script>",
        ).replace(
            '<script type="text/javascript">\n  function g( a ) {\n    return a;\n  }\n</script>',
            '<script type="text/javascript">function g(a){return a;}</script>',
        )

        assert minify_embedded(sample_html) == expected

    def test_no_scripts_passes_through(self) -> None:
        """Test a document without scripts is returned unchanged."""
        html = "<p>  spaced   out  </p>\n<!-- note -->"

        assert minify_embedded(html) == html

    def test_preserved_comment_inside_tag(self) -> None:
        """Test preserved comments follow the opening tag."""
        html = "<div></div><script>/*! keep */ function f(){}</script>"

        assert minify_embedded(html) == "<div></div><script>/*! keep */\nfunction f(){}</script>"

    def test_close_tag_inside_template(self) -> None:
        """Test </script> inside a template literal does not end the element."""
        html = "<script>\nvar t = `<p></script></p>`;\n</script>\n<p>x</p>"

        assert minify_embedded(html) == "<script>var t=`<p></script></p>`;</script>\n<p>x</p>"

    def test_hiding_comment_lines(self) -> None:
        """Test the old-browser <!-- / --> wrapper is dropped."""
        html = "<script>\n<!--\nvar a = 1;\n//-->\n</script>"

        assert minify_embedded(html) == "<script>var a=1;</script>"

    def test_hiding_markers_beside_tags(self) -> None:
        """Test hiding markers on the same line as the tags are dropped."""
        html = '<script type="text/javascript"><!--\nvar a = 1;\n//--></script>'

        assert minify_embedded(html) == '<script type="text/javascript">var a=1;</script>'

    def test_trailing_line_comment_keeps_close_tag(self) -> None:
        """Test a line comment running into </script> leaves the tag alone."""
        html = "<p>a</p><script>go(); // note</script><p>b</p>"

        assert minify_embedded(html) == "<p>a</p><script>go();</script><p>b</p>"

    def test_opening_tag_kept_as_written(self) -> None:
        """Test attributes of the opening tag are not collapsed."""
        html = '<script  async   data-x = "1">\n  run( 1 );\n</script>'

        assert minify_embedded(html) == '<script  async   data-x = "1">run(1);</script>'

    def test_uppercase_tags(self) -> None:
        """Test tag matching ignores case."""
        html = "<SCRIPT>\n  var a = 1;\n</SCRIPT>"

        assert minify_embedded(html) == "<SCRIPT>var a=1;</SCRIPT>"

    def test_non_javascript_types_untouched(self) -> None:
        """Test JSON and template script elements are left alone."""
        html = (
            '<script type="application/json">{ "a": 1 }</script>\n'
            "<script type='text/x-template'><p>Don't</p></script>"
        )

        assert minify_embedded(html) == html

    def test_external_script_untouched(self) -> None:
        """Test elements with an empty body keep their tag as written."""
        html = '<script  src="//cdn.example.com/a.js" defer></script>\n<script>\n</script>'

        assert minify_embedded(html) == html

    def test_idempotent(self, sample_html: str) -> None:
        """Test a second pass changes nothing."""
        once = minify_embedded(sample_html)

        assert minify_embedded(once) == once

    def test_unclosed_script_tag(self) -> None:
        """Test an opening tag without a close is reported."""
        with pytest.raises(ScriptTagError) as exc_info:
            minify_embedded("<p>x</p><script>var a = 1;")

        assert exc_info.value.stage == "html"
        assert exc_info.value.span[0] == 8


class TestScriptElements:
    """Tests for locating script elements."""

    def test_spans(self) -> None:
        """Test each element span covers its tags."""
        html = "a<script>x</script>b<script src='y.js'></script>"
        spans = find_script_elements(html)

        assert [html[s:e] for s, e in spans] == [
            "<script>x</script>",
            "<script src='y.js'></script>",
        ]

    def test_mask_keeps_length(self) -> None:
        """Test masking swaps the inner close tag for a same-length sentinel."""
        html = "<script>var t = `</script>`;</script>"
        masked = mask_template_close_tags(html)

        assert len(masked) == len(html)
        assert masked.count(CLOSE_TAG_SENTINEL) == 1
        assert masked.endswith("`;</script>")

    def test_close_tag_in_string_ends_element(self) -> None:
        """Test only templates protect a close tag, as in browsers."""
        html = "<script>var s = '</script>';</script>"

        assert mask_template_close_tags(html) == html

    @pytest.mark.parametrize(
        ("element", "expected"),
        [
            ("<script>x</script>", True),
            ('<script type="module">x</script>', True),
            ("<script type=text/javascript>x</script>", True),
            ('<script data-type="x" async>x</script>', True),
            ('<script type="application/ld+json">{}</script>', False),
        ],
    )
    def test_is_javascript_element(self, element: str, expected: bool) -> None:
        """Test the type attribute decides whether to minify."""
        assert is_javascript_element(element) is expected

    def test_strip_hiding_comments(self) -> None:
        """Test wrapper lines are removed and code lines kept."""
        body = "\n  <!-- hide\ncode();\n  -->\n"

        assert strip_hiding_comments(body) == "\n\ncode();\n\n"

    def test_strip_trailing_hiding_marker(self) -> None:
        """Test a //--> on the last line is removed."""
        assert strip_hiding_comments("<!--\ncode(); //-->") == "\ncode(); "

    def test_html_comment_at_end_is_not_a_marker(self) -> None:
        """Test a complete HTML comment ending the body is left whole."""
        body = "code();\n<!-- note -->"

        assert strip_hiding_comments(body) == body

    def test_split_script_element(self) -> None:
        """Test an element splits into its tags and body."""
        element = "<SCRIPT type='module'>go();</SCRIPT>"

        assert split_script_element(element) == ("<SCRIPT type='module'>", "go();", "</SCRIPT>")
