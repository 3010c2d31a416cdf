"""Tests for the tree builder: accepted documents and every rejection kind."""

import pytest

from strict_xml_parser.shared.errors import ErrorKind, XMLParseError
from strict_xml_parser.tree.builder import XMLTreeBuilder

DECL = '<?xml version="1.0"?>'
NBSP = "\u00a0"
EM_SPACE = "\u2003"


def build(body, declaration=DECL):
    return XMLTreeBuilder().build(declaration + body)


def build_error(body, declaration=DECL):
    with pytest.raises(XMLParseError) as exc_info:
        build(body, declaration)
    return exc_info.value


class TestScenarios:
    """Test the reference scenarios."""

    def test_empty_input(self):
        """Test empty input has no declaration."""
        error = build_error("", declaration="")
        assert error.kind is ErrorKind.NO_XML_DECLARATION

    def test_unsupported_version(self):
        """Test a declaration with an unsupported version."""
        error = build_error("", declaration='<?xml version="0.9"?>')
        assert error.kind is ErrorKind.UNSUPPORTED_VERSION

    def test_bare_ampersand(self):
        """Test a bare '&' in text."""
        error = build_error("<value>&</value>")
        assert error.kind is ErrorKind.NO_ESCAPED_CHARACTER
        assert error.offset == len(DECL) + len("<value>")

    def test_predefined_entities(self):
        """Test all predefined entities decode in text."""
        document = build("<value>&lt;&gt;&apos;&quot;&amp;</value>")
        assert document.root.inner_text() == "<>'\"&"

    def test_nested_collapse(self):
        """Test a lone text child collapses into the element value."""
        document = build("<a><b>x</b></a>")
        root = document.root
        assert root.name == "a"
        assert len(root.children) == 1
        assert root.children[0].name == "b"
        assert root.children[0].value == "x"
        assert root.children[0].children == []
        assert root.value == ""

    def test_illegal_comment(self):
        """Test '--' inside a comment body."""
        error = build_error("<a><!-- a -- b --></a>")
        assert error.kind is ErrorKind.ILLEGAL_COMMENT
        assert error.offset == len(DECL) + len("<a><!-- a ")

    def test_comments_around_root_skipped(self):
        """Test comments before and after the root contribute nothing."""
        document = build("<!-- before --><root/><!-- after -->    ")
        assert document.root.name == "root"
        assert document.root.children == []

    def test_self_closing_root(self):
        """Test a self-closing root element."""
        document = build("<root/>")
        assert document.root.name == "root"
        assert document.root.children == []
        assert document.root.value == ""


class TestBoundaries:
    """Test boundary inputs."""

    def test_declaration_only(self):
        """Test a document without elements has no root."""
        document = build("")
        assert document.root is None
        assert document.version == "1.0"

    def test_declaration_with_trailing_whitespace(self):
        """Test whitespace after the declaration only."""
        assert build("\n  \n").root is None

    def test_case_sensitive_names(self):
        """Test closing tag names are compared case-sensitively."""
        error = build_error("<Test>x</test>")
        assert error.kind is ErrorKind.MISMATCHED_CLOSING_TAG

    def test_deterministic(self):
        """Test identical input yields identical trees."""
        body = "<a x='1'>t<b>u</b><![CDATA[v]]><c/></a>"
        assert build(body).to_dict() == build(body).to_dict()

    def test_plain_text_round_trip(self):
        """Test inner text of a plain text element equals its decoded text."""
        assert build("<a>fish &amp; chips</a>").root.inner_text() == "fish & chips"


class TestContent:
    """Test text, CDATA and comment handling inside elements."""

    def test_mixed_content_kept_as_children(self):
        """Test text around child elements becomes #text children."""
        root = build("<a>t1<b/>t2</a>").root
        assert [child.name for child in root.children] == ["#text", "b", "#text"]
        assert root.children[0].value == "t1"
        assert root.children[2].value == "t2"
        assert root.value == ""

    def test_blank_text_discarded(self):
        """Test whitespace-only text between tags is dropped."""
        root = build("<a>\n  <b>x</b>\n  <c/>\n</a>").root
        assert [child.name for child in root.children] == ["b", "c"]

    def test_text_whitespace_preserved(self):
        """Test non-blank text keeps its surrounding whitespace."""
        assert build("<a>  x  </a>").root.value == "  x  "

    def test_cdata_verbatim(self):
        """Test CDATA content is neither validated nor unescaped."""
        assert build("<a><![CDATA[<x> & &amp;]]></a>").root.value == "<x> & &amp;"

    def test_cdata_joins_surrounding_text(self):
        """Test text and CDATA accumulate into one text run."""
        root = build("<test value=\"test\">TEST<![CDATA[<ads> Scripting]]>TEST</test>").root
        assert root.value == "TEST<ads> ScriptingTEST"
        assert root.attributes == {"value": "test"}

    def test_comment_inside_text(self):
        """Test a comment does not split a text run."""
        assert build("<a>x<!-- note -->y</a>").root.value == "xy"

    def test_comment_with_single_dashes(self):
        """Test single dashes are allowed in comments."""
        assert build("<!-- a - b --><a/>").root.name == "a"

    def test_empty_comment(self):
        """Test an empty comment."""
        assert build("<a><!----></a>").root.children == []

    def test_numeric_references_pass_through(self):
        """Test numeric references are kept literally."""
        assert build("<a>&#160;&#x2663;</a>").root.value == "&#160;&#x2663;"

    def test_gt_in_text(self):
        """Test a raw '>' is allowed in text."""
        assert build("<a>x>y</a>").root.value == "x>y"


class TestTags:
    """Test tag and attribute handling."""

    def test_attributes(self):
        """Test attributes on opening and self-closing tags."""
        root = build("<a x=\"1\" y='2'><b z=\"3\"/></a>").root
        assert root.attributes == {"x": "1", "y": "2"}
        assert root.children[0].attributes == {"z": "3"}

    def test_attribute_quote_styles(self):
        """Test the quote not delimiting a value may appear in it."""
        root = build("<test value='\"&apos;test\"'/>").root
        assert root.attributes == {"value": "\"'test\""}

    def test_attributes_across_lines(self):
        """Test whitespace including newlines between attributes."""
        root = build("<a\n  x=\"1\"\n  y=\"2\"\n/>").root
        assert root.attributes == {"x": "1", "y": "2"}

    def test_whitespace_before_close(self):
        """Test whitespace before '>' and '/>'."""
        root = build("<a ><b /></a >").root
        assert root.children[0].name == "b"

    def test_deep_nesting(self):
        """Test deeply nested elements."""
        depth = 200
        body = "".join(f"<n{i}>" for i in range(depth)) + "x"
        body += "".join(f"</n{i}>" for i in reversed(range(depth)))
        node = build(body).root
        for _ in range(depth - 1):
            node = node.children[0]
        assert node.value == "x"


class TestTagErrors:
    """Test rejection of malformed tags."""

    @pytest.mark.parametrize("body", ["<>", "<a>< b/></a>", "<a><></a>"])
    def test_no_name_tag(self, body):
        """Test a '<' not followed by a name."""
        error = build_error(body)
        assert error.kind is ErrorKind.NO_NAME_TAG

    def test_no_name_tag_position(self):
        """Test the error points at the '<'."""
        error = build_error("<a>< b/></a>")
        assert error.offset == len(DECL) + 3

    @pytest.mark.parametrize("body,character", [
        ("<a&b/>", "&"),
        ("<a\"b/>", "\""),
        ("<a'b/>", "'"),
        ("<a<b/>", "<"),
    ])
    def test_illegal_tag_name(self, body, character):
        """Test forbidden characters in tag names."""
        error = build_error(body)
        assert error.kind is ErrorKind.ILLEGAL_TAG_NAME
        assert error.offset == len(DECL) + body.index(character, 1)

    @pytest.mark.parametrize("body", [
        "<a",
        "<a x=\"1\"",
        "<a><![CDATA[xx</a>",
        "<a><!-- xx</a>",
    ])
    def test_missing_closing_tag(self, body):
        """Test constructs cut off by the end of input."""
        error = build_error(body)
        assert error.kind is ErrorKind.MISSING_CLOSING_TAG

    def test_unclosed_element(self):
        """Test elements still open at the end of input."""
        error = build_error("<a><b>x")
        assert error.kind is ErrorKind.MISSING_CLOSING_TAG
        assert error.offset == len(DECL) + 3

    def test_illegal_attributes(self):
        """Test malformed attribute text."""
        error = build_error("<a x=1/>")
        assert error.kind is ErrorKind.ILLEGAL_ATTRIBUTES
        assert error.offset == len(DECL) + 3

    def test_gt_inside_attribute_value(self):
        """Test the tag ends at the first '>' even inside a quoted value."""
        error = build_error("<a x=\"1>2\"/>")
        assert error.kind is ErrorKind.ILLEGAL_ATTRIBUTES

    def test_unescaped_attribute_value(self):
        """Test a forbidden character inside an attribute value."""
        error = build_error("<a x=\"it's\"/>")
        assert error.kind is ErrorKind.NO_ESCAPED_CHARACTER
        assert error.offset == len(DECL) + len("<a x=\"it")


class TestClosingTagErrors:
    """Test rejection of malformed closing tags."""

    def test_mismatched(self):
        """Test a closing tag for an element that is not open."""
        error = build_error("<a></b>")
        assert error.kind is ErrorKind.MISMATCHED_CLOSING_TAG
        assert "\"a\"" in error.description
        assert error.offset == len(DECL) + 3

    def test_nothing_open(self):
        """Test a closing tag before any opening tag."""
        error = build_error("</a>")
        assert error.kind is ErrorKind.MISMATCHED_CLOSING_TAG

    def test_closing_after_root(self):
        """Test a closing tag after the root has closed."""
        error = build_error("<a></a></a>")
        assert error.kind is ErrorKind.MISMATCHED_CLOSING_TAG

    def test_empty_closing_name(self):
        """Test '</>' is a mismatched closing tag."""
        error = build_error("<a></>")
        assert error.kind is ErrorKind.MISMATCHED_CLOSING_TAG

    def test_closing_tag_with_attributes(self):
        """Test a closing tag carrying attributes."""
        error = build_error("<a></a x=\"1\">")
        assert error.kind is ErrorKind.CLOSING_TAG_WITH_ATTRIBUTES
        assert error.offset == len(DECL) + len("<a></a ")

    def test_closing_tag_self_closing(self):
        """Test a closing tag ending with '/>'."""
        error = build_error("<a></a/>")
        assert error.kind is ErrorKind.CLOSING_TAG_SELF_CLOSING
        assert error.offset == len(DECL) + len("<a></a")


class TestOutsideRoot:
    """Test content rules outside the root element."""

    def test_trailing_text(self):
        """Test text after the root element."""
        error = build_error("<a/>  junk")
        assert error.kind is ErrorKind.ILLEGAL_FORMAT_TRAILING_CONTENT
        assert error.offset == len(DECL) + len("<a/>  ")

    def test_trailing_text_before_comment(self):
        """Test text after the root followed by a comment."""
        error = build_error("<a/>junk<!-- c -->")
        assert error.kind is ErrorKind.ILLEGAL_FORMAT_TRAILING_CONTENT
        assert error.offset == len(DECL) + len("<a/>")

    def test_leading_text(self):
        """Test text before the root element."""
        error = build_error("x<a/>")
        assert error.kind is ErrorKind.ILLEGAL_FORMAT_TRAILING_CONTENT
        assert error.offset == len(DECL)

    def test_cdata_outside_root(self):
        """Test non-blank CDATA outside the root."""
        error = build_error("<a/><![CDATA[x]]>")
        assert error.kind is ErrorKind.ILLEGAL_FORMAT_TRAILING_CONTENT

    def test_second_root(self):
        """Test a second top-level element."""
        error = build_error("<a/><b/>")
        assert error.kind is ErrorKind.ILLEGAL_FORMAT_TRAILING_CONTENT
        assert error.offset == len(DECL) + len("<a/>")

    def test_unclosed_reported_before_trailing(self):
        """Test unclosed elements win over trailing text at the end of input."""
        error = build_error("<a>x")
        assert error.kind is ErrorKind.MISSING_CLOSING_TAG


class TestErrorLocation:
    """Test line and column reporting."""

    def test_line_and_column(self):
        """Test the location of an error on a later line."""
        body = "\n<a>\n  <b></c>\n</a>"
        error = build_error(body)
        assert error.kind is ErrorKind.MISMATCHED_CLOSING_TAG
        assert (error.line, error.column) == (3, 6)
        assert error.message.endswith("line 3, column 6")

    def test_builder_reusable_after_error(self):
        """Test a builder can be reused after a rejected input."""
        builder = XMLTreeBuilder()
        with pytest.raises(XMLParseError):
            builder.build(DECL + "<a>")
        assert builder.build(DECL + "<a/>").root.name == "a"


class TestNonAsciiWhitespace:
    """Test that only ASCII whitespace counts as whitespace."""

    def test_nbsp_text_kept(self):
        """Test a run of non-breaking spaces is text, not blank."""
        root = build(f"<td>{NBSP}</td>").root
        assert root.value == NBSP

    def test_em_space_between_elements_kept(self):
        """Test an em space between elements becomes a text child."""
        root = build(f"<a><b/>{EM_SPACE}<c/></a>").root
        assert [child.name for child in root.children] == ["b", "#text", "c"]
        assert root.children[1].value == EM_SPACE

    def test_nbsp_after_root(self):
        """Test a non-breaking space after the root is trailing content."""
        error = build_error(f"<a/>{NBSP}")
        assert error.kind is ErrorKind.ILLEGAL_FORMAT_TRAILING_CONTENT
        assert error.offset == len(DECL) + len("<a/>")

    def test_nbsp_before_root(self):
        """Test a non-breaking space before the root is trailing content."""
        error = build_error(f"{NBSP}<a/>")
        assert error.kind is ErrorKind.ILLEGAL_FORMAT_TRAILING_CONTENT
        assert error.offset == len(DECL)

    def test_nbsp_is_part_of_tag_name(self):
        """Test a non-breaking space does not end a tag name."""
        root = build(f"<a{NBSP}/>").root
        assert root.name == "a" + NBSP

    def test_nbsp_does_not_separate_attributes(self):
        """Test a non-breaking space cannot stand in for an attribute separator."""
        body = f'<a{NBSP}x="1"/>'
        error = build_error(body)
        assert error.kind is ErrorKind.ILLEGAL_TAG_NAME
        assert error.offset == len(DECL) + body.index('"')

    def test_nbsp_between_attributes(self):
        """Test a non-breaking space between attributes is illegal."""
        body = f'<a x="1"{NBSP}y="2"/>'
        error = build_error(body)
        assert error.kind is ErrorKind.ILLEGAL_ATTRIBUTES
        assert error.offset == len(DECL) + body.index(NBSP)
