from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from markdown_to_html.config import ConverterConfig
from markdown_to_html.constants import CODE_FENCE, HTML_TAIL
from markdown_to_html.converter import (
    ConvertFileError,
    convert_file,
    convert_markdown,
    render_document,
)
from markdown_to_html.models import LineKind
from markdown_to_html.parser import convert_lines

PREAMBLE = (
    "<!DOCTYPE html>\n"
    "<html>\n"
    "<head>\n"
    '<meta charset="UTF-8">\n'
    "<title>Markdown to HTML</title>\n"
    "</head>\n"
    "<body>\n"
)


def _write_markdown(tmp_path: Path, content: str) -> Path:
    target = tmp_path / "sample.md"
    target.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
    return target


def test_plain_line_becomes_paragraph():
    assert convert_lines(["hello *world*"]).fragments == ["<p>hello <i>world</i></p>"]


def test_blank_line_is_an_empty_paragraph():
    assert convert_lines([""]).fragments == ["<p></p>"]


def test_heading_levels():
    assert convert_lines(["#### Title"]).fragments == ["<h4>Title</h4>"]
    assert convert_lines(["####### Title"]).fragments == ["<p>####### Title</p>"]


def test_consecutive_ordered_items_share_one_list():
    assert convert_lines(["1. a", "2. b"]).fragments == [
        "<ol>",
        "<li>a</li>",
        "<li>b</li>",
        "</ol>",
    ]


def test_list_closed_before_following_paragraph():
    assert convert_lines(["* a", "", "after"]).fragments == [
        "<ul>",
        "<li>a</li>",
        "</ul>",
        "<p></p>",
        "<p>after</p>",
    ]


def test_switching_list_kind_closes_previous_list():
    assert convert_lines(["1. one", "* two", "> three"]).fragments == [
        "<ol>",
        "<li>one</li>",
        "</ol>",
        "<ul>",
        "<li>two</li>",
        "</ul>",
        "<blockquote>",
        "three<br>",
        "</blockquote>",
    ]


def test_heading_breaks_list_context():
    assert convert_lines(["* a", "## Next", "* b"]).fragments == [
        "<ul>",
        "<li>a</li>",
        "</ul>",
        "<h2>Next</h2>",
        "<ul>",
        "<li>b</li>",
        "</ul>",
    ]


def test_blockquote_lines_share_one_wrapper():
    assert convert_lines(["> first **line**", "> second"]).fragments == [
        "<blockquote>",
        "first <b>line</b><br>",
        "second<br>",
        "</blockquote>",
    ]


def test_code_block_lines_are_verbatim():
    result = convert_lines(
        [
            "```python",
            "# not a heading",
            "* not a list",
            "**x** <tag> & [a](b)",
            "```",
            "after",
        ]
    )

    assert result.fragments == [
        "<pre><code>",
        "# not a heading",
        "* not a list",
        "**x** <tag> & [a](b)",
        "</code></pre>",
        "<p>after</p>",
    ]


def test_fence_closes_open_list():
    assert convert_lines(["1. a", "```", "code", "```"]).fragments == [
        "<ol>",
        "<li>a</li>",
        "</ol>",
        "<pre><code>",
        "code",
        "</code></pre>",
    ]


def test_unterminated_fence_is_force_closed():
    result = convert_lines(["```", "code"])

    assert result.fragments == ["<pre><code>", "code", "</code></pre>"]
    assert result.state.is_closed


def test_open_list_is_force_closed_at_end():
    result = convert_lines(["> quote"])

    assert result.fragments[-1] == "</blockquote>"
    assert result.state.is_closed


def test_empty_document_has_no_body():
    result = convert_lines([])

    assert result.fragments == []
    assert result.state.is_closed


def test_line_counts_skip_code_block_contents():
    result = convert_lines(["# T", "text", "```", "raw", "```", "* a", "* b"])

    assert result.line_counts == {
        LineKind.HEADING: 1,
        LineKind.PLAIN: 1,
        LineKind.CODE_FENCE: 1,
        LineKind.UNORDERED_ITEM: 2,
    }


def test_inline_spans_inside_items_and_headings():
    assert convert_lines(["1. ![alt](img.png)", "# **[x](y)**"]).fragments == [
        "<ol>",
        '<li><img src="img.png" alt="alt"></li>',
        "</ol>",
        '<h1><b><a href="y">x</a></b></h1>',
    ]


def test_three_line_document_end_to_end():
    html = convert_markdown("# Title\nplain text\n* item\n")

    assert html == (
        PREAMBLE
        + "<h1>Title</h1>\n"
        + "<p>plain text</p>\n"
        + "<ul>\n"
        + "<li>item</li>\n"
        + "</ul>\n"
        + HTML_TAIL
    )


def test_convert_markdown_accepts_crlf_line_endings():
    assert convert_markdown("1. a\r\n2. b\r\n") == convert_markdown("1. a\n2. b\n")


def test_convert_markdown_keeps_form_feed_inside_code_block():
    html = convert_markdown(f"{CODE_FENCE}\na\x0cb\n{CODE_FENCE}\n")

    assert "<pre><code>\na\x0cb\n</code></pre>\n" in html


def test_convert_markdown_uses_configured_title():
    html = convert_markdown("text", ConverterConfig(title="Notes"))

    assert "<title>Notes</title>" in html


def test_render_document_wraps_fragments():
    assert render_document(["<p>x</p>"]) == PREAMBLE + "<p>x</p>\n</body>\n</html>\n"


def test_convert_file_reads_source(tmp_path: Path):
    target = _write_markdown(
        tmp_path,
        f"""
        ## Install
        {CODE_FENCE}bash
        pip install .
        {CODE_FENCE}
        """,
    )

    html = convert_file(target)

    assert html.startswith(PREAMBLE)
    assert "<h2>Install</h2>\n<pre><code>\npip install .\n</code></pre>\n" in html


def test_convert_file_missing_source(tmp_path: Path):
    with pytest.raises(ConvertFileError) as excinfo:
        convert_file(tmp_path / "missing.md")

    assert isinstance(excinfo.value.__cause__, OSError)


def test_convert_file_rejects_directory(tmp_path: Path):
    with pytest.raises(ConvertFileError, match="not a regular file"):
        convert_file(tmp_path)


def test_convert_file_rejects_invalid_utf8(tmp_path: Path):
    target = tmp_path / "binary.md"
    target.write_bytes(b"# Title\n\xff\xfe\n")

    with pytest.raises(ConvertFileError, match="Invalid UTF-8"):
        convert_file(target)


def test_convert_file_enforces_size_limit(tmp_path: Path):
    target = _write_markdown(tmp_path, "# Title\n" * 20)

    with pytest.raises(ConvertFileError, match="maximum allowed size of 10 bytes"):
        convert_file(target, ConverterConfig(max_file_size=10))


def test_convert_file_rejects_invalid_config(tmp_path: Path):
    target = _write_markdown(tmp_path, "# Title\n")

    with pytest.raises(ConvertFileError, match="`title` must not be empty"):
        convert_file(target, ConverterConfig(title=""))


def test_convert_file_keeps_line_separator_inside_item(tmp_path: Path):
    target = tmp_path / "separator.md"
    target.write_text("* one\u2028two\n", encoding="utf-8")

    html = convert_file(target)

    assert "<ul>\n<li>one\u2028two</li>\n</ul>\n" in html
