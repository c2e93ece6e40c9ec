from voice_action.markdown import format_inline, plain_text, preview, render_markdown
from voice_action.models import Bold, Heading, ListItem, Paragraph, Plain, Spacer


def test_empty_input_renders_nothing() -> None:
    assert render_markdown("") == []
    assert render_markdown(None) == []


def test_bold_only_line_is_single_bold_span() -> None:
    blocks = render_markdown("**bold**")

    assert len(blocks) == 1
    assert isinstance(blocks[0], Paragraph)
    bold = [span for span in blocks[0].spans if isinstance(span, Bold)]
    plain = [span for span in blocks[0].spans if isinstance(span, Plain) and span.text]
    assert bold == [Bold("bold")]
    assert plain == []


def test_heading_levels() -> None:
    assert render_markdown("## Title") == [Heading(level=2, text="Title")]
    assert render_markdown("# One\n### Three") == [Heading(level=1, text="One"), Heading(level=3, text="Three")]


def test_mixed_document_preserves_line_order() -> None:
    text = "# PRD\n\n- **Feed**: stories\n* plain item\n1. First\n12. Twelfth\nClosing line"

    assert render_markdown(text) == [
        Heading(level=1, text="PRD"),
        Spacer(),
        ListItem(ordered=False, spans=(Bold("Feed"), Plain(": stories"))),
        ListItem(ordered=False, spans=(Plain("plain item"),)),
        ListItem(ordered=True, spans=(Plain("First"),)),
        ListItem(ordered=True, spans=(Plain("Twelfth"),)),
        Paragraph(spans=(Plain("Closing line"),)),
    ]


def test_unsupported_and_malformed_markup_passes_through() -> None:
    assert format_inline("an **unclosed marker") == (Plain("an **unclosed marker"),)
    assert format_inline("_italic_ and `code`") == (Plain("_italic_ and `code`"),)
    assert render_markdown("####No space") == [Paragraph(spans=(Plain("####No space"),))]
    assert render_markdown("-dash") == [Paragraph(spans=(Plain("-dash"),))]
    assert render_markdown("   ") == [Spacer()]


def test_multiple_bold_runs_alternate() -> None:
    assert format_inline("a **b** c **d**") == (Plain("a "), Bold("b"), Plain(" c "), Bold("d"))


def test_plain_text_and_preview() -> None:
    blocks = render_markdown("# Title\n- **x** y")

    assert plain_text(blocks) == "Title\nx y"
    assert preview("a" * 250) == "a" * 200
    assert preview(None) == ""
