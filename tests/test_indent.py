# =============================================================================
# test_indent.py - Indentation Engine Tests
# =============================================================================
# Tests for indent_for() and context_for().
#
# The engine measures the lines above as they currently are, so inputs
# here are already indented above the line under test.
#
# Test coverage includes:
#   - Block nesting and closing brackets
#   - switch labels
#   - Statement continuation
#   - Preprocessor directives and their continuation lines
#   - Block comments, including unterminated ones
#   - Unbalanced brackets
#   - Tab handling and indentation unit
#   - Forward scanning for multi-line passes
# =============================================================================

import pytest

from glsl_sdk.config import IndentConfig
from glsl_sdk.indent.document import Document
from glsl_sdk.indent.engine import (
    BlockScanner,
    Opener,
    context_for,
    indent_for,
    indent_in_context,
)


# =============================================================================
# Helper Functions
# =============================================================================

def indents(text: str, config: IndentConfig = None) -> list[int]:
    """Indentation column of every line of text."""
    document = Document.from_text(text)
    return [indent_for(document, n, config) for n in range(1, len(document) + 1)]


# =============================================================================
# Block Structure Tests
# =============================================================================

class TestBlocks:
    """Nesting of braces, parentheses and brackets."""

    def test_function_body(self):
        assert indents("void main() {\ngl_FragColor = vec4(1.0);\n}") == [0, 4, 0]

    def test_indent_unit(self):
        text = "void main() {\ngl_FragColor = vec4(1.0);\n}"
        assert indents(text, IndentConfig(unit=2)) == [0, 2, 0]

    def test_nested_blocks(self):
        text = (
            "void main() {\n"
            "    if (x) {\n"
            "        y = 1;\n"
            "    }\n"
            "}"
        )
        assert indents(text) == [0, 4, 8, 4, 0]

    def test_brace_on_own_line(self):
        text = "void main()\n{\n    return;\n}"
        assert indents(text) == [0, 0, 4, 0]

    def test_argument_list(self):
        text = "foo(\n    a,\n    b\n);"
        assert indents(text) == [0, 4, 4, 0]

    def test_array_initializer(self):
        text = "float w[2] = float[](\n    0.5,\n    0.5\n);"
        assert indents(text) == [0, 4, 4, 0]

    def test_closer_follows_opener_line(self):
        """A closer lines up with its opener's line, not with the depth."""
        text = "  void main() {\n      x;\n}"
        assert indent_for(Document.from_text(text), 3) == 2

    def test_tabs_are_measured(self):
        text = "void main() {\n\tif (x) {\n\t\ty;"
        config = IndentConfig(use_tabs=True, tab_width=4)
        assert indents(text, config) == [0, 4, 8]

    def test_brackets_in_comments_ignored(self):
        assert indents("// {\nx;") == [0, 0]
        assert indents("/* ( */\nx;") == [0, 0]

    def test_brackets_in_directives_ignored(self):
        assert indents("#define OPEN {\nx;") == [0, 0]


# =============================================================================
# Unbalanced Bracket Tests
# =============================================================================

class TestUnbalanced:
    """Malformed nesting never raises."""

    def test_extra_closers(self):
        document = Document.from_text("} } }")
        assert indent_for(document, 1) == 0
        assert context_for(document, 1).depth == 0

    def test_closers_then_code(self):
        assert indents("}\n}\nx;") == [0, 0, 0]

    def test_depth_never_negative(self):
        document = Document.from_text("}\n)\n]\nvoid f() {\n    x;")
        assert context_for(document, 5).depth == 1
        assert indent_for(document, 5) == 4

    def test_unmatched_closer_ignored(self):
        document = Document.from_text("foo(a]\nx;")
        assert context_for(document, 2).stack == (Opener("(", 1),)
        assert indent_for(document, 2) == 4

    def test_closer_pops_to_matching_opener(self):
        document = Document.from_text("void f() {\n    g(a, [b};\nx;")
        assert context_for(document, 3).depth == 0
        assert indent_for(document, 3) == 0


# =============================================================================
# switch Label Tests
# =============================================================================

class TestLabels:
    """case and default labels."""

    def test_labels_one_unit_left(self):
        text = (
            "switch (m) {\n"
            "case 0:\n"
            "    x = 1;\n"
            "    break;\n"
            "default:\n"
            "    x = 2;\n"
            "}"
        )
        assert indents(text) == [0, 0, 4, 4, 0, 4, 0]

    def test_nested_switch(self):
        text = (
            "void f() {\n"
            "    switch (m) {\n"
            "    case 0:\n"
            "        break;\n"
            "    }\n"
            "}"
        )
        assert indents(text) == [0, 4, 4, 8, 4, 0]

    def test_label_outside_braces(self):
        assert indent_for(Document.from_text("case 1:"), 1) == 0


# =============================================================================
# Continuation Tests
# =============================================================================

class TestContinuation:
    """Statements spanning several lines."""

    def test_continued_expression(self):
        text = "float x = a +\n    b;\nfloat y;"
        assert indents(text) == [0, 4, 0]

    def test_if_without_braces(self):
        text = "if (x)\n    y = 1;\nz = 2;"
        assert indents(text) == [0, 4, 0]

    def test_comment_between_continued_lines(self):
        text = "x = a +\n// note\n    b;"
        assert indents(text) == [0, 4, 4]

    def test_no_continuation_inside_parentheses(self):
        text = "foo(a +\n    b);"
        assert indents(text) == [0, 4]

    def test_continued_inside_block(self):
        text = "void f() {\n    x = a *\n        b;\n}"
        assert indents(text) == [0, 4, 8, 0]

    def test_context_flags(self):
        document = Document.from_text("x = a +\nb;")
        context = context_for(document, 2)
        assert context.continued
        assert not context.in_comment
        assert context.innermost is None


# =============================================================================
# Preprocessor Tests
# =============================================================================

class TestPreprocessor:
    """Directive lines."""

    def test_directives_at_column_zero(self):
        text = (
            "void main() {\n"
            "    #ifdef FOO\n"
            "    x;\n"
            "    #endif\n"
            "}"
        )
        assert indents(text) == [0, 0, 4, 0, 0]

    def test_directive_continuation_keeps_indent(self):
        text = "#define M(a) \\\n      (a * 2)\nfloat x;"
        assert indents(text) == [0, 6, 0]

    def test_in_preprocessor_context(self):
        document = Document.from_text("#define M \\\n  1")
        assert context_for(document, 2).in_preprocessor


# =============================================================================
# Block Comment Tests
# =============================================================================

class TestComments:
    """Lines inside block comments."""

    def test_comment_layout(self):
        text = (
            "void main() {\n"
            "    /* first\n"
            "       second\n"
            "     * star\n"
            "     */\n"
            "    x = 1;\n"
            "}"
        )
        assert indents(text) == [0, 4, 4, 5, 5, 4, 0]

    def test_star_follows_opening_line_after_code(self):
        """The opening line's indentation counts, not the column of '/*'."""
        document = Document.from_text("x = 1; /* note\n * more */")
        assert indent_for(document, 2) == 1

    def test_star_follows_indented_opening_line(self):
        text = "void main() {\n    float w = 0.5; /* weight\n * of the\n   center tap */\n}"
        document = Document.from_text(text)
        assert indent_for(document, 3) == 5
        assert indent_for(document, 4) == 4

    def test_comment_offset(self):
        document = Document.from_text("/* a\n* b\n*/")
        assert indent_for(document, 2, IndentConfig(comment_offset=0)) == 0
        assert indent_for(document, 2, IndentConfig(comment_offset=3)) == 3

    def test_unterminated_comment_inherits_previous_line(self):
        document = Document.from_text("void main() {\n    /* open\n  text\n more")
        assert context_for(document, 3).in_comment
        assert indent_for(document, 3) == 4
        assert indent_for(document, 4) == 2

    def test_unterminated_comment_in_directive(self):
        """Lines after it inherit the line above, not their own indentation."""
        document = Document.from_text("#define X 1 /* open\n  a\n    b")
        context = context_for(document, 3)
        assert context.in_comment
        assert not context.in_preprocessor
        assert indent_for(document, 2) == 0
        assert indent_for(document, 3) == 2


# =============================================================================
# Edge Case Tests
# =============================================================================

class TestEdgeCases:

    def test_empty_document(self):
        assert indent_for(Document(), 1) == 0

    def test_line_out_of_range(self):
        document = Document.from_text("x;")
        with pytest.raises(IndexError):
            indent_for(document, 2)

    def test_blank_line_gets_block_indent(self):
        assert indents("void f() {\n\n}") == [0, 4, 0]

    def test_bad_number_counts_as_code(self):
        assert indents("x = 0x +\n    1;") == [0, 4]


# =============================================================================
# Block Scanner Tests
# =============================================================================

class TestBlockScanner:
    """Carrying the structural state forward line by line."""

    def test_matches_context_for(self, indented_shader):
        document = Document.from_text(indented_shader)
        scanner = BlockScanner()
        for line_number in range(1, len(document) + 1):
            context = scanner.context(document.enclosing_token(line_number))
            assert context == context_for(document, line_number)
            scanner.feed(document.tokens(line_number), line_number)

    def test_indent_in_context_with_other_indentation(self):
        """Opener lines are measured through the given lookup."""
        document = Document.from_text("void f() {\nx;")
        context = context_for(document, 2)
        column = indent_in_context(document, 2, context, IndentConfig(), lambda number: 8)
        assert column == 12
