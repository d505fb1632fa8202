from unittest import TestCase

from core_types_ts.pipeline.annotations import CommentBlock, from_comment, to_comment
from core_types_ts.pipeline.core_types import Annotations, StringNode


class TestToComment(TestCase):
    """Test JSDoc generation from node annotations"""

    def test_no_annotations(self):
        self.assertIsNone(to_comment(StringNode()))

    def test_title_only_is_single_line(self):
        block = to_comment(StringNode(title="User name"))
        self.assertEqual(block.render(), ["/** User name */"])

    def test_full_layout(self):
        node = StringNode(
            title="Title",
            description="Description",
            examples=["first", "second"],
            default="joe",
            see=["http://username"],
        )
        self.assertEqual(
            to_comment(node).render("    "),
            [
                "    /**",
                "     * Title",
                "     *",
                "     * Description",
                "     * @example first",
                "     * @example second",
                "     * @default joe",
                "     * @see http://username",
                "     */",
            ],
        )

    def test_comment_terminator_is_escaped(self):
        block = to_comment(StringNode(title="ends with */ here"))
        self.assertEqual(block.lines, ["ends with *\\/ here"])

    def test_multiline_example(self):
        block = to_comment(StringNode(examples=["{\n  a: 1\n}"]))
        self.assertEqual(block.lines, ["@example {", "  a: 1", "}"])


class TestFromComment(TestCase):
    """Test best-effort annotation recovery from JSDoc"""

    def test_empty(self):
        self.assertEqual(from_comment(None), Annotations())
        self.assertEqual(from_comment("/** */"), Annotations())

    def test_single_line(self):
        self.assertEqual(from_comment("/** User name */"), Annotations(title="User name"))

    def test_full_block(self):
        text = "\n".join(
            [
                "/**",
                " * Title",
                " *",
                " * Description",
                " * on two lines",
                " * @example first",
                " * @default joe",
                " * @see http://username",
                " * @see http://other",
                " */",
            ]
        )
        self.assertEqual(
            from_comment(text),
            Annotations(
                title="Title",
                description="Description\non two lines",
                examples=["first"],
                default="joe",
                see=["http://username", "http://other"],
            ),
        )

    def test_unknown_tags_are_ignored(self):
        text = "/**\n * Title\n * @deprecated use something else\n * @see http://x\n */"
        self.assertEqual(from_comment(text), Annotations(title="Title", see=["http://x"]))

    def test_malformed_tag_is_ignored(self):
        text = "/**\n * Title\n * @!! broken\n *   continuation\n */"
        self.assertEqual(from_comment(text), Annotations(title="Title"))

    def test_escaped_terminator_is_restored(self):
        self.assertEqual(from_comment("/** not *\\/ */").title, "not */")

    def test_description_without_title_reads_as_title(self):
        block = to_comment(StringNode(description="Only a description"))
        text = "\n".join(block.render())
        self.assertEqual(from_comment(text), Annotations(title="Only a description"))


class TestCommentFidelity(TestCase):
    """Annotations written as JSDoc read back unchanged"""

    def _roundtrip(self, node):
        text = "\n".join(to_comment(node).render("  "))
        return from_comment(text)

    def test_title_description_tags(self):
        node = StringNode(
            title="The name",
            description="First paragraph\n\nSecond paragraph",
            examples=["{ name: \"Joe\" }", "multi\nline"],
            default="{ user: \"\" }",
            see=["http://username"],
        )
        self.assertEqual(self._roundtrip(node), node.annotations)

    def test_multiline_title(self):
        node = StringNode(title="Line one\nLine two", description="Body")
        self.assertEqual(self._roundtrip(node), node.annotations)

    def test_leading_at_in_text_is_escaped(self):
        node = StringNode(title="@title", description="@note this is prose\n\\@already escaped")
        self.assertEqual(to_comment(node).lines, ["\\@title", "", "\\@note this is prose", "\\\\@already escaped"])
        self.assertEqual(self._roundtrip(node), node.annotations)

    def test_leading_at_in_tag_continuation(self):
        node = StringNode(examples=["first\n@second"])
        self.assertEqual(self._roundtrip(node), node.annotations)

    def test_edge_spaces_and_stars_are_kept(self):
        for title in ["*starred", "trailing ", " leading", "**"]:
            with self.subTest(title=title):
                self.assertEqual(self._roundtrip(StringNode(title=title)).title, title)
                multiline = StringNode(title=title, description="Body")
                self.assertEqual(self._roundtrip(multiline), multiline.annotations)

    def test_block_render_is_stable(self):
        block = CommentBlock(["a", "", "b"])
        self.assertEqual(block.render(), ["/**", " * a", " *", " * b", " */"])
