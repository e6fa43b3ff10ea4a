import re
import unittest

from pr_review_commenter.comment_parser import (
    CommentPattern,
    extract_comments,
    is_line_in_diff,
    validate_comment,
)
from pr_review_commenter.exceptions import CommentValidationError
from pr_review_commenter.models import ReviewComment


class TestExtractComments(unittest.TestCase):
    def test_parses_openai_style_responses(self):
        response = """
      Line 10: This is a comment.
      Line 20: Another comment.
    """
        comments = extract_comments(response, "test.js")

        self.assertEqual(comments, [
            ReviewComment(path="test.js", line=10, body="This is a comment."),
            ReviewComment(path="test.js", line=20, body="Another comment."),
        ])

    def test_parses_gemini_bullets(self):
        response = "**Review**\n\n* Line 5: Use `const` instead of `let`.\n* Line 9: Missing error handling."
        comments = extract_comments(response, "src/app.js")

        self.assertEqual(comments, [
            ReviewComment(path="src/app.js", line=5, body="Use `const` instead of `let`."),
            ReviewComment(path="src/app.js", line=9, body="Missing error handling."),
        ])

    def test_skips_suggested_improvements_bullet(self):
        response = "* Line 7: Suggested Improvements: split this function\n* Line 8: Rename `x`."
        comments = extract_comments(response, "a.py")

        self.assertEqual(comments, [ReviewComment(path="a.py", line=8, body="Rename `x`.")])

    def test_bullet_with_marker_is_skipped_even_with_a_later_line_reference(self):
        comments = extract_comments("* Line 3: Suggested Improvements: Line 5: use const", "a.js")
        self.assertEqual(comments, [])

    def test_plain_line_uses_first_line_reference(self):
        comments = extract_comments("Line 3: see also Line 5: for context", "a.js")
        self.assertEqual(comments, [ReviewComment(path="a.js", line=3, body="see also Line 5: for context")])

    def test_plain_line_with_marker_is_kept(self):
        comments = extract_comments("Line 4: Suggested Improvements: none", "a.py")
        self.assertEqual(comments, [ReviewComment(path="a.py", line=4, body="Suggested Improvements: none")])

    def test_other_bullet_styles_use_plain_pattern(self):
        comments = extract_comments("- Line 3: dash bullet\n1. Line 6: numbered", "a.py")
        self.assertEqual([(c.line, c.body) for c in comments], [(3, "dash bullet"), (6, "numbered")])

    def test_no_recognisable_lines(self):
        response = "Looks good to me!\nNo issues found.\nLine twelve: not a number\nLine 12:"
        self.assertEqual(extract_comments(response, "a.py"), [])
        self.assertEqual(extract_comments("", "a.py"), [])

    def test_crlf_output_is_trimmed(self):
        comments = extract_comments("Line 1: first\r\nLine 2: second\r\n", "a.py")
        self.assertEqual([c.body for c in comments], ["first", "second"])

    def test_is_deterministic(self):
        response = "Line 1: a\n* Line 2: b\nnoise\nLine 3: c"
        self.assertEqual(extract_comments(response, "f.go"), extract_comments(response, "f.go"))

    def test_custom_patterns(self):
        patterns = (CommentPattern(name="short", regex=re.compile(r"L(\d+) - (.+)")),)
        comments = extract_comments("L8 - nit: spacing\nLine 9: ignored", "f.rb", patterns=patterns)
        self.assertEqual(comments, [ReviewComment(path="f.rb", line=8, body="nit: spacing")])


class TestValidateComment(unittest.TestCase):
    PATCH = "@@ -10,1 +10,1 @@\n context\n@@ -20,1 +20,1 @@\n context"

    def test_line_in_diff_is_accepted(self):
        comment = ReviewComment(path="a.py", line=10, body="ok")
        self.assertIs(validate_comment(comment, self.PATCH), comment)
        self.assertTrue(is_line_in_diff(20, self.PATCH))

    def test_line_outside_diff_is_rejected(self):
        comment = ReviewComment(path="a.py", line=15, body="between hunks")
        with self.assertRaises(CommentValidationError) as ctx:
            validate_comment(comment, self.PATCH)

        self.assertIs(ctx.exception.comment, comment)
        self.assertEqual(ctx.exception.reason, "line not part of diff")
        self.assertIn("15", str(ctx.exception))

    def test_empty_patch_rejects_everything(self):
        with self.assertRaises(CommentValidationError):
            validate_comment(ReviewComment(path="a.py", line=1, body="x"), "")


if __name__ == '__main__':
    unittest.main()
