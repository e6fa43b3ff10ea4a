import unittest

from pr_review_commenter.diff_parser import compute_diff_lines


class TestComputeDiffLines(unittest.TestCase):
    def test_single_hunk_with_addition(self):
        patch = "@@ -1,3 +1,4 @@\n line1\n+new_line\n line2\n line3"
        self.assertEqual(compute_diff_lines(patch), [1, 2, 3, 4])

    def test_single_hunk_yields_consecutive_lines_from_start(self):
        # 5 non-removed lines starting at 42, with removals interleaved
        patch = "\n".join([
            "@@ -40,6 +42,5 @@ class Foo:",
            " context",
            "-removed one",
            "+added one",
            "+added two",
            "-removed two",
            " context again",
            "+added three",
        ])
        self.assertEqual(compute_diff_lines(patch), [42, 43, 44, 45, 46])

    def test_removed_lines_do_not_take_a_line_number(self):
        patch = "@@ -10,4 +10,3 @@\n ctx\n-old\n+new\n ctx2\n-gone"
        self.assertEqual(compute_diff_lines(patch), [10, 11, 12])

    def test_no_newline_marker_is_skipped(self):
        patch = "@@ -1,2 +1,2 @@\n a\n-b\n+c\n\\ No newline at end of file"
        self.assertEqual(compute_diff_lines(patch), [1, 2])

    def test_multiple_hunks_reset_the_counter(self):
        patch = "\n".join([
            "@@ -1,2 +1,2 @@",
            " a",
            "+b",
            "@@ -20,2 +30,3 @@ def f():",
            " x",
            "+y",
            " z",
        ])
        self.assertEqual(compute_diff_lines(patch), [1, 2, 30, 31, 32])

    def test_hunk_header_without_count(self):
        self.assertEqual(compute_diff_lines("@@ -1 +5 @@\n+x"), [5])

    def test_new_file_patch(self):
        patch = "@@ -0,0 +1,3 @@\n+one\n+two\n+three"
        self.assertEqual(compute_diff_lines(patch), [1, 2, 3])

    def test_malformed_hunk_header_keeps_counting(self):
        patch = "@@ -1,2 +3,2 @@\n a\n b\n@@ malformed @@\n c"
        self.assertEqual(compute_diff_lines(patch), [3, 4, 5])

    def test_lines_before_first_hunk_start_at_zero(self):
        self.assertEqual(compute_diff_lines("stray\n@@ -1 +7 @@\n b"), [0, 7])

    def test_trailing_empty_line_counts_as_a_line(self):
        self.assertEqual(compute_diff_lines("@@ -1 +1 @@\n+x\n"), [1, 2])

    def test_empty_patch(self):
        self.assertEqual(compute_diff_lines(""), [])
        self.assertEqual(compute_diff_lines(None), [])

    def test_removed_only_lines_never_reported(self):
        patch = "@@ -5,3 +5,1 @@\n-a\n-b\n c"
        # 5 and 6 would belong to the removed lines if they counted
        self.assertEqual(compute_diff_lines(patch), [5])


if __name__ == '__main__':
    unittest.main()
