"""
Tests for candidate URL generation.
"""

import unittest

from email_finder.targets import DEFAULT_PATHS, MAX_PAGES, build_targets, slugify_keyword


class TestSlugifyKeyword(unittest.TestCase):

    def test_slugify(self):
        self.assertEqual(slugify_keyword("Sales Team"), "sales-team")
        self.assertEqual(slugify_keyword("  R&D / Labs "), "r-d-labs")
        self.assertEqual(slugify_keyword("C++"), "c")
        self.assertEqual(slugify_keyword("--Support--"), "support")

    def test_nothing_left(self):
        self.assertEqual(slugify_keyword("!!!"), "")
        self.assertEqual(slugify_keyword(""), "")


class TestBuildTargets(unittest.TestCase):

    def test_default_paths(self):
        targets = build_targets("https://acme.com")
        self.assertEqual(len(DEFAULT_PATHS), 13)
        self.assertEqual(len(targets), 13)
        self.assertEqual(targets[0], "https://acme.com/")
        self.assertEqual(targets[1], "https://acme.com/about")
        self.assertEqual(targets[-1], "https://acme.com/careers")

    def test_keyword_paths_follow_defaults_in_keyword_order(self):
        targets = build_targets("https://acme.com", ["Sales Team", "legal"])
        self.assertEqual(len(targets), 23)
        self.assertEqual(targets[13:18], [
            "https://acme.com/sales-team",
            "https://acme.com/team/sales-team",
            "https://acme.com/contact/sales-team",
            "https://acme.com/departments/sales-team",
            "https://acme.com/people/sales-team",
        ])
        self.assertEqual(targets[18], "https://acme.com/legal")

    def test_empty_and_duplicate_keywords(self):
        targets = build_targets("https://acme.com", ["Sales Team", "!!!", "sales  team"])
        self.assertEqual(len(targets), 18)
        self.assertEqual(len(set(targets)), len(targets))

    def test_keyword_overlapping_default_path(self):
        targets = build_targets("https://acme.com", ["About"])
        self.assertEqual(len(targets), 17)
        self.assertEqual(targets.count("https://acme.com/about"), 1)

    def test_origin_with_port(self):
        targets = build_targets("http://acme.com:8080", [])
        self.assertEqual(targets[0], "http://acme.com:8080/")

    def test_cap(self):
        self.assertEqual(MAX_PAGES, 12)
        self.assertLess(MAX_PAGES, len(build_targets("https://acme.com")))


if __name__ == "__main__":
    unittest.main()
