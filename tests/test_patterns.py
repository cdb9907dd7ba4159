"""
Tests for naming-convention guesses.
"""

import unittest

from email_finder.patterns import build_pattern_suggestions, clean_name

GENERIC = [
    "hello@acme.com", "hi@acme.com", "info@acme.com", "contact@acme.com",
    "support@acme.com", "press@acme.com", "partnerships@acme.com",
    "careers@acme.com", "sales@acme.com",
]


class TestCleanName(unittest.TestCase):

    def test_clean_name(self):
        self.assertEqual(clean_name(" O'Neil "), "oneil")
        self.assertEqual(clean_name("Mary-Jane"), "maryjane")
        self.assertEqual(clean_name("123"), "")
        self.assertEqual(clean_name(None), "")


class TestBuildPatternSuggestions(unittest.TestCase):

    def test_generic_only(self):
        suggestions = build_pattern_suggestions("acme.com")
        self.assertEqual(list(suggestions.labels), GENERIC)
        self.assertEqual(suggestions.candidates, ())

    def test_named_patterns(self):
        suggestions = build_pattern_suggestions("acme.com", "Jane", "Doe")

        self.assertEqual([c.email for c in suggestions.candidates], [
            "jane.doe@acme.com",
            "janedoe@acme.com",
            "j.doe@acme.com",
            "jane@acme.com",
            "doe@acme.com",
            "janed@acme.com",
            "jdoe@acme.com",
        ])
        self.assertEqual(len(suggestions.labels), 16)
        self.assertEqual(list(suggestions.labels[:9]), GENERIC)

        first = suggestions.candidates[0]
        self.assertEqual(first.label, "Pattern: first.last")
        self.assertEqual(first.description, "Guessed using first.last naming convention.")

    def test_one_name_is_not_enough(self):
        for first, last in (("Jane", None), (None, "Doe"), ("Jane", "  "), ("!!", "Doe")):
            suggestions = build_pattern_suggestions("acme.com", first, last)
            self.assertEqual(suggestions.candidates, (), (first, last))
            self.assertEqual(len(suggestions.labels), 9)

    def test_labels_are_deduplicated(self):
        suggestions = build_pattern_suggestions("acme.com", "A", "B")
        # a.b, ab, a, b are the only distinct named addresses
        self.assertEqual(len(suggestions.candidates), 7)
        self.assertEqual(len(suggestions.labels), 13)
        self.assertEqual(len(set(suggestions.labels)), 13)

    def test_host_is_lowercased(self):
        suggestions = build_pattern_suggestions("Acme.COM", "Jane", "Doe")
        self.assertTrue(all(label.endswith("@acme.com") for label in suggestions.labels))


if __name__ == "__main__":
    unittest.main()
