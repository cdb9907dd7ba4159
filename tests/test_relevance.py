"""
Tests for relevance filtering.
"""

import unittest

from email_finder.models import EmailHit
from email_finder.relevance import GENERIC_PREFIXES, filter_relevant, is_relevant


class TestIsRelevant(unittest.TestCase):

    def test_same_domain_and_subdomain(self):
        self.assertTrue(is_relevant("jane@acme.com", "acme.com"))
        self.assertTrue(is_relevant("jane@mail.acme.com", "acme.com"))

    def test_substring_match_is_loose(self):
        self.assertTrue(is_relevant("jane@notacme.com", "acme.com"))
        self.assertTrue(is_relevant("jane@acme.com.evil.io", "acme.com"))

    def test_unrelated_domain(self):
        self.assertFalse(is_relevant("jane@gmail.com", "acme.com"))
        self.assertFalse(is_relevant("support-team@zendesk.com", "acme.com"))

    def test_generic_prefix_on_third_party_domain(self):
        self.assertEqual(len(GENERIC_PREFIXES), 9)
        for prefix in GENERIC_PREFIXES:
            self.assertTrue(is_relevant(f"{prefix}@zendesk.com", "acme.com"), prefix)

    def test_banned_hosts_always_rejected(self):
        self.assertFalse(is_relevant("info@domain.com", "acme.com"))
        self.assertFalse(is_relevant("info@test.com", "test.com"))
        self.assertFalse(is_relevant("jane@yourdomain.com", "yourdomain.com"))


class TestFilterRelevant(unittest.TestCase):

    def test_keeps_order(self):
        hits = [
            EmailHit("b@acme.com", "u", None, "text"),
            EmailHit("ads@tracker.net", "u", None, "text"),
            EmailHit("sales@partner.io", "u", None, "mailto"),
            EmailHit("a@acme.com", "u", None, "mailto"),
        ]
        kept = filter_relevant(hits, "acme.com")
        self.assertEqual([h.email for h in kept], ["b@acme.com", "sales@partner.io", "a@acme.com"])

    def test_empty(self):
        self.assertEqual(filter_relevant([], "acme.com"), [])


if __name__ == "__main__":
    unittest.main()
