from __future__ import annotations

import unittest

from seometa.utils import check_url, escape_html, normalize_url, with_trailing_slash


class CheckUrlTests(unittest.TestCase):
    def test_lowercases_scheme_and_host_and_adds_root_path(self) -> None:
        self.assertEqual(check_url("  HTTPS://Example.COM  "), ("https://example.com/", True))

    def test_keeps_path_query_and_fragment(self) -> None:
        self.assertEqual(
            normalize_url("https://a.com/Path?q=1#Frag"),
            "https://a.com/Path?q=1#Frag",
        )

    def test_drops_default_port_only(self) -> None:
        self.assertEqual(normalize_url("https://a.com:443/x"), "https://a.com/x")
        self.assertEqual(normalize_url("http://a.com:8080"), "http://a.com:8080/")

    def test_encodes_spaces_in_path(self) -> None:
        self.assertEqual(normalize_url("https://a.com/a b"), "https://a.com/a%20b")

    def test_encodes_userinfo(self) -> None:
        self.assertEqual(check_url("https://us er@a.com/x"), ("https://us%20er@a.com/x", True))
        self.assertEqual(normalize_url("https://user:pw@a.com"), "https://user:pw@a.com/")

    def test_international_host_becomes_ascii(self) -> None:
        value, valid = check_url("https://例え.JP/パス")
        self.assertTrue(valid)
        self.assertTrue(value.isascii())
        self.assertTrue(value.startswith("https://xn--"))
        self.assertIn(".jp/%E3%83%91", value)
        self.assertEqual(normalize_url(value), value)

    def test_keeps_empty_query_and_fragment_markers(self) -> None:
        self.assertEqual(normalize_url("https://a.com/?"), "https://a.com/?")
        self.assertEqual(normalize_url("https://a.com#"), "https://a.com/#")
        self.assertEqual(normalize_url("https://a.com/x?#y"), "https://a.com/x?#y")

    def test_ipv6_host_keeps_brackets(self) -> None:
        self.assertEqual(normalize_url("http://[::1]:8000/"), "http://[::1]:8000/")

    def test_other_schemes_pass_through(self) -> None:
        self.assertEqual(check_url("MAILTO:Me@x.com"), ("mailto:Me@x.com", True))

    def test_unparseable_values_are_kept_trimmed(self) -> None:
        self.assertEqual(check_url(" example.com "), ("example.com", False))
        self.assertEqual(check_url("not a url"), ("not a url", False))
        self.assertEqual(check_url("https://"), ("https://", False))
        self.assertEqual(check_url("https://a.com:99999"), ("https://a.com:99999", False))

    def test_blank_and_missing_values_are_empty(self) -> None:
        self.assertEqual(check_url("   "), ("", False))
        self.assertEqual(check_url(None), ("", False))

    def test_normalized_urls_are_stable(self) -> None:
        for url in ["https://a.com/a b?x=1 2", "HTTP://A.com:80", "https://user@a.com/x/"]:
            once = normalize_url(url)
            self.assertEqual(normalize_url(once), once)


class EscapeHtmlTests(unittest.TestCase):
    def test_escapes_all_five_characters(self) -> None:
        self.assertEqual(escape_html("<a href=\"x\">'&'</a>"), "&lt;a href=&quot;x&quot;&gt;&#39;&amp;&#39;&lt;/a&gt;")

    def test_does_not_double_escape_in_one_pass(self) -> None:
        self.assertEqual(escape_html("&lt;"), "&amp;lt;")


class TrailingSlashTests(unittest.TestCase):
    def test_adds_missing_slash(self) -> None:
        self.assertEqual(with_trailing_slash("https://a.com/x"), "https://a.com/x/")

    def test_keeps_existing_slash(self) -> None:
        self.assertEqual(with_trailing_slash("https://a.com/x/"), "https://a.com/x/")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
