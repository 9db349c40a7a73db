from __future__ import annotations

from django.test import SimpleTestCase, override_settings

from apps.blocks.services.patterns import compile_patterns, split_patterns, url_match

from .fakes import make_context


class CompilePatternsTests(SimpleTestCase):
    def test_wildcard_matches_any_suffix(self):
        matcher = compile_patterns("/admin/*")

        self.assertTrue(matcher.test("/admin/"))
        self.assertTrue(matcher.test("/admin/users/1"))
        self.assertFalse(matcher.test("/admin"))
        self.assertFalse(matcher.test("/administrator"))
        self.assertFalse(matcher.test("/blog/admin/x"))

    def test_wildcard_in_the_middle(self):
        matcher = compile_patterns("/blog/*/comments")

        self.assertTrue(matcher.test("/blog/2024/01/comments"))
        self.assertFalse(matcher.test("/blog/2024/comments/2"))

    def test_front_page_token_is_rewritten(self):
        matcher = compile_patterns("/", "/home")

        self.assertTrue(matcher.test("/home"))
        self.assertFalse(matcher.test("/"))
        self.assertFalse(matcher.test("/home/other"))

    def test_front_page_only_applies_to_lone_slash(self):
        matcher = compile_patterns("/\n/about", "/home")

        self.assertTrue(matcher.test("/home"))
        self.assertTrue(matcher.test("/about"))
        self.assertFalse(matcher.test("/home/about"))

    def test_all_line_break_styles_split_alternatives(self):
        matcher = compile_patterns("/a\r\n/b\r/c\n/d")

        for path in ("/a", "/b", "/c", "/d"):
            self.assertTrue(matcher.test(path), path)
        self.assertFalse(matcher.test("/e"))

    def test_empty_text_never_matches(self):
        for text in ("", "\n\n", "   \r\n  "):
            matcher = compile_patterns(text)
            self.assertFalse(matcher.test("/"))
            self.assertFalse(matcher.test(""))

    def test_matching_is_case_sensitive(self):
        matcher = compile_patterns("/Blog")

        self.assertTrue(matcher.test("/Blog"))
        self.assertFalse(matcher.test("/blog"))

    def test_query_string_is_ignored(self):
        self.assertTrue(compile_patterns("/search").test("/search?q=blocks"))

    def test_regex_characters_are_literal(self):
        matcher = compile_patterns("/a.b\n/(x)+")

        self.assertTrue(matcher.test("/a.b"))
        self.assertFalse(matcher.test("/axb"))
        self.assertTrue(matcher.test("/(x)+"))
        self.assertFalse(matcher.test("/xx"))

    def test_lines_without_leading_slash(self):
        self.assertTrue(compile_patterns("blog/*").test("/blog/1"))
        self.assertEqual(split_patterns(" blog/* \n\n/about"), ["/blog/*", "/about"])

    def test_unusable_input_fails_closed(self):
        matcher = compile_patterns(42)  # type: ignore[arg-type]

        self.assertFalse(matcher.test("/42"))
        self.assertIsNone(matcher.pattern)

    def test_compiled_matchers_are_reused(self):
        self.assertIs(compile_patterns("/reuse/*"), compile_patterns("/reuse/*"))

    def test_locale_prefix_is_prepended_when_missing(self):
        matcher = compile_patterns("/blog/*\n/es/noticias", "/", "en", ("en", "es"))

        self.assertTrue(matcher.test("/en/blog/1"))
        self.assertTrue(matcher.test("/es/noticias"))
        self.assertFalse(matcher.test("/blog/1"))
        self.assertFalse(matcher.test("/en/es/noticias"))

    def test_locale_prefix_applies_to_front_page(self):
        matcher = compile_patterns("/", "/", "fr", ("en", "fr"))

        self.assertTrue(matcher.test("/fr/"))
        self.assertTrue(matcher.test("/fr"))
        self.assertFalse(matcher.test("/"))
        self.assertFalse(matcher.test("/fr/about"))
        self.assertFalse(matcher.test("/french"))

    def test_locale_prefix_applies_to_configured_front_page(self):
        matcher = compile_patterns("/", "/home", "fr", ("en", "fr"))

        self.assertTrue(matcher.test("/fr/home"))
        self.assertFalse(matcher.test("/fr"))


class UrlMatchTests(SimpleTestCase):
    def test_empty_patterns_do_not_match(self):
        self.assertFalse(url_match("", make_context(path="/")))

    @override_settings(BLOCKS_FRONT_PAGE="/home")
    def test_uses_configured_front_page(self):
        self.assertTrue(url_match("/", make_context(path="/home")))
        self.assertFalse(url_match("/", make_context(path="/")))

    @override_settings(
        BLOCKS_URL_LOCALE_PREFIX=True,
        LANGUAGES=[("en", "English"), ("es", "Spanish")],
    )
    def test_locale_prefix_mode_uses_request_locale(self):
        self.assertTrue(url_match("/blog/*", make_context(path="/es/blog/1", locale="es")))
        self.assertFalse(url_match("/blog/*", make_context(path="/es/blog/1", locale="en")))
        self.assertTrue(url_match("/blog/*", make_context(path="/en/blog/1", locale="en")))

    def test_locale_is_ignored_without_prefix_mode(self):
        self.assertTrue(url_match("/blog/*", make_context(path="/blog/1", locale="es")))
