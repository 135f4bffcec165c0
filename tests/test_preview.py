"""Tests for preview image extraction."""

from steamnews.markup import extract_preview_image


class TestExtractPreviewImage:
    def test_first_absolute_image(self):
        markup = '<p>intro</p><img src="https://x.test/a.png"><img src="https://x.test/b.png">'
        assert extract_preview_image(markup) == "https://x.test/a.png"

    def test_no_image(self):
        assert extract_preview_image("<p>Just text, no pictures.</p>") is None

    def test_macro_in_bbcode_image(self):
        result = extract_preview_image("Intro\n[img]{STEAM_CLAN_IMAGE}/42/foo.jpg[/img]")
        assert result == "https://clan.cloudflare.steamstatic.com/images/42/foo.jpg"

    def test_protocol_relative_src(self):
        assert extract_preview_image('<img src="//cdn.test/a.png">') == "https://cdn.test/a.png"

    def test_only_first_image_considered(self):
        markup = '<img src="/relative.png"><img src="https://x.test/ok.png">'
        assert extract_preview_image(markup) is None

    def test_unsafe_scheme(self):
        assert extract_preview_image('<img src="javascript:alert(1)">') is None
        assert extract_preview_image('<img src="data:image/png;base64,AAAA">') is None

    def test_link_href_is_not_an_image(self):
        assert extract_preview_image('<a href="https://x.test/a.png">pic</a>') is None

    def test_image_inside_script_ignored(self):
        markup = '<script>var s = "<img src=https://x.test/a.png>";</script>'
        assert extract_preview_image(markup) is None

    def test_image_inside_blocked_element_ignored(self):
        markup = '<iframe src="https://e.test"><img src="https://evil.test/track.png"></iframe><p>hi</p>'
        assert extract_preview_image(markup) is None

    def test_first_image_outside_blocked_element_used(self):
        markup = (
            '<object><img src="https://evil.test/a.png"></object>'
            '<img src="https://x.test/ok.png">'
        )
        assert extract_preview_image(markup) == "https://x.test/ok.png"

    def test_malformed_marked_section(self):
        markup = "<img src='https://x.test/a.png'> Rating <![b] x"
        assert extract_preview_image(markup) == "https://x.test/a.png"

    def test_already_preprocessed_input_not_expanded_again(self):
        markup = '<img src="{STEAM_APP_IMAGE}/1/header.jpg">'
        assert extract_preview_image(markup, preprocessed=True) is None
        assert extract_preview_image(markup) == (
            "https://cdn.cloudflare.steamstatic.com/steam/apps/1/header.jpg"
        )

    def test_oversized_input(self, monkeypatch):
        from steamnews.config import config

        monkeypatch.setattr(config, "max_input_chars", 10)
        assert extract_preview_image('<img src="https://x.test/a.png">') is None

    def test_malformed_and_non_string(self):
        assert extract_preview_image("<img src=") is None
        assert extract_preview_image("") is None
        assert extract_preview_image(None) is None
        assert extract_preview_image(3.14) is None
