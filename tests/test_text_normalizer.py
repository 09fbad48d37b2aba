"""Tests for scraped-fragment cleanup and paragraph splitting."""

import pytest

from utils.text_normalizer import (
    html_to_text,
    normalize_fragment,
    split_html_into_paragraphs,
    split_into_paragraphs,
    strip_leading_datestamp,
    strip_leading_noise,
    strip_navigation_markup,
)

pytestmark = pytest.mark.unit


def _sentence(n: int, length: int = 60) -> str:
    body = f"Cümle {n} " + "x" * length
    return body[:length].rstrip() + "."


def _long_text(sentences: int = 8) -> str:
    return " ".join(_sentence(i) for i in range(sentences))


class TestStripNavigationMarkup:
    def test_anchor_text_is_kept(self):
        html = 'Arapça <a href="/kalima" class="x">kalima</a> sözcüğünden.'
        assert strip_navigation_markup(html) == "Arapça kalima sözcüğünden."

    def test_style_attributes_removed_in_both_quote_styles(self):
        html = "<span style=\"color:red\">a</span><em style='font-size:2em'>b</em>"
        assert strip_navigation_markup(html) == "<span>a</span><em>b</em>"

    def test_tag_order_is_preserved(self):
        html = '<p><b>bir</b> <a href="#">iki</a> <i>üç</i></p>'
        assert strip_navigation_markup(html) == "<p><b>bir</b> iki <i>üç</i></p>"

    def test_empty_input(self):
        assert strip_navigation_markup(None) == ""


class TestStripLeadingNoise:
    def test_removes_sibling_empty_wrappers(self):
        html = " &nbsp;<span> </span><em>&nbsp;</em><br/><strong></strong>Akıllı"
        assert strip_leading_noise(html) == "Akıllı"

    def test_removes_nested_empty_wrappers(self):
        assert strip_leading_noise("<span><em>&nbsp;</em></span>Akıllı") == "Akıllı"
        assert strip_leading_noise("<span> <b><i> </i></b></span>&nbsp;Akıllı") == "Akıllı"

    def test_empty_tag_inside_real_content_keeps_wrapper(self):
        assert strip_leading_noise("<b><i></i>Akıllı</b>") == "<b>Akıllı</b>"

    def test_keeps_non_empty_leading_tag(self):
        html = "<b>Akıllı</b> sözcüğü"
        assert strip_leading_noise(html) == html

    def test_only_touches_the_start(self):
        html = "&nbsp;Akıllı <span> </span> son"
        assert strip_leading_noise(html) == "Akıllı <span> </span> son"

    @pytest.mark.parametrize(
        "html",
        [
            "",
            "düz metin",
            "&nbsp;&nbsp;<span>&nbsp;</span> metin",
            "<span class='a'>\xa0</span><i> </i>&nbsp; <b>kalın</b>",
            "<br><br>",
        ],
    )
    def test_idempotent(self, html):
        once = strip_leading_noise(html)
        assert strip_leading_noise(once) == once


class TestStripLeadingDatestamp:
    def test_removes_date_and_following_space(self):
        assert strip_leading_datestamp("10 Mayıs 2020 Bu kelime...") == "Bu kelime..."

    def test_no_date_unchanged(self):
        text = "Bu kelime 10 Mayıs 2020 tarihinde eklendi."
        assert strip_leading_datestamp(text) == text

    def test_markup_before_date_is_kept(self):
        html = "<p><span>3 Ağustos 1999</span> metin"
        assert strip_leading_datestamp(html) == "<p><span></span> metin"

    def test_month_is_case_insensitive(self):
        assert strip_leading_datestamp("1 ŞUBAT 2021 metin") == "metin"

    def test_unknown_month_is_not_a_date(self):
        assert strip_leading_datestamp("10 Brumaire 2020 metin") == "10 Brumaire 2020 metin"


class TestNormalizeFragment:
    def test_full_pipeline(self):
        html = '<span style="color:#999">&nbsp;</span>10 Mayıs 2020 Arapça <a href="/x">kalima</a>.'
        assert normalize_fragment(html) == "Arapça kalima."

    def test_idempotent(self):
        html = '&nbsp;<span style="a:b">  Akıllı</span> <a href="#">bağlantı</a> metni.'
        once = normalize_fragment(html)
        assert normalize_fragment(once) == once
        assert once == "<span>Akıllı</span> bağlantı metni."

    def test_consecutive_leading_dates_are_removed_in_one_pass(self):
        html = "<span></span>10 Mayıs 2020 <span></span>11 Mayıs 2021 Bu kelime Arapçadır."
        once = normalize_fragment(html)
        assert once == "Bu kelime Arapçadır."
        assert normalize_fragment(once) == once

    def test_date_behind_nested_empty_wrapper(self):
        html = "<span><em>&nbsp;</em></span>3 Ekim 2019 <i> </i>Farsça kökenli."
        assert normalize_fragment(html) == "Farsça kökenli."


class TestSplitIntoParagraphs:
    def test_short_text_is_single_trimmed_paragraph(self):
        assert split_into_paragraphs("  Kısa bir metin. Devamı.  ") == ["Kısa bir metin. Devamı."]

    def test_empty_input(self):
        assert split_into_paragraphs("") == []
        assert split_into_paragraphs(None) == []

    def test_no_terminator_returns_whole_text(self):
        text = "a" * 600
        assert split_into_paragraphs(text) == [text]

    def test_at_most_two_splits(self):
        text = _long_text(12)
        paragraphs = split_into_paragraphs(text)

        assert len(paragraphs) == 3
        assert paragraphs[0].endswith(".")
        assert paragraphs[1].endswith(".")
        assert " ".join(paragraphs) == text

    def test_cut_happens_inside_search_window(self):
        text = _long_text(10)
        first = split_into_paragraphs(text)[0]
        assert 150 <= len(first) - 1 <= 350

    def test_period_beyond_window_is_ignored(self):
        text = "a" * 400 + ". " + "b" * 50
        assert split_into_paragraphs(text) == [text]


class TestSplitHtmlIntoParagraphs:
    def test_tags_do_not_count(self):
        # 120 visible chars, but well over 200 with markup
        html = "<b>" + "<i>x</i>" * 60 + "</b> kısa son."
        assert split_html_into_paragraphs(html) == [html]

    def test_never_cuts_inside_a_tag(self):
        tag = '<span title="a. b. c. d.">'
        html = tag + _long_text(10) + "</span>"
        paragraphs = split_html_into_paragraphs(html)

        assert len(paragraphs) >= 2
        assert paragraphs[0].startswith(tag)
        for paragraph in paragraphs:
            assert paragraph.count("<") == paragraph.count(">")

    def test_same_cut_points_as_plain_text(self):
        text = _long_text(10)
        html = "<em>" + text[:10] + "</em>" + text[10:]
        html_texts = [html_to_text(p) for p in split_html_into_paragraphs(html)]
        assert html_texts == split_into_paragraphs(text)

    def test_leading_noise_removed_first(self):
        assert split_html_into_paragraphs("&nbsp;<span> </span>Metin.") == ["Metin."]
