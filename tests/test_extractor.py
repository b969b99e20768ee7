"""Unit tests for processing.extractor."""

from __future__ import annotations

import pytest

from processing.extractor import ContentExtractor, extract_main_text


NOTICE = "\n\n(omitted)"


@pytest.fixture
def extractor() -> ContentExtractor:
    return ContentExtractor(truncation_notice=NOTICE)


def test_nav_is_excluded_and_main_kept():
    html = """
    <html><body>
      <nav><a href="/">ホーム</a> <a href="/menu">Menu link</a></nav>
      <main>real content</main>
    </body></html>
    """

    result = extract_main_text(html, 2000)

    assert "real content" in result.text
    assert "Menu link" not in result.text
    assert "ホーム" not in result.text
    assert result.truncated is False


def test_main_region_wins_over_content_div(extractor):
    html = """
    <body>
      <div id="content">sidebar-ish div</div>
      <main><p>Primary text</p></main>
    </body>
    """

    assert extractor.clean(html) == "Primary text"


def test_keyword_div_is_second_choice_and_case_insensitive(extractor):
    html = """
    <body>
      <div class="wrapper"><p>outside</p></div>
      <div class="Article-Body large"><p>Fare rules</p><div><p>nested detail</p></div></div>
      <p>trailing body text</p>
    </body>
    """

    assert extractor.clean(html) == "Fare rules nested detail"


def test_keyword_must_prefix_the_attribute(extractor):
    html = '<body><div class="sub-content">not a match</div><p>body text</p></body>'

    assert extractor.clean(html) == "not a match body text"


def test_body_is_third_choice(extractor):
    html = "<html><head><title>ignored title</title></head><body><p>Body only</p></body></html>"

    assert extractor.clean(html) == "Body only"


def test_whole_document_is_last_resort(extractor):
    assert extractor.clean("<p>Just a fragment</p> &amp; more") == "Just a fragment & more"


def test_chrome_is_removed_at_every_level(extractor):
    html = """
    <header>Site header</header>
    <script>var tracking = 1;</script>
    <style>.x { color: red; }</style>
    <p>Useful</p>
    <!-- hidden comment -->
    <footer>Copyright</footer>
    """

    assert extractor.clean(html) == "Useful"


def test_chrome_inside_main_is_removed(extractor):
    html = "<main><header>Breadcrumbs</header><p>Body</p><footer>Share</footer></main>"

    assert extractor.clean(html) == "Body"


def test_custom_keywords_replace_defaults():
    html = '<body><div id="contentsInner">Pension page</div><p>other</p></body>'

    assert ContentExtractor(region_keywords=["contentsinner"]).clean(html) == "Pension page"
    assert ContentExtractor(region_keywords=[]).clean(html) == "Pension page other"


def test_truncation_law(extractor):
    html = "<main>" + "あ" * 120 + "</main>"

    exact = extractor.extract(html, 120)
    over = extractor.extract(html, 50)

    assert exact.truncated is False
    assert exact.text == "あ" * 120
    assert over.truncated is True
    assert len(over.text) == 50 + len(NOTICE)
    assert over.text == "あ" * 50 + NOTICE


def test_default_notice_is_localized():
    result = extract_main_text("<main>" + "x" * 600 + "</main>", 500)

    assert result.truncated is True
    assert result.text.endswith("（...省略。全文は公式サイトをご確認ください）")


def test_empty_document_degrades_to_empty_text(extractor):
    result = extractor.extract("", 500)

    assert result.text == ""
    assert result.truncated is False


def test_non_positive_budget_is_rejected(extractor):
    with pytest.raises(ValueError):
        extractor.extract("<p>x</p>", 0)


def test_named_and_numeric_entities_are_fully_decoded(extractor):
    html = "<main>A&nbsp;B &copy; &#12354;&#x3044; &amp;lt;tag&amp;gt;</main>"

    assert extractor.clean(html) == "A B © あい &lt;tag&gt;"
