from fakes import BASE_URL, FakePage, make_card, make_results_page
from src.models import (
    PRICE_UNAVAILABLE,
    RATING_NOT_FOUND,
    REVIEWS_NOT_FOUND,
)


def test_parses_all_fields_of_complete_card(extractor):
    html = make_results_page([make_card("B000TEST01", title="Gaming Laptop")])

    [product] = extractor.parse_products(html)

    assert product.asin == "B000TEST01"
    assert product.title == "Gaming Laptop"
    assert product.currency_symbol == "$"
    assert product.rating == 4.5
    assert product.review_count == 1234
    assert product.url == f"{BASE_URL}/dp/B000TEST01"
    assert product.page is None
    assert product.index_on_page is None
    assert product.global_index is None


def test_price_is_string_concatenation_of_whole_and_fraction(extractor):
    html = make_results_page([make_card("B1", whole="29", fraction="99")])

    [product] = extractor.parse_products(html)

    assert product.price == 2999
    assert isinstance(product.price, int)


def test_price_keeps_decimal_point_rendered_inside_whole_amount(extractor):
    html = make_results_page([make_card("B1", whole="1,299.", fraction="49")])

    [product] = extractor.parse_products(html)

    assert product.price == 1299.49


def test_price_without_fraction_uses_whole_amount(extractor):
    html = make_results_page([make_card("B1", whole="450", fraction=None)])

    [product] = extractor.parse_products(html)

    assert product.price == 450


def test_whole_amount_with_trailing_point_stays_integer(extractor):
    card = (
        '<div class="s-result-item" data-asin="B1">'
        "<h2><span>Laptop</span></h2>"
        '<span class="a-price"><span class="a-price-symbol">$</span>'
        '<span class="a-price-whole">29<span class="a-price-decimal">.</span>'
        "</span></span></div>"
    )

    [product] = extractor.parse_products(make_results_page([card]))

    assert product.price == 29
    assert isinstance(product.price, int)
    assert f"{product.currency_symbol}{product.price}" == "$29"


def test_title_with_nested_markup_keeps_inner_spaces(extractor):
    card = (
        '<div class="s-result-item" data-asin="B1">'
        "<h2><span>  Apple MacBook <b>Air</b> 13-inch\n</span></h2></div>"
    )

    [product] = extractor.parse_products(make_results_page([card]))

    assert product.title == "Apple MacBook Air 13-inch"


def test_missing_price_yields_sentinel_and_empty_symbol(extractor):
    html = make_results_page([make_card("B1", whole=None)])

    [product] = extractor.parse_products(html)

    assert product.price == PRICE_UNAVAILABLE
    assert product.currency_symbol == ""
    assert not product.has_price


def test_currency_defaults_to_dollar_when_symbol_missing(extractor):
    html = make_results_page([make_card("B1", symbol=None)])

    [product] = extractor.parse_products(html)

    assert product.currency_symbol == "$"


def test_currency_symbol_taken_from_page(extractor):
    html = make_results_page([make_card("B1", symbol="€")])

    [product] = extractor.parse_products(html)

    assert product.currency_symbol == "€"


def test_missing_rating_and_reviews_yield_sentinels(extractor):
    html = make_results_page([make_card("B1", rating=None, reviews=None)])

    [product] = extractor.parse_products(html)

    assert product.rating == RATING_NOT_FOUND
    assert product.review_count == REVIEWS_NOT_FOUND


def test_unparseable_rating_and_reviews_yield_sentinels(extractor):
    html = make_results_page(
        [make_card("B1", rating="no stars yet", reviews="many")]
    )

    [product] = extractor.parse_products(html)

    assert product.rating == RATING_NOT_FOUND
    assert product.review_count == REVIEWS_NOT_FOUND


def test_review_count_strips_all_thousands_separators(extractor):
    html = make_results_page([make_card("B1", reviews="1,234,567")])

    [product] = extractor.parse_products(html)

    assert product.review_count == 1234567


def test_card_without_title_is_dropped(extractor):
    html = make_results_page(
        [
            make_card("B1", title="First"),
            make_card("B2", title=None),
            make_card("B3", title="   "),
            make_card("B4", title="Fourth"),
        ]
    )

    products = extractor.parse_products(html)

    assert [p.asin for p in products] == ["B1", "B4"]


def test_placeholder_and_sponsored_containers_are_ignored(extractor):
    html = make_results_page(
        [
            make_card("B1"),
            '<div class="s-result-item" data-asin=""><h2><span>Ad</span></h2></div>',
            '<div class="s-result-item"><h2><span>Banner</span></h2></div>',
            make_card("B2"),
        ]
    )

    products = extractor.parse_products(html)

    assert [p.asin for p in products] == ["B1", "B2"]


def test_card_without_anchor_has_empty_url(extractor):
    html = make_results_page([make_card("B1", href=None)])

    [product] = extractor.parse_products(html)

    assert product.url == ""
    assert product.title == "Laptop"


def test_relative_and_absolute_hrefs_resolve_against_origin(extractor):
    html = make_results_page(
        [
            make_card("B1", href="dp/{asin}?ref=sr_1"),
            make_card("B2", href="https://www.amazon.com/sspa/click?x=1"),
        ]
    )

    first, second = extractor.parse_products(html)

    assert first.url == f"{BASE_URL}/dp/B1?ref=sr_1"
    assert second.url == "https://www.amazon.com/sspa/click?x=1"


def test_products_keep_page_order(extractor):
    asins = [f"B{index:02d}" for index in range(10)]
    html = make_results_page([make_card(asin) for asin in asins])

    products = extractor.parse_products(html)

    assert [p.asin for p in products] == asins


def test_empty_page_yields_no_products(extractor):
    assert extractor.parse_products("<html><body></body></html>") == []


async def test_extract_reads_current_page_content(extractor):
    page = FakePage([make_results_page([make_card("B1"), make_card("B2")])])

    products = await extractor.extract(page)

    assert [p.asin for p in products] == ["B1", "B2"]
    assert page.call_names() == ["content"]


async def test_has_next_page_checks_enabled_next_control(extractor):
    enabled = FakePage(["<html></html>"], next_enabled_on={1})
    disabled = FakePage(["<html></html>"], next_enabled_on=set())

    assert await extractor.has_next_page(enabled) is True
    assert await extractor.has_next_page(disabled) is False
