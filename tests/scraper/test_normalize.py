"""Tests for text normalizers."""

import pytest

from daft_finder.scraper.base import BedsRange, PriceKind
from daft_finder.scraper.normalize import (
    extract_lat_lng,
    format_energy_rating,
    generate_location_slug,
    parse_beds,
    parse_price,
    slugify,
)


class TestParsePrice:
    """Tests for parse_price."""

    @pytest.mark.parametrize("period", ["month", "pm", "p/m", "mth"])
    def test_monthly_periods(self, period):
        price = parse_price(f"€2500 per {period}")
        assert price.kind == PriceKind.NUMERIC
        assert price.value == 2500

    @pytest.mark.parametrize("period", ["week", "pw", "p/w", "wk"])
    def test_weekly_periods_converted_to_monthly(self, period):
        price = parse_price(f"€500 per {period}")
        assert price.kind == PriceKind.NUMERIC
        assert price.value == 2167  # round(500 * 52 / 12)

    def test_thousands_separator(self):
        assert parse_price("€2,500 per month").value == 2500

    def test_decimal_amount(self):
        assert parse_price("€2500.50 per month").value == 2500.5

    def test_no_space_period(self):
        assert parse_price("€2000permonth").value == 2000

    def test_no_space_weekly(self):
        price = parse_price("€100perweek")
        assert price.kind == PriceKind.NUMERIC
        assert price.value == 433  # 100 * 52 / 12 = 433.33

    def test_weekly_rounds_half_up(self):
        # 1.50 * 52 / 12 == 6.5
        assert parse_price("€1.50 per week").value == 7

    def test_currency_without_period(self):
        price = parse_price("€50")
        assert price.kind == PriceKind.NUMERIC
        assert price.value == 50

    def test_period_without_currency(self):
        price = parse_price("50 per month")
        assert price.kind == PriceKind.NUMERIC
        assert price.value == 50

    def test_bare_amount_over_hundred(self):
        price = parse_price("50000")
        assert price.kind == PriceKind.NUMERIC
        assert price.value == 50000

    def test_bare_amount_with_separators(self):
        assert parse_price("2,500").value == 2500

    @pytest.mark.parametrize("text", ["Price on Application", "price on application", "Contact Agent"])
    def test_on_application(self, text):
        price = parse_price(text)
        assert price.kind == PriceKind.ON_APPLICATION
        assert price.value is None

    @pytest.mark.parametrize("text", [None, "", "5", "D4", "Dublin 4", "€", "per month", "Great location"])
    def test_unknown(self, text):
        price = parse_price(text)
        assert price.kind == PriceKind.UNKNOWN
        assert price.value is None

    def test_non_string(self):
        assert parse_price(2500).kind == PriceKind.UNKNOWN

    def test_integral_value_is_int(self):
        assert isinstance(parse_price("€2,000 per month").value, int)


class TestParseBeds:
    """Tests for parse_beds."""

    def test_studio(self):
        assert parse_beds("Studio") == BedsRange(min=1, max=1, is_studio=True)

    def test_studio_case_insensitive(self):
        assert parse_beds("STUDIO apartment").is_studio is True

    def test_single(self):
        assert parse_beds("2 Beds") == BedsRange(min=2, max=2)

    def test_single_no_space(self):
        assert parse_beds("3Bed") == BedsRange(min=3, max=3)

    def test_dash_range(self):
        assert parse_beds("1-2 Beds") == BedsRange(min=1, max=2)

    def test_to_range(self):
        assert parse_beds("2 to 3 bed") == BedsRange(min=2, max=3)

    def test_reversed_range_is_ordered(self):
        assert parse_beds("3 - 1 Bed") == BedsRange(min=1, max=3)

    @pytest.mark.parametrize("text", [None, "", "1 Bath", "Apartment"])
    def test_not_beds(self, text):
        assert parse_beds(text) is None


class TestSlugify:
    """Tests for slugify."""

    def test_punctuation_and_spaces(self):
        assert slugify("Ringsend, Dublin 4!") == "ringsend-dublin-4"

    def test_idempotent(self):
        assert slugify("ringsend-dublin-4") == "ringsend-dublin-4"

    def test_collapses_whitespace(self):
        assert slugify("  Grand   Canal  Dock ") == "grand-canal-dock"

    def test_non_string(self):
        assert slugify(None) == ""
        assert slugify(42) == ""


class TestGenerateLocationSlug:
    """Tests for generate_location_slug."""

    def test_two_parts(self):
        assert generate_location_slug("Carrigaline, Cork") == "carrigaline-cork"

    def test_postal_district(self):
        assert generate_location_slug("Dublin 2") == "dublin-2-dublin"

    def test_known_dublin_area(self):
        assert generate_location_slug("Sandymount") == "sandymount-dublin"

    def test_multi_word_dublin_area(self):
        assert generate_location_slug("Grand Canal Dock") == "grand-canal-dock-dublin"

    def test_other_area_unchanged(self):
        assert generate_location_slug("Galway") == "galway"

    def test_county(self):
        assert generate_location_slug("Dublin") == "dublin"

    def test_three_parts_slugified_whole(self):
        assert generate_location_slug("Ringsend, Dublin 4, Dublin") == "ringsend-dublin-4-dublin"

    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_empty(self, text):
        assert generate_location_slug(text) == ""


class TestExtractLatLng:
    """Tests for extract_lat_lng."""

    def test_satellite_link(self):
        html = '<a id="map" href="https://maps.google.com/?q=loc:53.3358+-6.2298">Map</a>'
        assert extract_lat_lng(html, "a#map") == (53.3358, -6.2298)

    def test_street_view_link(self):
        html = '<a id="map" href="https://maps.google.com/?viewpoint=53.33,-6.22&amp;x=1">Map</a>'
        assert extract_lat_lng(html, "a#map") == (53.33, -6.22)

    def test_missing_anchor(self):
        assert extract_lat_lng("<p>No map</p>", "a#map") is None

    def test_href_without_coordinates(self):
        assert extract_lat_lng('<a id="map" href="/somewhere">Map</a>', "a#map") is None

    def test_unparsable_numbers(self):
        html = '<a id="map" href="https://maps.google.com/?q=loc:53.3.3+-6.2">Map</a>'
        assert extract_lat_lng(html, "a#map") is None


class TestFormatEnergyRating:
    """Tests for format_energy_rating."""

    def test_strips_prefix(self):
        assert format_energy_rating("BER B2") == "B2"

    def test_plain_rating(self):
        assert format_energy_rating(" A3 ") == "A3"

    def test_exempt(self):
        assert format_energy_rating("SI_666") == "Exempt"
        assert format_energy_rating("BER SI_666") == "Exempt"

    @pytest.mark.parametrize("text", [None, "", "BER "])
    def test_empty(self, text):
        assert format_energy_rating(text) is None
