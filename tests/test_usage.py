"""
Unit tests for usage keys, usage records and data transfer decoding.
"""

from decimal import Decimal

import pytest

from accelerator_costing.errors import UnknownRegionError, UnknownUsageKeyError
from accelerator_costing.helpers.math import decimal
from accelerator_costing.regions import REGIONS, code_for
from accelerator_costing.types import Direction
from accelerator_costing.usage import (
    DATA_TRANSFER_FIELDS,
    INBOUND_USAGE_KEY,
    OUTBOUND_USAGE_KEY,
    USAGE_SCHEMA,
    UsageRecord,
    iter_data_transfer,
    parse_usage_key,
    total_usage,
    unknown_usage_keys,
    usage_key,
    usage_template,
)


class TestUsageKeys:
    """Test encoding and decoding of from_<origin>_to_<destination> keys."""

    def test_multi_word_regions(self):
        """Underscored region names split on the known names, not on '_'."""
        assert parse_usage_key("from_south_korea_to_middle_east") == ("south_korea", "middle_east")

    def test_single_word_regions(self):
        assert parse_usage_key("from_europe_to_india") == ("europe", "india")

    def test_same_region(self):
        assert parse_usage_key("from_south_africa_to_south_africa") == ("south_africa", "south_africa")

    def test_every_pair_round_trips(self):
        for origin in REGIONS:
            for destination in REGIONS:
                key = usage_key(origin, destination)
                assert parse_usage_key(key) == (origin, destination)

    def test_decoded_pair_maps_to_codes(self):
        origin, destination = parse_usage_key("from_north_america_to_south_america")
        assert (code_for(origin), code_for(destination)) == ("NA", "SA")

    @pytest.mark.parametrize("key", [
        "from_mars_to_europe",
        "from_europe_to",
        "europe_to_india",
        "from_europe_to_india_extra",
        "",
    ])
    def test_invalid_keys(self, key):
        with pytest.raises(UnknownUsageKeyError):
            parse_usage_key(key)

    def test_usage_key_rejects_unknown_region(self):
        with pytest.raises(UnknownRegionError):
            usage_key("europe", "atlantis")


class TestFieldTable:
    """Test the static table of data transfer fields."""

    def test_has_every_ordered_pair(self):
        assert len(DATA_TRANSFER_FIELDS) == 81
        assert len({f.key for f in DATA_TRANSFER_FIELDS}) == 81

    def test_origin_major_order(self):
        assert DATA_TRANSFER_FIELDS[0].key == "from_asia_pacific_to_asia_pacific"
        assert DATA_TRANSFER_FIELDS[1].key == "from_asia_pacific_to_australia"
        assert DATA_TRANSFER_FIELDS[-1].key == "from_south_africa_to_south_africa"


class TestUsageRecord:
    """Test building and re-serializing usage records."""

    def test_absent_and_zero_are_distinct(self):
        record = UsageRecord.from_mapping({"from_europe_to_india": 0})
        assert record.get("europe", "india") == 0
        assert record.get("india", "europe") is None

    def test_none_values_stay_absent(self):
        record = UsageRecord.from_mapping({"from_europe_to_india": None})
        assert record.to_mapping() == {}

    def test_to_mapping_keeps_present_keys_in_table_order(self):
        record = UsageRecord.from_mapping({
            "from_south_africa_to_europe": 2,
            "from_europe_to_india": 12.5,
            "from_asia_pacific_to_india": 0,
        })
        assert list(record.to_mapping().items()) == [
            ("from_asia_pacific_to_india", 0),
            ("from_europe_to_india", 12.5),
            ("from_south_africa_to_europe", 2),
        ]

    def test_string_values_are_written_back_as_given(self):
        record = UsageRecord.from_mapping({"from_europe_to_india": "12.5"})
        assert record.to_mapping() == {"from_europe_to_india": "12.5"}
        assert total_usage(record) == Decimal("12.5")

    @pytest.mark.parametrize("value", ["nan", "Infinity", float("nan"), float("inf"), Decimal("NaN")])
    def test_non_finite_values(self, value):
        with pytest.raises(ValueError, match="finite"):
            UsageRecord.from_mapping({"from_europe_to_india": value})

    def test_unknown_key(self):
        with pytest.raises(UnknownUsageKeyError, match="from_mars_to_india"):
            UsageRecord.from_mapping({"from_mars_to_india": 1})

    def test_non_numeric_value(self):
        with pytest.raises(ValueError):
            UsageRecord.from_mapping({"from_europe_to_india": "lots"})


class TestDecoding:
    """Test enumeration of defined pairs and totals."""

    def test_entries_for_defined_pairs_only(self):
        record = UsageRecord.from_mapping({
            "from_europe_to_india": 12.5,
            "from_south_korea_to_middle_east": 0,
            "from_india_to_europe": -3,
        })
        entries = list(iter_data_transfer(record, Direction.INBOUND))
        assert [(e.from_code, e.to_code, e.quantity) for e in entries] == [
            ("EU", "IN", Decimal("12.5")),
            ("IN", "EU", Decimal("-3")),
            ("KR", "ME", Decimal("0")),
        ]
        assert all(e.direction is Direction.INBOUND for e in entries)

    def test_absent_record_yields_nothing(self):
        assert list(iter_data_transfer(None, Direction.OUTBOUND)) == []
        assert total_usage(None) == 0

    def test_total_sums_signed_values(self):
        record = UsageRecord.from_mapping({
            "from_europe_to_india": 10,
            "from_india_to_europe": -4,
            "from_europe_to_europe": 0.5,
        })
        assert total_usage(record) == Decimal("6.5")


class TestUsageSchema:
    """Test the declared usage schema and the default usage document."""

    def test_schema_keys(self):
        assert [i.key for i in USAGE_SCHEMA] == [INBOUND_USAGE_KEY, OUTBOUND_USAGE_KEY]
        assert all(len(i.items) == 81 for i in USAGE_SCHEMA)

    def test_template_defaults_to_zero(self):
        template = usage_template()
        assert set(template) == {INBOUND_USAGE_KEY, OUTBOUND_USAGE_KEY}
        assert template[INBOUND_USAGE_KEY]["from_europe_to_india"] == 0
        assert set(template[OUTBOUND_USAGE_KEY].values()) == {0}

    def test_unknown_top_level_keys(self):
        usage = {INBOUND_USAGE_KEY: {}, "monthly_requests": 5}
        assert unknown_usage_keys(usage) == ["monthly_requests"]


class TestDecimalHelper:
    """Test coercion of usage values."""

    def test_float_goes_through_str(self):
        assert decimal(12.5) == Decimal("12.5")

    def test_none_is_default(self):
        assert decimal(None) == 0

    @pytest.mark.parametrize("value", [True, "lots", "nan", "-inf"])
    def test_rejected_values(self, value):
        with pytest.raises(ValueError):
            decimal(value)
