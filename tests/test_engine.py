"""Tests for input collection, decoding and the ranking engine."""

import pytest

from conftest import make_record
from siterank.engine.aggregator import Aggregator, aggregate, composite_score, round_half_up
from siterank.engine.collector import collect, collect_from_file
from siterank.engine.models import AnalysisResult, decode_results
from siterank.errors import DecodeError


def _result(url: str, performance, security, seo) -> AnalysisResult:
    return AnalysisResult(url=url, performance=performance, security=security, seo=seo)


class TestCollector:
    """Tests for newline-separated identifier collection."""

    def test_trims_and_drops_blank_lines(self):
        text = "  a.com \n\n   \nb.com\n\t\n"
        assert collect(text) == ["a.com", "b.com"]

    def test_preserves_order_and_duplicates(self):
        text = "c.com\na.com\nc.com"
        assert collect(text) == ["c.com", "a.com", "c.com"]

    def test_windows_line_endings(self):
        assert collect("a.com\r\nb.com\r\n") == ["a.com", "b.com"]

    def test_empty_input_returns_empty_list(self):
        assert collect("") == []
        assert collect("   \n \n") == []

    def test_output_never_longer_than_input(self):
        text = "x.com\n\ny.com\n  \nz.com"
        result = collect(text)
        assert len(result) <= len(text.splitlines())
        assert all(item and item == item.strip() for item in result)

    def test_collect_from_file(self, tmp_path):
        path = tmp_path / "urls.txt"
        path.write_text("a.com\n\nb.com\n", encoding="utf-8")
        assert collect_from_file(str(path)) == ["a.com", "b.com"]


class TestDecoding:
    """Tests for turning service payloads into AnalysisResult objects."""

    def test_decodes_full_record(self):
        [result] = decode_results([make_record("a.com", 60, 90, 75)])
        assert result.url == "a.com"
        assert result.performance == 60
        assert result.performance_details.latency_ms == 233.6
        assert result.security_details.hsts is True
        assert result.seo_details.image_alt_text_percentage == 75

    def test_payload_must_be_a_list(self):
        with pytest.raises(DecodeError):
            decode_results({"url": "a.com"})

    def test_elements_must_be_objects(self):
        with pytest.raises(DecodeError):
            decode_results([make_record("a.com", 1, 2, 3), "b.com"])

    def test_missing_fields_become_none(self):
        [result] = decode_results([{"url": "a.com"}])
        assert result.performance is None
        assert result.performance_details.cache_control is None
        assert result.security_details.https is None

    def test_non_object_detail_block_is_ignored(self):
        [result] = decode_results([{"url": "a.com", "seo_details": "oops"}])
        assert result.seo_details.has_page_title is None

    def test_payload_total_is_not_used(self):
        record = make_record("a.com", 10, 10, 10, total=99)
        [ranked] = aggregate(decode_results([record]))
        assert ranked.total == 10


class TestRounding:
    """Tests for round-half-up."""

    def test_halves_round_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4
        assert round_half_up(-2.5) == -2

    def test_other_values_round_to_nearest(self):
        assert round_half_up(74.4) == 74
        assert round_half_up(74.6) == 75


class TestCompositeScore:
    """Tests for the per-record composite score."""

    def test_mean_of_three_subscores(self):
        assert composite_score(_result("a.com", 60, 90, 75)) == 75
        assert composite_score(_result("b.com", 80, 80, 80)) == 80

    def test_rounded_mean(self):
        # 151 / 3 = 50.33
        assert composite_score(_result("a.com", 50, 50, 51)) == 50
        # 152 / 3 = 50.67
        assert composite_score(_result("a.com", 50, 51, 51)) == 51

    def test_out_of_range_values_pass_through(self):
        result = _result("a.com", 150, 150, 150)
        assert composite_score(result) == 150

    def test_missing_subscore_counts_as_zero(self):
        result = _result("a.com", 90, None, 90)
        assert composite_score(result) == 60
        assert result.security is None

    def test_numeric_string_subscore(self):
        assert composite_score(_result("a.com", "90", 90, 90)) == 90

    def test_non_numeric_subscore_counts_as_zero(self):
        assert composite_score(_result("a.com", "fast", 90, 90)) == 60


class TestAggregator:
    """Tests for ranking."""

    def test_scenario_b_outranks_a(self):
        ranked = aggregate([_result("a.com", 60, 90, 75), _result("b.com", 80, 80, 80)])
        assert [r.url for r in ranked] == ["b.com", "a.com"]
        assert [r.total for r in ranked] == [80, 75]

    def test_output_is_permutation_with_non_increasing_totals(self):
        results = [
            _result("a.com", 10, 20, 30),
            _result("b.com", 90, 95, 100),
            _result("c.com", 50, 50, 50),
            _result("d.com", 0, 0, 0),
            _result("e.com", 70, 71, 72),
        ]
        ranked = aggregate(results)

        assert sorted(r.url for r in ranked) == sorted(r.url for r in results)
        totals = [r.total for r in ranked]
        assert totals == sorted(totals, reverse=True)
        for item in ranked:
            expected = round_half_up((item.performance + item.security + item.seo) / 3)
            assert item.total == expected

    def test_ties_keep_input_order(self):
        results = [
            _result("first.com", 60, 60, 60),
            _result("top.com", 100, 100, 100),
            _result("second.com", 70, 50, 60),
            _result("third.com", 59, 61, 60),
        ]
        ranked = aggregate(results)
        assert [r.url for r in ranked] == ["top.com", "first.com", "second.com", "third.com"]

    def test_does_not_mutate_input(self):
        results = [_result("a.com", 1, 1, 1), _result("b.com", 9, 9, 9)]
        aggregate(results)
        assert [r.url for r in results] == ["a.com", "b.com"]

    def test_empty_input(self):
        assert aggregate([]) == []

    def test_zero_score_unreachable_site_is_ranked_last(self):
        unreachable = decode_results([make_record(
            "down.example", 0, 0, 0, backend="N/A", protocols="N/A",
            response_time="Invalid URL",
        )])[0]
        ranked = aggregate([unreachable, _result("up.example", 50, 50, 50)])
        assert ranked[-1].url == "down.example"
        assert ranked[-1].total == 0

    def test_score_breakdown(self):
        breakdown = Aggregator().get_score_breakdown(_result("a.com", 60, 90, 75))
        assert breakdown == {"performance": 60, "security": 90, "seo": 75, "total": 75}
