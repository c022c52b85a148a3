"""Test city and judge page payloads."""

import pytest

from core.filters import normalize_filters
from core.metrics_city import compute_city_page
from core.metrics_judge import compute_judge_page


class TestCityPage:
    """City payloads combine aggregates, rings and the sorted judge list."""

    def test_found_city(self, table):
        payload = compute_city_page(normalize_filters({"city": "Springfield"}), table)
        assert payload["found"]
        assert payload["judge_count"] == 3
        assert payload["aggregate"]["total_cases"] == 175
        assert payload["summary"] == (
            "Out of 175 cases in Springfield, 70 were granted asylum, 17 were granted other relief, and 88 were denied"
        )

    def test_rings_follow_averages(self, table):
        payload = compute_city_page(normalize_filters({"city": "Springfield"}), table)
        asylum = payload["rings"]["asylum"]
        assert asylum["title"] == "Asylum Granted"
        assert asylum["geometry"]["size"] == 110
        assert asylum["geometry"]["percentage"] == pytest.approx(120.5 / 3)
        assert asylum["geometry"]["label"] == "40%"
        assert payload["rings"]["denied"]["geometry"]["color"] == "#FF7A7A"
        assert set(payload["charts"]) == {"asylum_ring", "other_relief_ring", "denied_ring", "judge_rates"}

    def test_judges_are_sorted(self, table):
        high = compute_city_page(normalize_filters({"city": "Springfield"}), table)
        assert [j["judge_name"] for j in high["judges"]] == ["Ana Álvarez", "Ben Carter", "carl Duarte"]
        low = compute_city_page(normalize_filters({"city": "Springfield", "sort": "casesLow"}), table)
        assert [j["judge_name"] for j in low["judges"]] == ["carl Duarte", "Ben Carter", "Ana Álvarez"]

    def test_judge_rows_carry_breakdown_and_ring(self, table):
        payload = compute_city_page(normalize_filters({"city": "Springfield"}), table)
        ana = payload["judges"][0]
        assert ana["breakdown"]["asylum_granted_amount"] == 60
        assert ana["ring"]["color"] == "#FFBD7A"

    def test_unknown_sort_keeps_table_order(self, table):
        payload = compute_city_page(normalize_filters({"city": "Springfield", "sort": "bogus"}), table)
        assert [j["judge_name"] for j in payload["judges"]] == ["Ana Álvarez", "Ben Carter", "carl Duarte"]

    def test_localized(self, table):
        payload = compute_city_page(normalize_filters({"city": "Springfield", "language": "es"}), table)
        assert payload["labels"]["average_rates"] == "Tasas Promedio"
        assert payload["summary"].startswith("De 175 casos en Springfield")
        assert payload["sort_options"][0]["label"] == "Tasa de Aprobación (Alta a Baja)"

    def test_unknown_city(self, table):
        payload = compute_city_page(normalize_filters({"city": "Ogdenville", "language": "ht"}), table)
        assert payload == {
            "filters": payload["filters"],
            "found": False,
            "city": "Ogdenville",
            "message": "Vil pa jwenn",
        }

    def test_city_with_unparseable_rates(self, table):
        payload = compute_city_page(normalize_filters({"city": "Shelbyville"}), table)
        assert payload["aggregate"]["avg_asylum_rate"] == 0
        assert payload["aggregate"]["asylum_granted_amount"] == 0
        assert payload["rings"]["asylum"]["geometry"]["label"] == "0%"


class TestJudgePage:
    """Judge payloads compare each rate against the city average."""

    def test_found_judge(self, table):
        payload = compute_judge_page("ben carter", normalize_filters({}), table)
        assert payload["found"]
        assert payload["judge"] == "Ben Carter"
        assert payload["city"] == "Springfield"
        assert payload["breakdown"]["granted_total"] == 25
        assert payload["summary"] == "Out of 50 total cases for Ben Carter, 25 were granted asylum or other forms of relief."

    def test_rings_have_city_reference_mark(self, table):
        payload = compute_judge_page("Ben Carter", normalize_filters({}), table)
        asylum = payload["rings"]["asylum"]
        assert asylum["geometry"]["size"] == 180
        assert asylum["geometry"]["tick"]["percentage"] == pytest.approx(120.5 / 3)
        assert asylum["count"] == 20
        assert asylum["text"] == "20 cases out of 50 total cases for Ben Carter were granted asylum."

    def test_zero_decisions(self, table):
        payload = compute_judge_page("Dana Evans", normalize_filters({}), table)
        assert payload["breakdown"]["total_decisions"] == 0
        assert payload["summary"] == "Out of 0 total cases for Dana Evans, 0 were granted asylum or other forms of relief."

    def test_unknown_judge(self, table):
        payload = compute_judge_page("Nobody", normalize_filters({"language": "es"}), table)
        assert not payload["found"]
        assert payload["message"] == "Juez no encontrado"
