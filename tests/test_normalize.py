"""
Normalizer: drop rules, defaults and ordering.
"""

from datetime import date

import pytest

from astrobiogen.models import GeneRecord
from astrobiogen.net import UpstreamMalformedPayload, ValidationFailure
from astrobiogen.utils.normalize import (
    calculate_duration,
    clean_llm_text,
    merge_weather,
    normalize_cme,
    normalize_flares,
    normalize_gene_rows,
    normalize_iss,
    normalize_launches,
    normalize_nasa_images,
    normalize_search,
    normalize_space_weather,
    normalize_tavily,
    parse_facts,
    parse_quiz,
    planetary_positions,
    sort_genes,
)


class TestGeneRows:
    def test_column_aliases(self):
        rows = [
            {"Symbol": "MT1", "Name": "Metallothionein 1", "log2FoldChange": "2.7", "padj": "0.0002"},
            {"Gene Symbol": "MYH7", "Gene Name": "Myosin", "Fold Change": -2.8, "P-value": 1e-4,
             "Gene Function": "Muscle contraction"},
        ]
        genes = normalize_gene_rows(rows)
        assert [g.gene_symbol for g in genes] == ["MT1", "MYH7"]
        assert genes[0].fold_change == pytest.approx(2.7)
        assert genes[1].function == "Muscle contraction"

    def test_drops_invalid_rows(self):
        rows = [
            {"gene_symbol": "", "fold_change": 1.0, "p_value": 0.01},
            {"gene_symbol": "A", "fold_change": "NaN", "p_value": 0.01},
            {"gene_symbol": "B", "fold_change": "inf", "p_value": 0.01},
            {"gene_symbol": "C", "fold_change": 1.0, "p_value": 0},
            {"gene_symbol": "D", "fold_change": 1.0, "p_value": 1.5},
            {"gene_symbol": "E", "fold_change": "n/a", "p_value": 0.5},
            {"gene_symbol": "OK", "fold_change": 1.0, "p_value": 1},
            "not a row",
        ]
        assert [g.gene_symbol for g in normalize_gene_rows(rows)] == ["OK"]

    def test_sort_desc_asc_and_limit(self):
        genes = [GeneRecord(gene_symbol=s, fold_change=fc, p_value=p)
                 for s, fc, p in [("A", 1.0, 0.5), ("B", -3.0, 0.01), ("C", 2.0, 0.1)]]
        assert [g.gene_symbol for g in sort_genes(genes, "fold_change", "desc", 2)] == ["C", "A"]
        assert [g.gene_symbol for g in sort_genes(genes, "p_value", "asc", 10)] == ["B", "C", "A"]
        # anything but "asc" is descending
        assert [g.gene_symbol for g in sort_genes(genes, "fold_change", "sideways", 10)] == ["C", "A", "B"]

    def test_duration(self):
        assert calculate_duration("2016-04-08", "2016-05-11") == "33 days"
        assert calculate_duration("2016-04-08", None) == "Unknown"
        assert calculate_duration("garbage", "2016-05-11") == "Unknown"


class TestSpaceData:
    def test_iss_fills_altitude_and_velocity(self):
        loc = normalize_iss({"timestamp": 1700000000, "iss_position": {"latitude": "12.5", "longitude": "-45.25"}})
        assert (loc.latitude, loc.longitude) == (12.5, -45.25)
        assert loc.altitude == 408 and loc.velocity == 27600
        assert loc.timestamp == 1700000000

    def test_iss_without_position_is_malformed(self):
        with pytest.raises(UpstreamMalformedPayload):
            normalize_iss({"message": "success"})

    def test_weather_defaults_and_notes(self):
        cmes = normalize_cme([{"activityID": "C1", "startTime": "2025-01-01T00:00Z"}, {"activityID": "no-time"}])
        assert len(cmes) == 1
        assert cmes[0].sourceLocation == "Unknown"
        assert cmes[0].link == "https://www.swpc.noaa.gov/"
        flares = normalize_flares([{"flrID": "F1", "beginTime": "2025-01-02T00:00Z", "classType": "M2.3"}])
        assert flares[0].note == "Class M2.3 solar flare detected"
        assert flares[0].type == "FLARE"

    def test_weather_merge_newest_first(self):
        bundle = {
            "CME": [{"activityID": "C1", "startTime": "2025-01-01T00:00Z"}],
            "FLR": [{"flrID": "F1", "beginTime": "2025-01-03T00:00Z", "classType": "X1"}],
            "SEP": [{"sepID": "S1", "eventTime": "2025-01-02T00:00Z"}],
        }
        events = normalize_space_weather(bundle)
        assert [e.activityID for e in events] == ["F1", "S1", "C1"]
        assert merge_weather([], []) == []

    def test_empty_donki_bodies(self):
        assert normalize_space_weather({"CME": "", "FLR": None, "SEP": []}) == []

    def test_launch_defaults(self):
        payload = {"results": [
            {"name": "Bare", "net": "2026-01-01T00:00:00Z"},
            {"name": "No date"},
            {
                "name": "Full", "net": "2026-02-01T00:00:00Z",
                "launch_service_provider": {"name": "SpaceX"},
                "rocket": {"configuration": {"name": "Falcon 9"}},
                "pad": {"name": "SLC-40", "location": {"name": "Cape Canaveral"}},
                "status": {"name": "Go"},
                "mission": {"name": "Starlink", "description": "Batch"},
            },
        ]}
        bare, full = normalize_launches(payload)
        assert bare.provider == "Unknown"
        assert bare.vehicle == "Unknown Vehicle"
        assert bare.location == "Unknown Location"
        assert bare.mission == "Unknown Mission"
        assert bare.description == "No description available"
        assert (full.vehicle, full.pad, full.location) == ("Falcon 9", "SLC-40", "Cape Canaveral")

    def test_planetary_positions_are_a_function_of_the_day(self):
        a = planetary_positions(date(2026, 3, 1))
        b = planetary_positions(date(2026, 3, 1))
        assert a == b
        assert [p.name for p in a][:3] == ["Mercury", "Venus", "Earth"]
        assert len(a) == 8
        assert all(0 <= p.angle < 360 for p in a)
        earth = next(p for p in a if p.name == "Earth")
        assert earth.angle == pytest.approx(60.0)  # day 60 of 2026


class TestLlmOutput:
    def test_clean_llm_text(self):
        raw = "# Title\n**bold** and *italic* with [a link](http://x)\n\n\n\nend"
        assert clean_llm_text(raw) == "Title\nbold and italic with a link\n\nend"

    def test_parse_facts(self):
        text = "1. First fact.\n2) Second fact.\n- Third\n\n• Fourth\n* Fifth\nSixth"
        assert parse_facts(text) == ["First fact.", "Second fact.", "Third", "Fourth", "Fifth"]

    def test_parse_quiz_fenced_and_filtered(self):
        text = """Here you go:
```json
[
  {"question": "Q1", "options": ["a", "b", "c", "d"], "correctAnswer": "b"},
  {"question": "Q2", "options": ["a", "b", "c"], "correctAnswer": "a"},
  {"question": "Q3", "options": ["a", "b", "c", "d"], "correctAnswer": "z"},
  {"question": "Q4", "options": ["a", "b", "c", "d"], "correctAnswer": "d"}
]
```"""
        quiz = parse_quiz(text, 5)
        assert [q.question for q in quiz] == ["Q1", "Q4"]
        assert len(parse_quiz(text, 1)) == 1

    def test_parse_quiz_rejects_prose(self):
        with pytest.raises(UpstreamMalformedPayload):
            parse_quiz("I cannot do that", 3)


class TestSearchPayloads:
    def test_tavily_requires_answer(self):
        with pytest.raises(ValidationFailure):
            normalize_tavily({"answer": "", "results": []})

    def test_tavily_sources(self):
        res = normalize_tavily({"answer": " yes ", "results": [
            {"title": "T", "url": "https://a", "content": "c"},
            {"title": "no url"},
        ]})
        assert res.answer == "yes"
        assert [s.url for s in res.sources] == ["https://a"]

    def test_search_without_anything_is_empty(self):
        assert normalize_search({"results": [], "answer": None}) is None

    def test_nasa_images_keep_preview_only(self):
        payload = {"collection": {"items": [
            {"data": [{"title": "Mars", "description": "red"}], "links": [{"rel": "preview", "href": "https://img/1"}]},
            {"data": [{"title": "No preview"}], "links": [{"rel": "captions", "href": "https://c"}]},
            {"data": [], "links": []},
        ]}}
        items = normalize_nasa_images(payload)
        assert [(i.title, i.href) for i in items] == [("Mars", "https://img/1")]

    def test_nasa_images_shape(self):
        with pytest.raises(UpstreamMalformedPayload):
            normalize_nasa_images({"collection": {}})
