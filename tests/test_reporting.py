# tests/test_reporting.py
"""
JSON-ready layout dictionaries.
"""

from __future__ import annotations

import json
import math

from riverlabel.core.config import SCHEMA_VERSION
from riverlabel.core.error_codes import NO_USABLE_PATH, user_message
from riverlabel.core.pipeline import label_river
from riverlabel.core.reporting import layout_to_dict
from riverlabel.core.text_metrics import fixed_ratio_advance_width
from riverlabel.core.types import LabelSpec


def _layout(coords: list[list[float]], text: str = "Test"):
    label = LabelSpec(text=text, font_family="Arial", font_size_pt=16)
    return label_river(coords, label, advance_width=fixed_ratio_advance_width)


def test_layout_dict_structure() -> None:
    coords = [[i * 50.0, 0.0, 30.0] for i in range(11)]
    d = layout_to_dict(_layout(coords))
    assert d["schema_version"] == SCHEMA_VERSION == "1.0"
    assert set(d) == {"schema_version", "label", "path", "analysis", "result", "glyphs"}
    assert d["label"]["text"] == "Test"
    assert d["path"]["has_widths"] is True
    assert d["path"]["total_length_pt"] == 500.0
    assert d["result"]["fits"] is True
    assert d["result"]["user_message"] is None
    assert d["result"]["placement"]["scores"]["width"] == 100.0
    assert len(d["glyphs"]) == 4
    g = d["glyphs"][0]
    assert math.isclose(g["angle_deg"], math.degrees(g["angle_rad"]))
    json.dumps(d)


def test_rejected_regions_reported() -> None:
    zigzag = [[0, 0], [1, 0], [1, 1], [2, 1], [2, 2]]
    d = layout_to_dict(_layout(zigzag))
    reasons = {r["reason"] for r in d["analysis"]["rejected_regions"]}
    assert reasons == {"sharp-curve", "path-edge"}
    assert d["result"]["placement"] is None
    assert d["result"]["warning_code"] == "no_usable_path"
    assert d["result"]["user_message"] == user_message(NO_USABLE_PATH)
    assert d["glyphs"] == []
    json.dumps(d)
