from __future__ import annotations

import json
from dataclasses import FrozenInstanceError

import pytest

from idfc_helper.utilities.config_layout import (
    DEFAULT_LAYOUT,
    StatementLayout,
    load_layout,
)


def test_default_layout_matches_export_positions():
    assert DEFAULT_LAYOUT.transaction_start_row == 24
    assert (DEFAULT_LAYOUT.summary_label_row, DEFAULT_LAYOUT.summary_value_row) == (18, 19)
    assert DEFAULT_LAYOUT.tail_window == 10


def test_layout_is_immutable():
    with pytest.raises(FrozenInstanceError):
        setattr(DEFAULT_LAYOUT, "transaction_start_row", 3)


def test_from_dict_overrides_known_keys_and_ignores_unknown():
    # Arrange
    data = {"transaction_start_row": "22", "balance_tolerance": 1, "colour": "blue"}
    # Act
    layout = StatementLayout.from_dict(data)
    # Assert
    assert layout.transaction_start_row == 22
    assert layout.balance_tolerance == 1.0 and isinstance(layout.balance_tolerance, float)
    assert layout.summary_value_row == DEFAULT_LAYOUT.summary_value_row
    assert not hasattr(layout, "colour")


def test_load_layout_none_gives_default():
    assert load_layout(None) is DEFAULT_LAYOUT


def test_load_layout_reads_json(tmp_path):
    p = tmp_path / "layout.json"
    p.write_text(json.dumps({"summary_value_row": 17, "col_balance": 7}), encoding="utf-8")

    layout = load_layout(p)

    assert layout.summary_value_row == 17
    assert layout.col_balance == 7


def test_load_layout_rejects_non_object(tmp_path):
    p = tmp_path / "layout.json"
    p.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(ValueError):
        load_layout(p)


@pytest.mark.parametrize(
    "data",
    [
        {"transaction_start_row": None},
        {"transaction_start_row": [24]},
        {"tail_window": {"n": 10}},
        {"summary_value_row": "nineteen"},
    ],
)
def test_from_dict_rejects_values_of_the_wrong_type(data):
    key = next(iter(data))

    with pytest.raises(ValueError) as ei:
        StatementLayout.from_dict(data)

    assert repr(key) in str(ei.value)
