"""Tests for input assignment parsing."""

import json

import numpy as np
import pytest

from primitives.errors import InputParseError
from protocol.inputs import flatten_values, load_inputs, normalize_assignment, parse_value


class TestParseValue:
    """Tests for single value parsing."""

    def test_int(self) -> None:
        assert parse_value(5) == 5
        assert parse_value(np.int64(7)) == 7

    def test_decimal_string(self) -> None:
        assert parse_value("21888242871839275222246405745257275088548364400416034343698204186575808495616") == (
            21888242871839275222246405745257275088548364400416034343698204186575808495616
        )

    def test_hex_string(self) -> None:
        assert parse_value("0xff") == 255
        assert parse_value("0XFF") == 255

    def test_negative_string(self) -> None:
        """Negatives parse; rejecting them is the calculator's job."""
        assert parse_value("-3") == -3

    def test_invalid_string(self) -> None:
        with pytest.raises(InputParseError, match="xyz"):
            parse_value("xyz")

    def test_bool_rejected(self) -> None:
        with pytest.raises(InputParseError):
            parse_value(True)

    def test_float_rejected(self) -> None:
        with pytest.raises(InputParseError):
            parse_value(1.5)


class TestFlatten:
    """Tests for array signal flattening."""

    def test_scalar(self) -> None:
        assert flatten_values("3") == [3]

    def test_nested_row_major(self) -> None:
        assert flatten_values([[1, 2], [3, 4]]) == [1, 2, 3, 4]

    def test_numpy_array(self) -> None:
        assert flatten_values(np.array([[1, 2], [3, 4]])) == [1, 2, 3, 4]


class TestNormalizeAssignment:
    """Tests for mapping / pair inputs."""

    def test_mapping_keeps_order(self) -> None:
        assert normalize_assignment({"b": 5, "a": [3]}) == [("b", [5]), ("a", [3])]

    def test_pairs(self) -> None:
        assert normalize_assignment([("a", [1, 2])]) == [("a", [1, 2])]


class TestLoadInputs:
    """Tests for input.json loading."""

    def test_load(self, tmp_path) -> None:
        path = tmp_path / "input.json"
        path.write_text(json.dumps({"a": "3", "b": ["0x05"]}))
        assert load_inputs(path) == [("a", [3]), ("b", [5])]

    def test_malformed_json(self, tmp_path) -> None:
        path = tmp_path / "input.json"
        path.write_text("{\"a\": ")
        with pytest.raises(InputParseError, match="invalid JSON"):
            load_inputs(path)

    def test_not_an_object(self, tmp_path) -> None:
        path = tmp_path / "input.json"
        path.write_text("[1, 2]")
        with pytest.raises(InputParseError, match="JSON object"):
            load_inputs(path)
