"""Unit tests for separate/unite."""
import logging

import numpy as np
import pandas as pd
import pytest

from plotprep.tidy.separate import separate, unite


@pytest.fixture
def rates():
    return pd.DataFrame({
        "country": ["A", "B"],
        "rate": ["745/19987071", "2666/20595360"],
        "year": [1999, 1999],
    })


class TestSeparate:
    """Tests for separate."""

    def test_default_separator_splits_on_non_alphanumerics(self, rates):
        result = separate(rates, "rate", into=["cases", "population"])

        assert list(result.columns) == ["country", "cases", "population", "year"]
        assert result["cases"].tolist() == ["745", "2666"]
        assert result["population"].tolist() == ["19987071", "20595360"]

    def test_convert_makes_pieces_numeric(self, rates):
        result = separate(rates, "rate", into=["cases", "population"], convert=True)
        assert result["cases"].tolist() == [745, 2666]
        assert pd.api.types.is_integer_dtype(result["population"])

    def test_remove_false_keeps_original_column(self, rates):
        result = separate(rates, "rate", into=["cases", "population"], remove=False)
        assert list(result.columns) == ["country", "rate", "cases", "population", "year"]

    def test_split_by_position(self):
        df = pd.DataFrame({"year": ["1999", "2000"]})
        result = separate(df, "year", into=["century", "yy"], sep=[2])

        assert result["century"].tolist() == ["19", "20"]
        assert result["yy"].tolist() == ["99", "00"]

    def test_negative_position_counts_from_right(self):
        df = pd.DataFrame({"code": ["m014", "f1524"]})
        result = separate(df, "code", into=["sex", "age"], sep=[1])
        assert result["sex"].tolist() == ["m", "f"]

        result = separate(df, "code", into=["head", "tail"], sep=[-2])
        assert result["head"].tolist() == ["m0", "f15"]
        assert result["tail"].tolist() == ["14", "24"]

    def test_custom_regex(self):
        df = pd.DataFrame({"key": ["new_sp_m014"]})
        result = separate(df, "key", into=["new", "type", "sexage"], sep="_")
        assert result.iloc[0].tolist() == ["new", "sp", "m014"]

    def test_none_in_into_drops_piece(self):
        df = pd.DataFrame({"key": ["new_sp_m014"]})
        result = separate(df, "key", into=[None, "type", "sexage"], sep="_")
        assert list(result.columns) == ["type", "sexage"]

    def test_extra_warn_drops_and_logs(self, caplog):
        df = pd.DataFrame({"x": ["a-b-c", "d-e"]})
        with caplog.at_level(logging.WARNING, logger="plotprep.tidy.separate"):
            result = separate(df, "x", into=["first", "second"])

        assert result["second"].tolist() == ["b", "e"]
        assert "too many values" in caplog.text

    def test_extra_drop_is_silent(self, caplog):
        df = pd.DataFrame({"x": ["a-b-c"]})
        with caplog.at_level(logging.WARNING, logger="plotprep.tidy.separate"):
            result = separate(df, "x", into=["first", "second"], extra="drop")

        assert result["second"].tolist() == ["b"]
        assert caplog.text == ""

    def test_extra_merge_keeps_remainder(self):
        df = pd.DataFrame({"x": ["a-b-c"]})
        result = separate(df, "x", into=["first", "rest"], extra="merge")
        assert result["rest"].tolist() == ["b-c"]

    def test_extra_merge_with_single_output(self):
        df = pd.DataFrame({"x": ["a-b-c"]})
        result = separate(df, "x", into=["all"], extra="merge")
        assert result["all"].tolist() == ["a-b-c"]

    def test_fill_warn_pads_right_and_logs(self, caplog):
        df = pd.DataFrame({"x": ["a"]})
        with caplog.at_level(logging.WARNING, logger="plotprep.tidy.separate"):
            result = separate(df, "x", into=["first", "second"])

        assert result["first"].tolist() == ["a"]
        assert result["second"].isna().all()
        assert "too few values" in caplog.text

    def test_fill_left(self):
        df = pd.DataFrame({"x": ["a"]})
        result = separate(df, "x", into=["first", "second"], fill="left")
        assert result["first"].isna().all()
        assert result["second"].tolist() == ["a"]

    def test_missing_input_gives_missing_pieces(self):
        df = pd.DataFrame({"x": ["a-b", np.nan]})
        result = separate(df, "x", into=["first", "second"])
        assert result["first"].iloc[0] == "a"
        assert result.iloc[1].isna().all()

    def test_invalid_extra_raises(self, rates):
        with pytest.raises(ValueError, match="extra must be"):
            separate(rates, "rate", into=["a", "b"], extra="keep")

    def test_unknown_column_raises(self, rates):
        with pytest.raises(KeyError, match="Missing expected separate columns"):
            separate(rates, "ratio", into=["a", "b"])


class TestUnite:
    """Tests for unite."""

    @pytest.fixture
    def parts(self):
        return pd.DataFrame({
            "century": ["19", "20"],
            "yy": ["99", "00"],
            "cases": [745, 2666],
        })

    def test_default_separator(self, parts):
        result = unite(parts, "year", ["century", "yy"])
        assert list(result.columns) == ["year", "cases"]
        assert result["year"].tolist() == ["19_99", "20_00"]

    def test_empty_separator(self, parts):
        result = unite(parts, "year", ["century", "yy"], sep="")
        assert result["year"].tolist() == ["1999", "2000"]

    def test_remove_false_keeps_inputs(self, parts):
        result = unite(parts, "year", ["century", "yy"], remove=False)
        assert list(result.columns) == ["year", "century", "yy", "cases"]

    def test_position_of_first_united_column(self, parts):
        result = unite(parts, "label", ["cases", "yy"], sep="-")
        assert list(result.columns) == ["century", "label"]
        assert result["label"].tolist() == ["745-99", "2666-00"]

    def test_missing_values_render_as_na(self):
        df = pd.DataFrame({"a": ["x", None], "b": ["y", "z"]})
        assert unite(df, "ab", ["a", "b"])["ab"].tolist() == ["x_y", "NA_z"]
        assert unite(df, "ab", ["a", "b"], na_rm=True)["ab"].tolist() == ["x_y", "z"]

    def test_int_and_float_columns_keep_their_own_formatting(self):
        df = pd.DataFrame({"a": [1, 2], "b": [2.5, 3.5]})
        assert unite(df, "ab", ["a", "b"])["ab"].tolist() == ["1_2.5", "2_3.5"]

    def test_missing_float_renders_as_na(self):
        df = pd.DataFrame({"a": [1, 2], "b": [np.nan, 3.5]})
        assert unite(df, "ab", ["a", "b"])["ab"].tolist() == ["1_NA", "2_3.5"]

    def test_separate_then_unite_round_trips(self, parts):
        united = unite(parts, "year", ["century", "yy"], sep="")
        split = separate(united, "year", into=["century", "yy"], sep=[2])
        pd.testing.assert_frame_equal(split[["century", "yy"]], parts[["century", "yy"]], check_dtype=False)
