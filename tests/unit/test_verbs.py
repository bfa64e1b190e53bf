"""Unit tests for single-table verbs."""
import numpy as np
import pandas as pd
import pytest

from plotprep.tidy.verbs import arrange, filter_rows, mutate, rename, select


@pytest.fixture
def df():
    return pd.DataFrame({
        "a": [1, 2, 3, 4],
        "b": ["x", "y", "x", "y"],
        "c": [10.0, np.nan, 30.0, 40.0],
        "d": [True, False, True, False],
    })


class TestFilterRows:

    def test_query_string(self, df):
        assert filter_rows(df, "a > 2")["a"].tolist() == [3, 4]

    def test_conditions_are_combined(self, df):
        result = filter_rows(df, "a > 1", lambda d: d["b"] == "x")
        assert result["a"].tolist() == [3]

    def test_boolean_series_with_missing_counts_as_false(self, df):
        mask = pd.Series([True, None, False, True], dtype="boolean")
        assert filter_rows(df, mask)["a"].tolist() == [1, 4]

    def test_missing_comparison_dropped(self, df):
        assert filter_rows(df, "c > 0")["a"].tolist() == [1, 3, 4]

    def test_query_string_sees_local_variables(self, df):
        cutoff = 3
        assert filter_rows(df, "a >= @cutoff")["a"].tolist() == [3, 4]

    def test_index_preserved(self, df):
        assert list(filter_rows(df, "a > 2").index) == [2, 3]

    def test_wrong_length_raises(self, df):
        with pytest.raises(ValueError, match="length"):
            filter_rows(df, [True, False])


class TestSelect:

    def test_names_in_given_order(self, df):
        assert list(select(df, "d", "a").columns) == ["d", "a"]

    def test_inclusive_range(self, df):
        assert list(select(df, "b:d").columns) == ["b", "c", "d"]

    def test_reversed_range(self, df):
        assert list(select(df, "c:a").columns) == ["c", "b", "a"]

    def test_exclusion_only(self, df):
        assert list(select(df, "-b").columns) == ["a", "c", "d"]

    def test_excluded_range(self, df):
        assert list(select(df, "-b:c").columns) == ["a", "d"]

    def test_unknown_column_raises(self, df):
        with pytest.raises(KeyError, match="Missing expected select columns"):
            select(df, "z")


class TestArrange:

    def test_ascending_missing_last(self, df):
        result = arrange(df, "c")
        assert result["a"].tolist() == [1, 3, 4, 2]

    def test_descending_missing_last(self, df):
        result = arrange(df, "-c")
        assert result["a"].tolist() == [4, 3, 1, 2]

    def test_multiple_keys(self, df):
        result = arrange(df, "b", "-a")
        assert result["a"].tolist() == [3, 1, 4, 2]

    def test_no_keys_returns_input(self, df):
        assert arrange(df) is df


class TestMutate:

    def test_sequential_evaluation(self, df):
        result = mutate(df, double=lambda d: d["a"] * 2, quad=lambda d: d["double"] * 2)
        assert result["quad"].tolist() == [4, 8, 12, 16]

    def test_scalar_and_drop(self, df):
        result = mutate(df, const=1, d=None)
        assert result["const"].tolist() == [1, 1, 1, 1]
        assert "d" not in result.columns

    def test_input_untouched(self, df):
        mutate(df, e=0)
        assert "e" not in df.columns


class TestRename:

    def test_new_equals_old(self, df):
        assert list(rename(df, alpha="a").columns) == ["alpha", "b", "c", "d"]

    def test_unknown_column_raises(self, df):
        with pytest.raises(KeyError):
            rename(df, alpha="z")
