"""Unit tests for column contracts."""
import logging

import pandas as pd
import pytest

from plotprep.tidy.schema import as_column_list, enforce_dtypes, require_columns, type_convert


class TestRequireColumns:

    def test_passes_with_all_columns(self):
        require_columns(pd.DataFrame(columns=["a", "b"]), ["a"])

    def test_lists_all_missing_columns_sorted(self):
        with pytest.raises(KeyError) as exc_info:
            require_columns(pd.DataFrame(columns=["a"]), ["c", "b", "a"], context="plot")
        message = str(exc_info.value)
        assert "Missing expected plot columns" in message
        assert "['b', 'c']" in message


class TestEnforceDtypes:

    def test_casts_and_skips_missing(self):
        df = pd.DataFrame({"a": ["1", "2"]})
        result = enforce_dtypes(df, {"a": "int64", "b": "float64"})
        assert result["a"].dtype == "int64"
        assert df["a"].tolist() == ["1", "2"]

    def test_missing_column_raises_when_not_skipped(self):
        with pytest.raises(KeyError, match="Column 'b' not found"):
            enforce_dtypes(pd.DataFrame({"a": [1]}), {"b": "int64"}, skip_missing=False)

    def test_unparseable_dates_become_nat_with_warning(self, caplog):
        df = pd.DataFrame({"date": ["2020-01-01", "not a date"]})
        with caplog.at_level(logging.WARNING, logger="plotprep.tidy.schema"):
            result = enforce_dtypes(df, {"date": "datetime64[ns]"})
        assert result["date"].isna().tolist() == [False, True]
        assert "1 values could not be converted" in caplog.text

    def test_failed_cast_is_logged_not_raised(self, caplog):
        df = pd.DataFrame({"a": ["x"]})
        with caplog.at_level(logging.WARNING, logger="plotprep.tidy.schema"):
            result = enforce_dtypes(df, {"a": "int64"})
        assert result["a"].tolist() == ["x"]
        assert "Could not convert column 'a'" in caplog.text


class TestHelpers:

    def test_as_column_list(self):
        assert as_column_list(None) == []
        assert as_column_list("a") == ["a"]
        assert as_column_list(("a", "b")) == ["a", "b"]

    def test_type_convert(self):
        assert type_convert(pd.Series(["1", "2"])).tolist() == [1, 2]
        assert type_convert(pd.Series(["1", "x"])).tolist() == ["1", "x"]
        assert type_convert(pd.Series(["1.5", None])).iloc[0] == 1.5
