"""Smoke tests for quick-look plots."""
import matplotlib.pyplot as plt
import pandas as pd
import pytest

from plotprep.fortify.models import fit_linear_model
from plotprep.fortify import fortify
from plotprep.tidy.reshape import gather
from plotprep.utils.visualization import plot_long, plot_model_diagnostics


@pytest.fixture
def long():
    wide = pd.DataFrame({
        "year": [2000, 2001, 2002, 2003],
        "a": [1.0, 2.0, 3.0, 4.0],
        "b": [4.0, 3.0, 2.5, 1.0],
        "c": [0.0, 1.0, 0.5, 2.0],
    })
    return gather(wide, id_columns="year")


class TestPlotLong:

    def test_overlay_has_one_line_per_key(self, long):
        fig, axes = plot_long(long, x="year")
        assert len(axes) == 1
        assert len(axes[0].get_lines()) == 3
        plt.close(fig)

    def test_facets_hide_unused_panels(self, long):
        fig, axes = plot_long(long, x="year", facet=True, ncols=2)
        assert len(axes) == 4
        assert [ax.get_title() for ax in axes[:3]] == ["a", "b", "c"]
        assert not axes[3].axison
        plt.close(fig)

    def test_missing_column_raises(self, long):
        with pytest.raises(KeyError):
            plot_long(long, x="month")


class TestPlotModelDiagnostics:

    def test_two_panels(self):
        df = pd.DataFrame({"x": [1.0, 2.0, 3.0, 4.0, 5.0], "y": [1.1, 1.9, 3.2, 3.9, 5.1]})
        fig, axes = plot_model_diagnostics(fortify(fit_linear_model(df, "y", "x")))
        assert [ax.get_title() for ax in axes] == ["Residuals vs Fitted", "Normal Q-Q"]
        plt.close(fig)
