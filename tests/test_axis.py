"""Tests for axis binning strategies."""

import math

import numpy as np
import pytest
from numpy.testing import assert_allclose

from ndbinning.config.enums import AxisBoundaryType, AxisType
from ndbinning.config.validation import ConfigurationError
from ndbinning.core.axis import EquidistantAxis, VariableAxis, normalize_neighborhood_size


class TestEquidistantAxis:
    """Tests for EquidistantAxis."""

    def test_properties(self, equidistant_axis):
        """Test domain accessors and flavour queries."""
        assert equidistant_axis.get_n_bins() == 4
        assert equidistant_axis.get_min() == 0.0
        assert equidistant_axis.get_max() == 4.0
        assert equidistant_axis.get_bin_width() == 1.0
        assert equidistant_axis.axis_type == AxisType.EQUIDISTANT
        assert equidistant_axis.boundary_type == AxisBoundaryType.OPEN
        assert equidistant_axis.is_equidistant()
        assert not equidistant_axis.is_variable()
        assert_allclose(equidistant_axis.get_bin_edges(), [0.0, 1.0, 2.0, 3.0, 4.0])

    @pytest.mark.parametrize("x, expected", [
        (-0.3, 0), (-0.0, 1), (0.0, 1), (0.7, 1), (1.0, 2), (1.2, 2),
        (2.0, 3), (2.7, 3), (3.0, 4), (3.9999, 4), (4.0, 5), (4.98, 5),
    ])
    def test_get_bin(self, equidistant_axis, x, expected):
        """Test coordinate lookup including underflow and overflow."""
        assert equidistant_axis.get_bin(x) == expected

    def test_get_bin_infinite(self, equidistant_axis):
        """Test infinite coordinates fall into underflow/overflow."""
        assert equidistant_axis.get_bin(-math.inf) == 0
        assert equidistant_axis.get_bin(math.inf) == 5

    def test_is_inside(self, equidistant_axis):
        """Test half-open domain check."""
        assert not equidistant_axis.is_inside(-2.0)
        assert equidistant_axis.is_inside(0.0)
        assert equidistant_axis.is_inside(2.5)
        assert not equidistant_axis.is_inside(4.0)

    def test_bin_geometry(self, equidistant_axis):
        """Test centers and edges of real bins."""
        for i in range(1, 5):
            assert equidistant_axis.get_bin_center(i) == pytest.approx(i - 0.5)
            assert equidistant_axis.get_lower_left_bin_edge(i) == pytest.approx(i - 1.0)
            assert equidistant_axis.get_upper_right_bin_edge(i) == pytest.approx(float(i))

    def test_bin_geometry_under_overflow(self, equidistant_axis):
        """Test underflow and overflow bins are one bin width wide."""
        assert equidistant_axis.get_lower_left_bin_edge(0) == pytest.approx(-1.0)
        assert equidistant_axis.get_upper_right_bin_edge(0) == pytest.approx(0.0)
        assert equidistant_axis.get_lower_left_bin_edge(5) == pytest.approx(4.0)
        assert equidistant_axis.get_upper_right_bin_edge(5) == pytest.approx(5.0)

    def test_bin_geometry_invalid_index(self, equidistant_axis):
        """Test indices outside [0, n_bins + 1] raise IndexError."""
        with pytest.raises(IndexError, match="outside"):
            equidistant_axis.get_bin_center(6)
        with pytest.raises(IndexError):
            equidistant_axis.get_lower_left_bin_edge(-1)

    @pytest.mark.parametrize("kwargs, match", [
        (dict(min=1.0, max=1.0, n_bins=4), "must be > min"),
        (dict(min=2.0, max=1.0, n_bins=4), "must be > min"),
        (dict(min=0.0, max=1.0, n_bins=0), "n_bins must be >= 1"),
        (dict(min=0.0, max=math.inf, n_bins=4), "finite"),
        (dict(min="low", max=1.0, n_bins=4), "must be numbers"),
        (dict(min=None, max=1.0, n_bins=4), "must be numbers"),
    ])
    def test_invalid_construction(self, kwargs, match):
        """Test invalid parameters raise ConfigurationError."""
        with pytest.raises(ConfigurationError, match=match):
            EquidistantAxis(**kwargs)

    def test_boundary_type_from_string(self):
        """Test boundary type accepts its string value."""
        axis = EquidistantAxis(0.0, 1.0, 2, "Closed")
        assert axis.boundary_type == AxisBoundaryType.CLOSED

    def test_unknown_boundary_type(self):
        """Test unknown boundary type raises ConfigurationError."""
        with pytest.raises(ConfigurationError, match="Unknown boundary type"):
            EquidistantAxis(0.0, 1.0, 2, "Periodic")

    def test_equality(self):
        """Test axes with the same configuration compare equal."""
        assert EquidistantAxis(0.0, 1.0, 4) == EquidistantAxis(0.0, 1.0, 4)
        assert EquidistantAxis(0.0, 1.0, 4) != EquidistantAxis(0.0, 1.0, 5)
        assert EquidistantAxis(0.0, 1.0, 4) != EquidistantAxis(0.0, 1.0, 4, AxisBoundaryType.BOUND)


class TestVariableAxis:
    """Tests for VariableAxis."""

    def test_properties(self, variable_axis):
        """Test domain accessors and flavour queries."""
        assert variable_axis.get_n_bins() == 2
        assert variable_axis.get_min() == 0.0
        assert variable_axis.get_max() == 4.0
        assert variable_axis.is_variable()
        assert variable_axis.axis_type == AxisType.VARIABLE
        assert_allclose(variable_axis.get_bin_edges(), [0.0, 1.0, 4.0])

    @pytest.mark.parametrize("x, expected", [
        (-0.3, 0), (0.0, 1), (0.7, 1), (1.0, 2), (1.2, 2), (2.7, 2), (4.0, 3), (4.98, 3),
    ])
    def test_get_bin(self, variable_axis, x, expected):
        """Test coordinate lookup on edges and between them."""
        assert variable_axis.get_bin(x) == expected

    def test_bin_geometry(self, variable_axis):
        """Test centers and edges of real bins."""
        assert variable_axis.get_bin_center(1) == pytest.approx(0.5)
        assert variable_axis.get_bin_center(2) == pytest.approx(2.5)
        assert variable_axis.get_lower_left_bin_edge(2) == pytest.approx(1.0)
        assert variable_axis.get_upper_right_bin_edge(2) == pytest.approx(4.0)
        assert variable_axis.get_bin_width(2) == pytest.approx(3.0)

    def test_bin_geometry_under_overflow(self, variable_axis):
        """Test underflow/overflow borrow the width of the first/last bin."""
        assert variable_axis.get_lower_left_bin_edge(0) == pytest.approx(-1.0)
        assert variable_axis.get_upper_right_bin_edge(0) == pytest.approx(0.0)
        assert variable_axis.get_lower_left_bin_edge(3) == pytest.approx(4.0)
        assert variable_axis.get_upper_right_bin_edge(3) == pytest.approx(7.0)

    @pytest.mark.parametrize("edges, match", [
        ([1.0], "at least 2"),
        ([], "at least 2"),
        ([0.0, 1.0, 1.0], "strictly increasing"),
        ([0.0, 2.0, 1.0], "strictly increasing"),
        ([0.0, math.nan], "finite"),
        (3, "must be a list"),
        ([0.0, "one"], "must be numbers"),
        (np.zeros((2, 2)), "must be a list"),
    ])
    def test_invalid_edges(self, edges, match):
        """Test invalid edges raise ConfigurationError."""
        with pytest.raises(ConfigurationError, match=match):
            VariableAxis(edges)

    def test_edges_are_copied(self):
        """Test later changes to the input list do not affect the axis."""
        edges = [0.0, 1.0, 2.0]
        axis = VariableAxis(edges)
        edges[1] = 1.5
        assert axis.get_upper_right_bin_edge(1) == 1.0

    def test_edges_from_array(self):
        """Test numpy edge arrays are accepted and copied."""
        edges = np.array([0.0, 0.5, 3.0])
        axis = VariableAxis(edges)
        edges[1] = 2.0
        assert axis.get_bin(1.0) == 2
        assert axis == VariableAxis([0.0, 0.5, 3.0])

        returned = axis.get_bin_edges()
        returned[0] = -10.0
        assert axis.get_min() == 0.0

    def test_get_bin_many_edges(self):
        """Test lookup on every edge and midpoint of a long irregular axis."""
        edges = np.cumsum(np.linspace(0.1, 1.0, 50))
        axis = VariableAxis(edges)
        for i, edge in enumerate(edges[:-1]):
            assert axis.get_bin(edge) == i + 1
            assert axis.get_bin(0.5 * (edge + edges[i + 1])) == i + 1
        assert axis.get_n_bins() == 49
        assert axis.get_bin(edges[-1]) == 50


class TestClosedAxis:
    """Tests for periodic (CLOSED) axes."""

    def test_get_bin_wraps(self, closed_axis):
        """Test coordinates outside the domain wrap into the real bins."""
        assert closed_axis.get_bin(0.05) == 1
        assert closed_axis.get_bin(1.0) == 1
        assert closed_axis.get_bin(1.05) == 1
        assert closed_axis.get_bin(-0.05) == 10
        assert closed_axis.get_bin(2.95) == 10

    def test_get_bin_never_under_overflow(self, closed_axis):
        """Test finite coordinates never map to bin 0 or n_bins + 1."""
        for x in np.linspace(-3.0, 3.0, 121):
            assert 1 <= closed_axis.get_bin(x) <= 10

    def test_variable_closed_wraps(self):
        """Test periodic wrapping on a variable axis."""
        axis = VariableAxis([0.0, 1.0, 4.0], AxisBoundaryType.CLOSED)
        assert axis.get_bin(4.0) == 1
        assert axis.get_bin(5.5) == 2
        assert axis.get_bin(-0.5) == 2

    def test_wrap_coordinate(self, closed_axis, equidistant_axis):
        """Test coordinate wrapping only applies to CLOSED axes."""
        assert closed_axis.wrap_coordinate(1.25) == pytest.approx(0.25)
        assert closed_axis.wrap_coordinate(-0.25) == pytest.approx(0.75)
        assert equidistant_axis.wrap_coordinate(7.0) == 7.0

    def test_wrap_bin(self, closed_axis):
        """Test periodic bin wrapping."""
        assert closed_axis.wrap_bin(0) == 10
        assert closed_axis.wrap_bin(11) == 1
        assert closed_axis.wrap_bin(-1) == 9
        assert closed_axis.wrap_bin(5) == 5


class TestAxisNeighborhood:
    """Tests for per-axis neighbourhood queries."""

    def test_open_clips_to_under_overflow(self):
        """Test OPEN windows reach but do not pass underflow/overflow."""
        axis = EquidistantAxis(0.0, 1.0, 10)
        assert axis.neighborhood_indices(0, 1) == [0, 1]
        assert axis.neighborhood_indices(1, 3) == [0, 1, 2, 3, 4]
        assert axis.neighborhood_indices(10, 2) == [8, 9, 10, 11]
        assert axis.neighborhood_indices(11, 2) == [9, 10, 11]

    def test_bound_clips_to_real_bins(self):
        """Test BOUND windows stay inside the real bins."""
        axis = EquidistantAxis(0.0, 1.0, 10, AxisBoundaryType.BOUND)
        assert axis.neighborhood_indices(1, 1) == [1, 2]
        assert axis.neighborhood_indices(10, 2) == [8, 9, 10]
        assert axis.neighborhood_indices(0, 1) == []
        assert axis.neighborhood_indices(11, 1) == []

    def test_closed_wraps(self, closed_axis):
        """Test CLOSED windows wrap around."""
        assert closed_axis.neighborhood_indices(1, 1) == [10, 1, 2]
        assert closed_axis.neighborhood_indices(5, 1) == [4, 5, 6]
        assert closed_axis.neighborhood_indices(10, (0, 1)) == [10, 1]
        assert closed_axis.neighborhood_indices(0, 1) == []
        assert closed_axis.neighborhood_indices(11, 1) == []

    def test_closed_window_covers_axis(self):
        """Test a window at least as wide as the axis yields each bin once."""
        axis = EquidistantAxis(0.0, 1.0, 5, AxisBoundaryType.CLOSED)
        for idx in range(1, 6):
            assert axis.neighborhood_indices(idx, 2) == [1, 2, 3, 4, 5]

    def test_closed_brute_force(self):
        """Test wraparound against direct enumeration for small axes."""
        for n in range(1, 7):
            axis = EquidistantAxis(0.0, 1.0, n, AxisBoundaryType.CLOSED)
            for idx in range(1, n + 1):
                for lower in range(0, 3):
                    for upper in range(0, 3):
                        expected = {(idx - 1 + k) % n + 1 for k in range(-lower, upper + 1)}
                        result = axis.neighborhood_indices(idx, (lower, upper))
                        assert set(result) == expected
                        assert len(result) == len(set(result))

    def test_invalid_index(self, closed_axis):
        """Test neighbourhoods of invalid local indices raise IndexError."""
        with pytest.raises(IndexError):
            closed_axis.neighborhood_indices(12, 1)

    def test_upper_corner_bin(self, closed_axis, equidistant_axis):
        """Test upper interpolation node per boundary type."""
        assert closed_axis.upper_corner_bin(10) == 1
        assert closed_axis.upper_corner_bin(3) == 4
        assert equidistant_axis.upper_corner_bin(4) == 5
        assert equidistant_axis.upper_corner_bin(5) == 5


class TestNormalizeNeighborhoodSize:
    """Tests for neighbourhood size normalization."""

    def test_int_and_pair(self):
        """Test int and pair forms."""
        assert normalize_neighborhood_size(2) == (2, 2)
        assert normalize_neighborhood_size((0, 1)) == (0, 1)
        assert normalize_neighborhood_size(np.int64(1)) == (1, 1)

    def test_invalid(self):
        """Test negative sizes and wrong lengths raise ValueError."""
        with pytest.raises(ValueError, match="non-negative"):
            normalize_neighborhood_size(-1)
        with pytest.raises(ValueError, match="pair"):
            normalize_neighborhood_size((1, 2, 3))
