"""Tests for the permutation test generator."""

import pytest

from splitsmith.ab.multivariate import MAX_PERMUTATIONS, expand, permutation_count
from splitsmith.dx.errors import PermutationSpaceTooLarge


class TestExpand:
    """Test composite form generation."""

    def test_partial_permutation(self):
        """Two leading slots of three forms give six distinct orderings."""
        composites = expand(["a", "b", "c"], take_first_n=2)

        assert len(composites) == 6
        assert len({tuple(form) for form in composites.values()}) == 6
        assert all(sorted(form) == ["a", "b", "c"] for form in composites.values())
        assert composites["01"] == ["a", "b", "c"]
        assert composites["10"] == ["b", "a", "c"]
        assert composites["20"] == ["c", "a", "b"]

    def test_full_permutation(self):
        """Without take_first_n every ordering is generated."""
        composites = expand(["x", "y", "z"])
        assert list(composites) == ["012", "021", "102", "120", "201", "210"]
        assert composites["210"] == ["z", "y", "x"]

    def test_single_leading_slot(self):
        """One leading slot moves each form to the front in turn."""
        composites = expand(["a", "b", "c", "d"], 1)
        assert composites == {
            "0": ["a", "b", "c", "d"],
            "1": ["b", "a", "c", "d"],
            "2": ["c", "a", "b", "d"],
            "3": ["d", "a", "b", "c"],
        }

    def test_ceiling(self):
        """Spaces above the ceiling fail before generation."""
        assert len(expand(list("abcd"))) == MAX_PERMUTATIONS
        with pytest.raises(PermutationSpaceTooLarge) as exc_info:
            expand(list("abcde"))
        assert exc_info.value.size == 120
        assert exc_info.value.limit == MAX_PERMUTATIONS

        # 5 * 4 = 20 is fine
        assert len(expand(list("abcde"), 2)) == 20

    def test_invalid_arguments(self):
        """Empty inputs and out-of-range take_first_n are rejected."""
        with pytest.raises(ValueError):
            expand([])
        with pytest.raises(ValueError):
            expand(["a", "b"], 0)
        with pytest.raises(ValueError):
            expand(["a", "b"], 3)

    def test_permutation_count(self):
        """N!/(N-n)!."""
        assert permutation_count(3, 2) == 6
        assert permutation_count(4, 4) == 24
        assert permutation_count(6, 1) == 6
