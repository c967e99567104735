"""Permutation tests: expand ordered base forms into composite forms."""

import itertools
import math
from typing import Any, Dict, List, Optional, Sequence

from splitsmith.dx.errors import PermutationSpaceTooLarge

MAX_PERMUTATIONS = 24


def permutation_count(n_total: int, n_taken: int) -> int:
    """Number of ordered choices of ``n_taken`` out of ``n_total``: N!/(N-n)!."""
    return math.perm(n_total, n_taken)


def expand(base_forms: Sequence[Any], take_first_n: Optional[int] = None) -> Dict[str, List[Any]]:
    """
    Expand base forms into one composite form per leading-slot permutation.

    Every ordered choice of ``take_first_n`` base forms fills the leading
    slots; the forms not chosen follow in their original order. Composite
    ids concatenate the chosen indices.

        >>> expand(["a", "b", "c"], 2)["21"]
        ['c', 'b', 'a']

    Args:
        base_forms: Forms in their natural order
        take_first_n: How many leading slots to permute (default: all)

    Returns:
        Ordered mapping of composite id -> reordered list of base forms

    Raises:
        PermutationSpaceTooLarge: More than MAX_PERMUTATIONS composites
        ValueError: Empty base forms or take_first_n outside 1..len(base_forms)
    """
    forms = list(base_forms)
    n_total = len(forms)
    if n_total == 0:
        raise ValueError("Permutation test needs at least one base form")

    n_taken = n_total if take_first_n is None else take_first_n
    if not 1 <= n_taken <= n_total:
        raise ValueError(f"take_first_n must be between 1 and {n_total}, got {take_first_n}")

    size = permutation_count(n_total, n_taken)
    if size > MAX_PERMUTATIONS:
        raise PermutationSpaceTooLarge(size, MAX_PERMUTATIONS)

    composites: Dict[str, List[Any]] = {}
    for chosen in itertools.permutations(range(n_total), n_taken):
        rest = [i for i in range(n_total) if i not in chosen]
        form_id = "".join(str(i) for i in chosen)
        composites[form_id] = [forms[i] for i in chosen + tuple(rest)]
    return composites
