"""Shared probability-table helpers for the n-gram models."""

import math
from typing import List, Optional, Sequence, Tuple

import torch


ProbTable = List[Tuple[str, float]]


def ratio(count: float, total: float) -> float:
    """Divide with IEEE semantics: ``0/0`` is NaN and ``x/0`` is infinite."""
    if total == 0:
        return math.nan if count == 0 else math.inf
    return count / total


def clamp_probability(p: float) -> float:
    """Clamp to [0, 1], passing NaN through unchanged."""
    if math.isnan(p):
        return p
    return min(max(p, 0.0), 1.0)


def sort_table(tokens: Sequence[str], probs: torch.Tensor) -> ProbTable:
    """Pair tokens with probabilities, sorted by probability descending.

    The sort is stable, so tokens given in ascending order keep that order
    among equal probabilities.
    """
    values, order = torch.sort(probs, descending=True, stable=True)
    return [(tokens[i], p) for i, p in zip(order.tolist(), values.tolist())]


def uniform(generator: Optional[torch.Generator] = None) -> float:
    """Draw one value uniformly from [0, 1)."""
    return torch.rand((), generator=generator, dtype=torch.float64).item()


def inverse_cdf(table: ProbTable, value: float, skip: Optional[str] = None) -> Optional[str]:
    """Walk a descending table and return the token whose mass covers ``value``.

    A token equal to ``skip`` is passed over when it would be selected and
    its mass is not added to the running sum. Returns None when the table's
    mass never exceeds ``value``.
    """
    running = 0.0
    for token, p in table:
        if running + p > value:
            if token == skip:
                continue
            return token
        running += p
    return None


def perplexity_from_probs(probs: Sequence[float]) -> float:
    """Return exp of the mean negative log probability.

    Zero probabilities give an infinite result and an empty sequence gives
    NaN; neither raises.
    """
    log_probs = torch.tensor(probs, dtype=torch.float64).log()
    return torch.exp(-log_probs.sum() / len(probs)).item()
