"""Span reconciliation shared by the column and row resolvers."""

from __future__ import annotations

from typing import List, Sequence


def distribute_span(
    sizes: List[float],
    span: Sequence[int],
    explicit: Sequence[bool],
    required: float,
) -> None:
    """

    Grow ``sizes[k]`` for ``k`` in ``span`` until they sum to ``required``.

    The shortfall goes to the tracks without an explicit size, each growing in
    proportion to its current size (wider tracks absorb more). When every
    track is explicit all of them grow proportionally; when the span is empty
    so far the requirement is split evenly.

    """
    if not span:
        return
    total = sum(sizes[k] for k in span)
    if required <= total:
        return

    if total == 0:
        share = required / len(span)
        for k in span:
            sizes[k] = share
        return

    shortfall = required - total
    flexible = [k for k in span if not explicit[k]]
    if not flexible:
        for k in span:
            sizes[k] += sizes[k] / total * shortfall
        return

    flexible_total = sum(sizes[k] for k in flexible)
    if flexible_total == 0:
        share = shortfall / len(flexible)
        for k in flexible:
            sizes[k] += share
        return

    for k in flexible:
        sizes[k] += sizes[k] / flexible_total * shortfall
