"""
Synthetic screen generation for rank aggregation evaluation.

This module generates replicated screens in which a fraction of groups
(e.g. genes) are true hits whose items (e.g. guides) rank consistently
high, together with the ground-truth labels.
"""

import numpy as np
import pandas as pd
from typing import Tuple, Literal

from .model import RECORD_COLUMNS

# Mean shift of hit items, in units of the null standard deviation.
# Lower values rank first, so hits are shifted downwards.
EFFECT_SHIFTS = {
    'weak': 0.5,
    'medium': 1.5,
    'strong': 3.0
}


def generate_group_labels(
    n_groups: int,
    hit_fraction: float = 0.1,
    random_state: int = 42
) -> np.ndarray:
    """
    Draw null/hit labels for each group.

    Returns
    -------
    true_labels : np.ndarray, shape (n_groups,)
        True labels: 1 = H0 (null), 0 = H1 (hit)
    """
    rng = np.random.default_rng(random_state)
    n_hits = int(round(n_groups * hit_fraction))

    true_labels = np.ones(n_groups, dtype=int)
    if n_hits > 0:
        true_labels[rng.choice(n_groups, size=n_hits, replace=False)] = 0
    return true_labels


def generate_screen_data(
    n_groups: int = 200,
    items_per_group: int = 4,
    n_lists: int = 3,
    hit_fraction: float = 0.1,
    effect_strength: Literal['weak', 'medium', 'strong'] = 'medium',
    hit_item_fraction: float = 0.75,
    random_state: int = 42
) -> Tuple[pd.DataFrame, pd.Series]:
    """
    Generate a replicated screen: every item measured once in every list.

    Null items draw N(0, 1) values in each list. In a hit group, a
    fraction ``hit_item_fraction`` of items are active and draw
    N(-shift, 1) in every list, so they rank near the top.

    Parameters
    ----------
    n_groups : int, default=200
        Number of groups
    items_per_group : int, default=4
        Items per group (each measured in every list)
    n_lists : int, default=3
        Number of replicate lists
    hit_fraction : float, default=0.1
        Fraction of groups that are hits
    effect_strength : {'weak', 'medium', 'strong'}, default='medium'
        Size of the downward shift of active items
    hit_item_fraction : float, default=0.75
        Fraction of a hit group's items that carry the effect
    random_state : int, default=42
        Random seed

    Returns
    -------
    records : pd.DataFrame
        Columns ``item_id, group_id, list_id, value``
    true_labels : pd.Series
        Indexed by group id: 1 = H0 (null), 0 = H1 (hit)
    """
    rng = np.random.default_rng(random_state + 1)
    shift = EFFECT_SHIFTS[effect_strength]

    labels = generate_group_labels(n_groups, hit_fraction, random_state)
    group_ids = [f"G{g:05d}" for g in range(n_groups)]
    n_active = max(1, int(round(items_per_group * hit_item_fraction)))

    rows = []
    for g, group_id in enumerate(group_ids):
        means = np.zeros(items_per_group)
        if labels[g] == 0:
            means[:n_active] = -shift
        for rep in range(n_lists):
            values = rng.normal(means, 1.0)
            for i in range(items_per_group):
                rows.append((f"{group_id}_{i}", group_id, f"rep{rep + 1}", float(values[i])))

    records = pd.DataFrame(rows, columns=RECORD_COLUMNS)
    true_labels = pd.Series(labels, index=group_ids, name='true_label')

    return records, true_labels
