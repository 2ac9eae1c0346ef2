"""
Items, ranked lists and groups.

Records arrive one at a time as (item, group, list, value). Each item is
owned by its group and refers to its list by name. A list collects the
values of every item measured in it; it is sorted once when percentile
computation starts and is immutable afterwards.
"""

import numpy as np
import pandas as pd
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set, Tuple

from ..exceptions import InvalidInputError, ResourceExhaustionError

MAX_GROUP_NUM = 100000
MAX_LIST_NUM = 1000

RECORD_COLUMNS = ['item_id', 'group_id', 'list_id', 'value']


@dataclass
class Item:
    """One measurement of an item in a list."""
    name: str
    list_name: str
    value: float
    percentile: Optional[float] = None


@dataclass
class RankedList:
    """Values of all items measured in one list."""
    name: str
    values: List[float] = field(default_factory=list)
    _sorted: Optional[np.ndarray] = field(default=None, repr=False, compare=False)

    @property
    def frozen(self) -> bool:
        return self._sorted is not None

    @property
    def n_items(self) -> int:
        return len(self.values)

    def add_value(self, value: float) -> None:
        if self.frozen:
            raise InvalidInputError(
                f"list '{self.name}' is frozen; no values can be added after ranking starts"
            )
        self.values.append(float(value))

    def freeze(self) -> np.ndarray:
        """Sort the values once and make the list read-only."""
        if self._sorted is None:
            if not self.values:
                raise InvalidInputError(f"list '{self.name}' has no values")
            self._sorted = np.sort(np.asarray(self.values, dtype=float))
            self._sorted.flags.writeable = False
        return self._sorted

    @property
    def sorted_values(self) -> np.ndarray:
        if self._sorted is None:
            raise InvalidInputError(f"list '{self.name}' has not been frozen yet")
        return self._sorted


@dataclass
class Group:
    """Items sharing an identity across lists, plus their aggregate scores."""
    name: str
    items: List[Item] = field(default_factory=list)
    lo_value: Optional[float] = None
    fdr: Optional[float] = None

    @property
    def n_items(self) -> int:
        return len(self.items)

    @property
    def percentiles(self) -> np.ndarray:
        if any(item.percentile is None for item in self.items):
            raise InvalidInputError(f"percentiles of group '{self.name}' are not computed yet")
        return np.array([item.percentile for item in self.items], dtype=float)


class RRADataset:
    """
    Growable containers of groups and lists keyed by identity.

    Parameters
    ----------
    max_groups : int, default=100000
        Ceiling on distinct group identities
    max_lists : int, default=1000
        Ceiling on distinct list identities

    Notes
    -----
    ``groups`` keeps first-seen order until FDR computation, which
    reorders it in place by ascending lo-value.
    """

    def __init__(self, max_groups: int = MAX_GROUP_NUM, max_lists: int = MAX_LIST_NUM):
        self.max_groups = max_groups
        self.max_lists = max_lists
        self.groups: Dict[str, Group] = {}
        self.lists: Dict[str, RankedList] = {}
        self._keys: Set[Tuple[str, str]] = set()

    def add_record(self, item_name: str, group_name: str, list_name: str, value: float) -> Item:
        """Stream one measurement into its group and list."""
        item_name, group_name, list_name = str(item_name), str(group_name), str(list_name)

        try:
            value = float(value)
        except (TypeError, ValueError):
            raise InvalidInputError(f"value of item '{item_name}' is not numeric: {value!r}")
        if not np.isfinite(value):
            raise InvalidInputError(f"value of item '{item_name}' is not finite: {value!r}")

        key = (item_name, list_name)
        if key in self._keys:
            raise InvalidInputError(
                f"item '{item_name}' appears more than once in list '{list_name}'"
            )

        if group_name not in self.groups and len(self.groups) >= self.max_groups:
            raise ResourceExhaustionError('groups', self.max_groups)
        if list_name not in self.lists and len(self.lists) >= self.max_lists:
            raise ResourceExhaustionError('lists', self.max_lists)

        ranked_list = self.lists.get(list_name)
        if ranked_list is None:
            ranked_list = self.lists[list_name] = RankedList(list_name)
        ranked_list.add_value(value)

        group = self.groups.get(group_name)
        if group is None:
            group = self.groups[group_name] = Group(group_name)
        item = Item(item_name, list_name, value)
        group.items.append(item)
        self._keys.add(key)
        return item

    @classmethod
    def from_records(
        cls,
        records: Iterable[Tuple[str, str, str, float]],
        max_groups: int = MAX_GROUP_NUM,
        max_lists: int = MAX_LIST_NUM
    ) -> 'RRADataset':
        dataset = cls(max_groups=max_groups, max_lists=max_lists)
        for record in records:
            if len(record) != 4:
                raise InvalidInputError(
                    f"record must have 4 fields (item, group, list, value), got {len(record)}"
                )
            dataset.add_record(*record)
        return dataset

    @classmethod
    def from_frame(
        cls,
        df: pd.DataFrame,
        max_groups: int = MAX_GROUP_NUM,
        max_lists: int = MAX_LIST_NUM
    ) -> 'RRADataset':
        """Build from a 4-column frame ordered as item, group, list, value."""
        if df.shape[1] != 4:
            raise InvalidInputError(
                f"Input format: <item id> <group id> <list id> <value>, got {df.shape[1]} columns"
            )
        return cls.from_records(df.itertuples(index=False, name=None),
                                max_groups=max_groups, max_lists=max_lists)

    def to_frame(self) -> pd.DataFrame:
        rows = [
            (item.name, group.name, item.list_name, item.value, item.percentile)
            for group in self.groups.values()
            for item in group.items
        ]
        return pd.DataFrame(rows, columns=RECORD_COLUMNS + ['percentile'])

    def group_sizes(self) -> np.ndarray:
        return np.array([g.n_items for g in self.groups.values()], dtype=int)

    def sort_groups_by_lo_value(self) -> None:
        """Reorder ``groups`` in place by ascending lo-value."""
        if any(g.lo_value is None for g in self.groups.values()):
            raise InvalidInputError("lo-values must be computed before sorting groups")
        ordered = sorted(self.groups.items(), key=lambda kv: kv[1].lo_value)
        self.groups.clear()
        self.groups.update(ordered)

    @property
    def n_groups(self) -> int:
        return len(self.groups)

    @property
    def n_lists(self) -> int:
        return len(self.lists)

    @property
    def n_items(self) -> int:
        return len(self._keys)

    def __repr__(self) -> str:
        return (f"RRADataset(n_items={self.n_items}, n_groups={self.n_groups}, "
                f"n_lists={self.n_lists})")
