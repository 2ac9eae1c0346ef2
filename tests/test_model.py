import numpy as np
import pandas as pd
import pytest

from rank_aggregation_fdr.data.model import RRADataset, RankedList
from rank_aggregation_fdr.exceptions import InvalidInputError, ResourceExhaustionError


def test_records_stream_into_groups_and_lists(ab_dataset):
    assert ab_dataset.n_items == 8
    assert list(ab_dataset.groups) == ["A", "C", "D", "B"]
    assert list(ab_dataset.lists) == ["L1", "L2"]
    assert ab_dataset.groups["A"].n_items == 2
    assert ab_dataset.lists["L1"].values == [1.0, 2.0, 3.0, 4.0]
    assert ab_dataset.group_sizes().tolist() == [2, 2, 2, 2]


def test_duplicate_item_in_list_is_rejected(ab_dataset):
    with pytest.raises(InvalidInputError):
        ab_dataset.add_record("a1", "A", "L1", 0.5)
    # Same item in a new list is fine
    ab_dataset.add_record("a1", "A", "L3", 0.5)
    assert ab_dataset.n_lists == 3


@pytest.mark.parametrize("value", ["abc", float("nan"), float("inf"), None])
def test_bad_values_are_rejected(value):
    dataset = RRADataset()
    with pytest.raises(InvalidInputError):
        dataset.add_record("x", "G", "L", value)


def test_numeric_strings_are_accepted():
    dataset = RRADataset()
    item = dataset.add_record("x", "G", "L", "-1.5e3")
    assert item.value == -1500.0


def test_group_ceiling():
    dataset = RRADataset(max_groups=2)
    dataset.add_record("i1", "G1", "L", 1.0)
    dataset.add_record("i2", "G2", "L", 2.0)
    dataset.add_record("i3", "G2", "L", 3.0)
    with pytest.raises(ResourceExhaustionError) as excinfo:
        dataset.add_record("i4", "G3", "L", 4.0)
    assert excinfo.value.kind == "groups"
    assert excinfo.value.ceiling == 2


def test_list_ceiling():
    dataset = RRADataset(max_lists=1)
    dataset.add_record("i1", "G", "L1", 1.0)
    with pytest.raises(ResourceExhaustionError) as excinfo:
        dataset.add_record("i1", "G", "L2", 1.0)
    assert excinfo.value.kind == "lists"


def test_frozen_list_is_read_only():
    ranked_list = RankedList("L", [3.0, 1.0, 2.0])
    sorted_values = ranked_list.freeze()
    assert sorted_values.tolist() == [1.0, 2.0, 3.0]
    assert ranked_list.freeze() is sorted_values
    with pytest.raises(InvalidInputError):
        ranked_list.add_value(4.0)
    with pytest.raises(ValueError):
        sorted_values[0] = 10.0


def test_unfrozen_list_has_no_sorted_values():
    with pytest.raises(InvalidInputError):
        RankedList("L", [1.0]).sorted_values


def test_from_frame_requires_four_columns(ab_frame):
    dataset = RRADataset.from_frame(ab_frame)
    assert dataset.n_groups == 4
    with pytest.raises(InvalidInputError):
        RRADataset.from_frame(ab_frame.iloc[:, :3])


def test_sort_groups_by_lo_value_in_place(ab_dataset):
    groups = ab_dataset.groups
    with pytest.raises(InvalidInputError):
        ab_dataset.sort_groups_by_lo_value()

    for lo, group in zip([0.4, 0.1, 0.3, 0.2], groups.values()):
        group.lo_value = lo
    ab_dataset.sort_groups_by_lo_value()

    assert ab_dataset.groups is groups
    assert list(groups) == ["C", "B", "D", "A"]


def test_to_frame(ab_dataset):
    df = ab_dataset.to_frame()
    assert isinstance(df, pd.DataFrame)
    assert list(df.columns) == ["item_id", "group_id", "list_id", "value", "percentile"]
    assert len(df) == 8
    assert np.all(df["percentile"].isna())
