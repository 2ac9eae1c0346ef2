import matplotlib

matplotlib.use("Agg")

import pandas as pd
import pytest

from rank_aggregation_fdr.data.model import RECORD_COLUMNS, RRADataset


# Two lists of four values. Group A holds the top item of both lists,
# group B the 4th of list L1 and the 3rd of list L2.
AB_RECORDS = [
    ("a1", "A", "L1", 1.0),
    ("c1", "C", "L1", 2.0),
    ("d1", "D", "L1", 3.0),
    ("b1", "B", "L1", 4.0),
    ("a2", "A", "L2", 1.0),
    ("c2", "C", "L2", 2.0),
    ("b2", "B", "L2", 3.0),
    ("d2", "D", "L2", 4.0),
]


@pytest.fixture
def ab_records():
    return list(AB_RECORDS)


@pytest.fixture
def ab_frame():
    return pd.DataFrame(AB_RECORDS, columns=RECORD_COLUMNS)


@pytest.fixture
def ab_dataset():
    return RRADataset.from_records(AB_RECORDS)


@pytest.fixture
def ab_input_file(tmp_path):
    path = tmp_path / "input.txt"
    lines = ["item\tgroup\tlist\tvalue"]
    lines += [f"{i}\t{g}\t{l}\t{v}" for i, g, l, v in AB_RECORDS]
    path.write_text("\n".join(lines) + "\n")
    return path
