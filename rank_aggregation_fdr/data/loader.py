"""
Reading measurement tables and writing group results.

Input format (whitespace-delimited, one header line):
    <item id> <group id> <list id> <value>

Output format (tab-delimited):
    group_id  #_items_in_group  lo_value  FDR
"""

import numpy as np
import pandas as pd
from pathlib import Path
from typing import Union

from .model import MAX_GROUP_NUM, MAX_LIST_NUM, RRADataset
from ..exceptions import InvalidInputError

OUTPUT_COLUMNS = ['group_id', '#_items_in_group', 'lo_value', 'FDR']
RESULT_COLUMNS = ['group_id', 'n_items', 'lo_value', 'fdr']

INPUT_FORMAT = "Input file format: <item id> <group id> <list id> <value>"


def read_rra_table(
    path: Union[str, Path],
    max_groups: int = MAX_GROUP_NUM,
    max_lists: int = MAX_LIST_NUM,
    chunksize: int = 100000
) -> RRADataset:
    """
    Stream a measurement table into an ``RRADataset`` in one pass.

    Parameters
    ----------
    path : str or Path
        Whitespace-delimited file with a 4-field header line
    max_groups, max_lists : int
        Ceilings on distinct group / list identities
    chunksize : int, default=100000
        Rows parsed per chunk

    Returns
    -------
    dataset : RRADataset
        Groups and lists in first-seen order
    """
    dataset = RRADataset(max_groups=max_groups, max_lists=max_lists)

    with open(path, 'r') as fh:
        header = fh.readline().split()
        if len(header) != 4:
            raise InvalidInputError(f"{INPUT_FORMAT}; header has {len(header)} fields")

        try:
            reader = pd.read_csv(
                fh,
                sep=r'\s+',
                header=None,
                dtype=str,
                na_filter=False,
                chunksize=chunksize,
            )
            n_read = 0
            for chunk in reader:
                if chunk.shape[1] != 4:
                    raise InvalidInputError(
                        f"{INPUT_FORMAT}; record {n_read + 1} has {chunk.shape[1]} fields"
                    )
                missing = (chunk.isna() | (chunk == '')).any(axis=1).to_numpy()
                if missing.any():
                    bad = n_read + int(np.argmax(missing)) + 1
                    raise InvalidInputError(f"{INPUT_FORMAT}; record {bad} has fewer than 4 fields")

                for record in chunk.itertuples(index=False, name=None):
                    n_read += 1
                    try:
                        dataset.add_record(*record)
                    except InvalidInputError as e:
                        raise InvalidInputError(f"record {n_read}: {e}") from e
        except pd.errors.EmptyDataError:
            pass
        except pd.errors.ParserError as e:
            raise InvalidInputError(f"{INPUT_FORMAT}; {e}") from e

    if dataset.n_groups == 0:
        raise InvalidInputError(f"no records found in {path}")

    return dataset


def results_frame(dataset: RRADataset) -> pd.DataFrame:
    """Group results in the dataset's current group order."""
    rows = [
        (group.name, group.n_items, group.lo_value, group.fdr)
        for group in dataset.groups.values()
    ]
    return pd.DataFrame(rows, columns=RESULT_COLUMNS)


def format_group_table(results: Union[RRADataset, pd.DataFrame]) -> pd.DataFrame:
    """Render results as the string columns of the output file."""
    if isinstance(results, RRADataset):
        results = results_frame(results)

    missing = [c for c in RESULT_COLUMNS if c not in results.columns]
    if missing:
        raise InvalidInputError(f"results are missing columns: {missing}")
    if results['lo_value'].isna().any() or results['fdr'].isna().any():
        raise InvalidInputError("lo-values and FDR must be computed before writing results")

    return pd.DataFrame({
        'group_id': results['group_id'].astype(str).to_numpy(),
        '#_items_in_group': results['n_items'].astype(int).astype(str).to_numpy(),
        'lo_value': [f"{v:10.4e}" for v in results['lo_value']],
        'FDR': [f"{v:f}" for v in results['fdr']],
    }, columns=OUTPUT_COLUMNS)


def write_group_table(results: Union[RRADataset, pd.DataFrame], path: Union[str, Path]) -> Path:
    """
    Write one row per group: identity, item count, lo-value, FDR.

    Rows follow the order of ``results`` (ascending lo-value once FDR has
    been computed).
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    table = format_group_table(results)
    table.to_csv(path, sep='\t', index=False)
    return path


def read_group_table(path: Union[str, Path]) -> pd.DataFrame:
    """Read a results file back into ``RESULT_COLUMNS``."""
    df = pd.read_csv(path, sep='\t', dtype={'group_id': str}, keep_default_na=False)
    df.columns = RESULT_COLUMNS
    return df

