"""Data model, table I/O and synthetic screen generation."""

from .model import (
    Item,
    RankedList,
    Group,
    RRADataset,
    RECORD_COLUMNS
)

from .loader import (
    read_rra_table,
    write_group_table,
    read_group_table,
    format_group_table,
    results_frame
)

from .synthetic import (
    generate_group_labels,
    generate_screen_data
)

__all__ = [
    'Item',
    'RankedList',
    'Group',
    'RRADataset',
    'RECORD_COLUMNS',
    'read_rra_table',
    'write_group_table',
    'read_group_table',
    'format_group_table',
    'results_frame',
    'generate_group_labels',
    'generate_screen_data'
]
