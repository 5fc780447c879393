"""
Dataset loading and partitioning for the forward pipeline.

This module provides record parsing, file loading, shuffling and the
train/test split.
"""

from .records import Record, DatasetSplit, truncate_text, labels_tensor
from .loader import parse_label, parse_record, iter_records, load_dataset
from .partition import shuffle_records, split_dataset, load_and_split, train_size_for

__all__ = [
    'Record', 'DatasetSplit', 'truncate_text', 'labels_tensor',
    'parse_label', 'parse_record', 'iter_records', 'load_dataset',
    'shuffle_records', 'split_dataset', 'load_and_split', 'train_size_for'
]
