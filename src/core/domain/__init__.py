"""
Domain value objects.

Contains the closed ConverterKind classification and its canonical order.
"""

from src.core.domain.converter_kind import (
    ConverterKind,
    NormalFormOrderTable,
    as_converter_kind,
    get_normal_form_order,
    is_reordering_barrier,
    rank,
    sort_by_normal_form,
)

__all__ = [
    "ConverterKind",
    "NormalFormOrderTable",
    "as_converter_kind",
    "get_normal_form_order",
    "is_reordering_barrier",
    "rank",
    "sort_by_normal_form",
]
