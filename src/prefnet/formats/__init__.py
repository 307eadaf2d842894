"""Serialization of nets (XML) and example sets (CSV / DataFrame)."""

from .examples_csv import (
    EXAMPLE_COLUMNS,
    examples_from_frame,
    examples_to_frame,
    read_examples_csv,
    write_examples_csv,
)
from .xml_spec import (
    dumps_specification,
    load_specification,
    loads_specification,
    write_specification,
)

__all__ = [
    "EXAMPLE_COLUMNS",
    "examples_from_frame",
    "examples_to_frame",
    "read_examples_csv",
    "write_examples_csv",
    "dumps_specification",
    "load_specification",
    "loads_specification",
    "write_specification",
]
