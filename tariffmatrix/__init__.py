from . import (
    canon,
    exceptions,
    types,
    schema,
    config,
    intervals,
    codec,
    matrix,
    grouping,
    validate,
    catalog,
    pricing,
)

__all__ = [
    "canon",
    "exceptions",
    "types",
    "schema",
    "config",
    "intervals",
    "codec",
    "matrix",
    "grouping",
    "validate",
    "catalog",
    "pricing",
]
