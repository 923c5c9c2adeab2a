"""Building blocks for reading Common Trace Format traces: bit reader, ranges, interval tree, hash map, fields, JSON conversion and option parsing."""

__version__ = "0.0.1"

__all__ = [
    "bitreader",
    "ctfjson",
    "fields",
    "hashmap",
    "ivaltree",
    "options",
    "rng",
    "tstamp",
    "types",
]