"""Values, operators, hashing, formatting and standard library of a small scripting VM."""

__version__ = "0.1.0"

__all__ = [
    "hashing",
    "hashtable",
    "formatting",
    "values",
    "arithmetic",
    "state",
    "operations",
    "lib_msg",
    "lib_math",
    "lib_io",
    "lib_string",
    "lib_std",
]