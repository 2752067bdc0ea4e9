"""
Error types raised by the SOM engine.
"""

__all__ = [
    "SomError",
    "DimensionMismatch",
    "InvalidArgument",
    "DatasetParseError",
    "UnknownLabelError",
    "MappingNotBuiltError",
]


class SomError(Exception):
    "Base class for all SOM engine errors."


class DimensionMismatch(SomError, ValueError):
    "Raised when feature vector and map node dimensionalities are invalid or do not agree."


class InvalidArgument(SomError, ValueError):
    "Raised for out-of-domain arguments such as non-positive map sizes or negative learning rates."


class DatasetParseError(SomError, ValueError):
    "Raised when a delimited data file contains a record that cannot be parsed."


class UnknownLabelError(SomError, KeyError):
    "Raised when a label outside of the dataset label set is found during aggregation."


class MappingNotBuiltError(SomError, RuntimeError):
    "Raised when mapping-based outputs are requested before the mapping has been built."
