"""Public core API for parameter binding, row materialization, and result sets."""

from .errors import (
    ConfigurationError,
    CursorStateError,
    DynamicORMError,
    ExecutionError,
    MissingDriverError,
    UnsupportedOperation,
)
from .parameter_cache import ParameterCache, default_parameter_cache, structural_key
from .parameters import NamedParameter, ParameterBuilder, ParameterShape, bind_parameters
from .result_set import ResultSet
from .rows import RowMaterializer, column_names
from .types import Record

__all__ = [
    "ConfigurationError",
    "CursorStateError",
    "DynamicORMError",
    "ExecutionError",
    "MissingDriverError",
    "UnsupportedOperation",
    "ParameterCache",
    "default_parameter_cache",
    "structural_key",
    "NamedParameter",
    "ParameterBuilder",
    "ParameterShape",
    "bind_parameters",
    "ResultSet",
    "RowMaterializer",
    "column_names",
    "Record",
]
