from knows.utils.batch import BatchOutcome, ConcurrencyLimiter, ItemStatus, run_batch
from knows.utils.cache import DetailCache
from knows.utils.validators import (
    ValidationError,
    get_optional_bool,
    get_optional_int,
    get_optional_string,
    get_optional_string_array,
    get_required_array,
    get_required_string,
    indexed,
    iter_required_objects,
)

__all__ = [
    "BatchOutcome",
    "ConcurrencyLimiter",
    "ItemStatus",
    "run_batch",
    "DetailCache",
    "ValidationError",
    "get_optional_bool",
    "get_optional_int",
    "get_optional_string",
    "get_optional_string_array",
    "get_required_array",
    "get_required_string",
    "indexed",
    "iter_required_objects",
]
