"""
Shared utility functions.
"""

from boletim.utils.config_helpers import (
    merge_configs,
    load_portal_config,
    DEFAULT_PORTAL_CONFIG,
)
from boletim.utils.result import Ok, Err, Result, UnwrapError
from boletim.utils.text_processing import (
    slice_from_last_occurrence,
    normalize_header_label,
    parse_decimal,
)

__all__ = [
    # Result type
    "Ok",
    "Err",
    "Result",
    "UnwrapError",
    # Text processing
    "slice_from_last_occurrence",
    "normalize_header_label",
    "parse_decimal",
    # Configuration utilities
    "merge_configs",
    "load_portal_config",
    "DEFAULT_PORTAL_CONFIG",
]
