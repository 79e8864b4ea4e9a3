"""Logging-call domain: classification, normalization, placeholder correction."""

from tidylog.calls.classifier import (
    Classification,
    LoggingCall,
    LogLevel,
    RecordPattern,
    as_logging_call,
    classify,
    is_exception,
    is_record_ref,
)
from tidylog.calls.normalizer import (
    CONCATENATION_MESSAGE,
    collapse_record_call,
    has_string_concatenation,
    level_policy_violation,
    move_exception_first,
    record_policy_message,
)

__all__ = [
    "CONCATENATION_MESSAGE",
    "Classification",
    "LogLevel",
    "LoggingCall",
    "RecordPattern",
    "as_logging_call",
    "classify",
    "collapse_record_call",
    "has_string_concatenation",
    "is_exception",
    "is_record_ref",
    "level_policy_violation",
    "move_exception_first",
    "record_policy_message",
]
