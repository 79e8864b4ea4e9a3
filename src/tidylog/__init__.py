"""tidylog - suppression-aware logging and exception convention rewriter."""

__version__ = "0.4.0"
