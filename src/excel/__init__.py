from .reader import SourceReadError, read_first_sheet

__all__ = ["SourceReadError", "read_first_sheet"]
