"""Validation of startup parameters before the editor is constructed."""

import os


def validate_page_size(page_size) -> int:
    """Check that the number of lines per page is a positive integer.

    Raises:
        ValueError: if page_size is not an integer or is less than 1
    """
    if isinstance(page_size, bool) or not isinstance(page_size, int):
        raise ValueError(f"Page size must be an integer, got {page_size!r}")
    if page_size < 1:
        raise ValueError(f"Page size must be at least 1, got {page_size}")
    return page_size


def validate_file(filename: str) -> str:
    """Check that a document exists and can be read and written.

    Raises:
        FileNotFoundError: if the file does not exist
        IsADirectoryError: if the path names a directory
        PermissionError: if the file cannot be read or written
    """
    if not os.path.exists(filename):
        raise FileNotFoundError(f"No such file: {filename}")
    if os.path.isdir(filename):
        raise IsADirectoryError(f"Is a directory: {filename}")
    if not os.access(filename, os.R_OK | os.W_OK):
        raise PermissionError(f"Permission denied: {filename}")
    return filename
