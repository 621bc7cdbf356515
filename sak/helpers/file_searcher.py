"""
File search utilities for sak.

This module provides functions for resolving configuration file paths
relative to the home folder and the current directory.
"""

from pathlib import Path
from typing import List, Optional


def generate_search_path_list(default_file: str, command_line_file: Optional[str]) -> List[str]:
    """
    Generate a list of file paths to search for configuration files.

    The search order is:
    1. Home directory (~/default_file)
    2. Current directory (default_file)
    3. Explicitly requested file (command_line_file) if provided

    Later entries take precedence when the files are loaded in order.

    Args:
        default_file: The default filename to search for
        command_line_file: A file specified by the user (optional)

    Returns:
        List of resolved file paths in search order (first to last)
    """
    files = []
    files.append(Path.home() / default_file)  # homedir
    files.append(default_file)
    if command_line_file:
        files.append(command_line_file)

    resolved_files = []
    for fn in files:
        try:
            resolved_files.append(Path(fn).expanduser().resolve())
        except OSError:
            pass

    # keep the last occurrence of each path so precedence is preserved
    files = resolved_files
    files.reverse()
    uniq = []
    for fn in files:
        if fn not in uniq:
            uniq.append(fn)
    uniq.reverse()

    return list(map(str, uniq))
