import os
import sys


def get_base_path() -> str:
    """
    Return the application base directory.

    Returns:
        str: the executable's directory when frozen, otherwise the project root
    """
    if getattr(sys, "frozen", False):
        return os.path.dirname(sys.executable)
    # countdown_tasks/utils.py -> project root is two levels up
    return os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
