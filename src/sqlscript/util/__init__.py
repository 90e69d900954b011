from .file_filters import find_scripts, having_extension

__all__ = ["having_extension", "find_scripts"]
