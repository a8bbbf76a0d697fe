from .desktop import AppRecord, application_dirs, parse_desktop_file, parse_desktop_text
from .index import AppIndex
from .provider import AppsProvider, GtkLauncher

__all__ = [
    "AppRecord",
    "AppIndex",
    "AppsProvider",
    "GtkLauncher",
    "application_dirs",
    "parse_desktop_file",
    "parse_desktop_text",
]
