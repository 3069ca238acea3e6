"""Docspace — workspace and document collaboration backend.

Users own workspaces, workspaces hold documents, and every read or
write is authorized against the ownership chain user → workspace →
document.
"""

__version__ = "0.1.0"
