"""CLI command modules."""

from .check import check
from .hook import hook
from .importer import import_notes
from .sweep import sweep

__all__ = ["check", "hook", "import_notes", "sweep"]
