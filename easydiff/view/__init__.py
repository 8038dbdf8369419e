"""Presentation layer for easydiff.

This package provides:
- host: EditorHost protocol, Decoration, DecorationKind
- styles: highlight groups and the FileStatus style mapping
- render: DiffRenderer, hunk_decorations, whole_file_decorations
- explorer: ExplorerModel, ExplorerItem, build_explorer
- session: DiffSession, PanelState
- terminal: TerminalHost
"""

from easydiff.view.host import Decoration, DecorationKind, EditorHost
from easydiff.view.render import DiffRenderer, hunk_decorations, whole_file_decorations
from easydiff.view.explorer import ExplorerItem, ExplorerModel, build_explorer
from easydiff.view.session import DiffSession, PanelState
from easydiff.view.terminal import TerminalHost


__all__ = [
    "EditorHost",
    "Decoration",
    "DecorationKind",
    "DiffRenderer",
    "hunk_decorations",
    "whole_file_decorations",
    "ExplorerItem",
    "ExplorerModel",
    "build_explorer",
    "DiffSession",
    "PanelState",
    "TerminalHost",
]
