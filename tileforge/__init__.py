"""Core of a node-based procedural tile texture editor: graph, project files, history, layout and editor state."""

__version__ = "0.1.0"

__all__ = ["textutil", "graph", "history", "project", "layout", "motion", "editor"]