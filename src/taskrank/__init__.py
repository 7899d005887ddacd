"""taskrank — rank-ordered task boards with drag-and-drop moves."""

__version__ = "0.1.0"
