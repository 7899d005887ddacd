"""Domain layer — rank keys and move planning.

Pure functions and value types. No I/O, no SQLAlchemy imports.
"""
