"""Infrastructure layer — database engine, schema, repositories, board.

This layer depends on stdlib and SQLAlchemy only.
It must never import from services, commands, or output.
"""
