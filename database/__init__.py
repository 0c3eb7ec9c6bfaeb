from .connection import metadata, build_database, create_tables

__all__ = ["metadata", "build_database", "create_tables"]
