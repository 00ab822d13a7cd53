"""People demo: a SQLite-backed consumer of the easyrest adapter."""
