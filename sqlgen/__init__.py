"""Generate Rust model structs and enums from a PostgreSQL database schema."""

__version__ = "0.2.3"