"""Configuration, logging setup and database access."""
