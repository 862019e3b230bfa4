"""
Service layer.

Each service encapsulates the business logic for a domain so that API
handlers stay free of SQL.
"""
