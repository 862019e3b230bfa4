"""
Application package.

The API is organised into ``core`` (configuration, logging, database),
``schemas`` (request and response models), ``services`` (business
logic over the database) and ``api`` (HTTP routes).
"""
