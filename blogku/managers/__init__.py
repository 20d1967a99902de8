"""
Application managers.

Import directly from the specific modules to avoid circular dependencies.
"""
