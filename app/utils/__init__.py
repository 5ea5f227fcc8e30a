"""
Utilities Package

This package contains helper functions used across the application.

- responses.py: Builders for the success/error response envelope
"""
