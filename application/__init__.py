"""
Application Layer for the FitHub API.

This package contains:
- ports/: Abstract repository interfaces (what the domain needs)
- use_cases/: Pod management and nutrition lookup workflows
- exceptions.py: Errors raised to API callers
"""
