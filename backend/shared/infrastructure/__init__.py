"""
Infrastructure module: database sessions and request correlation.
"""
