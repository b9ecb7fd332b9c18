# idfc_helper/controllers/__init__.py
"""
Statement loading, row heuristics, parsing, validation and reporting.
"""
