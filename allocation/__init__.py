"""
Allocation tables - portfolio positions grouped by allocation target,
rendered as sortable, collapsible tables.
"""

__version__ = "0.1.0"
