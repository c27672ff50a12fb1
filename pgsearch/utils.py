"""
Utility functions for search functionality
"""

import re

_PATTERN_META_CHARACTERS = re.compile(r"[%_\\]")


def sanitize(term: str) -> str:
    """
    Strips LIKE/SIMILAR TO meta-characters (`%`, `_`, `\\`) from user input.

    Pattern match searches don't escape the term, run user input through this first.
    """
    return _PATTERN_META_CHARACTERS.sub("", term)


def format_sql_query(sql: str) -> str:
    """Format SQL query for better readability"""
    formatted = " ".join(sql.split())

    # Add line breaks before major clauses
    clauses = ["FROM", "WHERE", "JOIN", "ORDER BY", "LIMIT", "OFFSET"]
    for clause in clauses:
        formatted = formatted.replace(f" {clause} ", f"\n{clause} ")

    return formatted
