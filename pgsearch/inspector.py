"""
Helpers to debug search queries: print the SQL with its parameters substituted,
or run EXPLAIN ANALYZE on it. Useful for checking which index expression a
search produces.
"""

import logging
import re
from typing import Any

from sqlalchemy import bindparam, text
from sqlalchemy.dialects.postgresql import psycopg2

from pgsearch.logging_setup import logger
from pgsearch.utils import format_sql_query

# psycopg2 never renders bind casts ("'wan%'::VARCHAR"), named placeholders
# (":param_1") never collide with postgres casts ("::text")
_DIALECT = psycopg2.dialect(paramstyle="named")
_BIND_RE = re.compile(r"(?<![:\w]):(\w+)")


def _compile(query):
    return query.compile(dialect=_DIALECT, compile_kwargs={"render_postcompile": True})


def to_postgres_string(value: Any) -> str:
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (list, tuple)):
        return f"ARRAY[{','.join(to_postgres_string(item) for item in value)}]"
    if hasattr(value, "to_text"):
        # pgvector values
        value = value.to_text()
    escaped = str(value).replace("'", "''")
    return f"'{escaped}'"


def substituted_sql(query) -> str:
    """
    Returns the query's SQL with the parameters substituted, so it can be run
    directly in psql, e.g.

        SELECT posts.title FROM posts WHERE posts.title ILIKE 'wan%'
    """
    compiled = _compile(query)
    params = compiled.params

    def substitute(match):
        name = match.group(1)
        if name not in params:
            return match.group(0)
        return to_postgres_string(params[name])

    return _BIND_RE.sub(substitute, str(compiled))


def tap_sql(query, level: int = logging.INFO):
    """Logs the substituted SQL and returns the query unchanged"""
    logger.log(level, format_sql_query(substituted_sql(query)))
    return query


def tap_explain_analyze(query, session, level: int = logging.INFO):
    """
    Logs the EXPLAIN ANALYZE plan of the query and returns the query unchanged.

    **Runs the query!**
    """
    compiled = _compile(query)
    statement = text(f"EXPLAIN ANALYZE {compiled}").bindparams(
        *[bindparam(name, value, type_=compiled.binds[name].type) for name, value in compiled.params.items()]
    )
    plan = session.execute(statement).scalars().all()
    logger.log(level, "\n".join(plan))
    return query
