"""
Parameterized SQL fragments

A Fragment is a template string with `?` placeholders plus the ordered list of
arguments filling them. Arguments are always rendered as bound parameters or
column expressions; only trusted, option derived tokens (function names,
operators, language names) are part of the template itself.
"""

from typing import Any, Iterable, Optional, Tuple

from sqlalchemy import bindparam
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql import operators
from sqlalchemy.sql.elements import ColumnElement, Grouping
from sqlalchemy.sql.functions import FunctionElement
from sqlalchemy.types import Boolean, NullType, String, TypeEngine

from pgsearch.validators import ShapeMismatch

PLACEHOLDER = "?"

# contexts where the fragment is a complete expression: argument lists, sort
# keys, labels and AND/OR operands
_UNGROUPED = frozenset(
    [operators.comma_op, operators.asc_op, operators.desc_op, operators.as_, operators.and_, operators.or_]
)


class Fragment(FunctionElement):
    """SQL template with positional `?` placeholders and its arguments"""

    # the template is not part of the cache key
    inherit_cache = False

    def __init__(self, template: str, *args: Any, type_: Optional[TypeEngine] = None):
        expected = template.count(PLACEHOLDER)
        if expected != len(args):
            raise ShapeMismatch(f"Fragment {template!r} expects {expected} arguments, got {len(args)}")
        self.template = template
        self.type = type_ if type_ is not None else NullType()
        super().__init__(*args)

    @property
    def arguments(self) -> Tuple[ColumnElement, ...]:
        return tuple(self.clauses)

    @classmethod
    def join(cls, fragments: Iterable["Fragment"], separator: str, type_: Optional[TypeEngine] = None) -> "Fragment":
        """Concatenates templates with `separator`, arguments keep their order"""
        fragments = list(fragments)
        template = separator.join(fragment.template for fragment in fragments)
        args = [arg for fragment in fragments for arg in fragment.arguments]
        return cls(template, *args, type_=type_)

    def self_group(self, against=None):
        # only operators binding tighter than the template need parentheses
        if against is None or against in _UNGROUPED:
            return self
        return Grouping(self)


@compiles(Fragment)
def _compile_fragment(element: Fragment, compiler, **kw) -> str:
    parts = element.template.split(PLACEHOLDER)
    sql = [compiler.post_process_text(parts[0])]
    for arg, part in zip(element.arguments, parts[1:]):
        sql.append(compiler.process(arg, **kw))
        sql.append(compiler.post_process_text(part))
    return "".join(sql)


def bind_term(value: Any, type_: Optional[TypeEngine] = None):
    """Anonymous, unique bound parameter, safe to use several times in one statement"""
    return bindparam(None, value, type_=type_, unique=True)


def operator(left: Any, op: str, right: Any, type_: Optional[TypeEngine] = None) -> Fragment:
    """Any postgres binary operator, e.g. `operator(Post.title, "%", "foo")`"""
    return Fragment(f"? {op} ?", left, right, type_=type_)


def call(function: str, *args: Any, type_: Optional[TypeEngine] = None) -> Fragment:
    placeholders = ", ".join(PLACEHOLDER for _ in args)
    return Fragment(f"{function}({placeholders})", *args, type_=type_)


def concat_ws(*args: Any, separator: str = " ") -> Fragment:
    """
    `concat_ws` skips NULL arguments, so a NULL column doesn't null the whole string.
    The separator is rendered as a literal so the expression can match an index.
    """
    separator = separator.replace("'", "''")
    placeholders = ", ".join(PLACEHOLDER for _ in args)
    return Fragment(f"concat_ws('{separator}', {placeholders})", *args, type_=String())


def substring(string: Any, pattern: Any, escape_character: Any) -> Fragment:
    """
    SQL regular expression substring:

        substring('foobar' similar '%#"o_b#"%' escape '#')  -> oob
    """
    return Fragment("substring(? similar ? escape ?)", string, pattern, escape_character, type_=String())


def predicate(template: str, *args: Any) -> Fragment:
    return Fragment(template, *args, type_=Boolean())
