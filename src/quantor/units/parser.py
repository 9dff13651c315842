from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING, Tuple, Union

from quantor.core.unit import UnitFactor, merge_factors

if TYPE_CHECKING:
    from quantor.units.registry import UnitsRegistry

# --- Plan node types ------------------------------------------------
# ("name", <str>, None)
# ("one", None, None)
# ("pow", <plan>, <int>)
# ("mul", <plan>, <plan>)
# ("div", <plan>, <plan>)
Plan = Tuple[str, Union[str, int, "Plan", None], Union[int, "Plan", None]]

_NAME_EXTRA = frozenset("_°")
_MUL_OPS = ("*", "·", "⋅")


def _is_name_start(ch: str) -> bool:
    return ch.isalpha() or ch in _NAME_EXTRA


# ---------------- Parser that builds a PLAN (no registry lookups!) ----------------
class _UnitExprParser:
    """
    Grammar (no numbers except the literal 1 and signed integer exponents):
      expr   := term (('*' | '·' | '/' | <whitespace>) term)*
      term   := factor [('^' | '**') signed_int]
      factor := NAME | '1' | '(' expr ')'
      NAME   := (letter | '_' | '°') (letter | digit | '_' | '°')*
      signed_int := ['+'|'-']? [0-9]+ | '(' signed_int ')'

    Juxtaposition multiplies, so "kg m s^-2" == "kg*m*s**-2". Multiplication
    and division are left-associative: "m/s s" == "(m/s)*s".
    """
    def __init__(self, text: str):
        self.s = text
        self.n = len(text)
        self.i = 0

    def parse(self) -> Plan:
        self._skip_ws()
        if self.i == self.n:
            raise ValueError("Empty unit expression")
        plan = self._parse_expr()
        self._skip_ws()
        if self.i != self.n:
            raise ValueError(f"Unexpected trailing input at {self.i}: {self.s[self.i:self.i+10]!r}")
        return plan

    # expr := term (op term)*
    def _parse_expr(self) -> Plan:
        left = self._parse_term()
        while True:
            self._skip_ws()
            if self.i >= self.n:
                break
            ch = self.s[self.i]
            if ch in _MUL_OPS and not self._peek('**'):
                self.i += 1
                left = ("mul", left, self._parse_term())
            elif ch == '/':
                self.i += 1
                left = ("div", left, self._parse_term())
            elif _is_name_start(ch) or ch == '(' or ch == '1':
                # juxtaposition
                left = ("mul", left, self._parse_term())
            else:
                break
        return left

    # term := factor [('^' | '**') signed_int]
    def _parse_term(self) -> Plan:
        base = self._parse_factor()
        self._skip_ws()
        if self._peek('**'):
            self._eat('**')
            base = ("pow", base, self._parse_signed_int())
        elif self._peek('^'):
            self._eat('^')
            base = ("pow", base, self._parse_signed_int())
        return base

    # factor := NAME | '1' | '(' expr ')'
    def _parse_factor(self) -> Plan:
        self._skip_ws()
        if self._peek('('):
            self._eat('(')
            val = self._parse_expr()
            self._skip_ws()
            self._eat(')')
            return val
        if self._peek('1') and not self._next_is_digit(1):
            self.i += 1
            return ("one", None, None)
        name = self._parse_name()
        if not name:
            ch = self.s[self.i:self.i+1]
            raise ValueError(f"Expected unit name or '(' at {self.i}, got {ch!r}")
        return ("name", name, None)

    # ---- token helpers ----
    def _parse_name(self) -> str | None:
        self._skip_ws()
        i0 = self.i
        if i0 < self.n and _is_name_start(self.s[i0]):
            self.i += 1
            while self.i < self.n and (self.s[self.i].isalnum() or self.s[self.i] in _NAME_EXTRA):
                self.i += 1
            return self.s[i0:self.i]
        return None

    def _parse_signed_int(self) -> int:
        self._skip_ws()
        if self._peek('('):
            self._eat('(')
            value = self._parse_signed_int()
            self._eat(')')
            return value
        i0 = self.i
        if self.i < self.n and self.s[self.i] in '+-':
            self.i += 1
        i1 = self.i
        while self.i < self.n and self.s[self.i].isdigit():
            self.i += 1
        if i1 == self.i:
            raise ValueError(f"Expected integer exponent at {self.i}")
        return int(self.s[i0:self.i])

    def _next_is_digit(self, offset: int) -> bool:
        j = self.i + offset
        return j < self.n and self.s[j].isdigit()

    def _skip_ws(self) -> None:
        s, n, i = self.s, self.n, self.i
        while i < n and s[i].isspace():
            i += 1
        self.i = i

    def _peek(self, tok: str) -> bool:
        self._skip_ws()
        return self.s.startswith(tok, self.i)

    def _eat(self, tok: str) -> None:
        if not self._peek(tok):
            got = self.s[self.i:self.i+len(tok)]
            raise ValueError(f"Expected {tok!r} at {self.i}, got {got!r}")
        self.i += len(tok)

# ---------------- Evaluation of a plan against a given registry ----------------
def _eval_plan(plan: Plan, reg: "UnitsRegistry") -> Tuple[UnitFactor, ...]:
    kind = plan[0]
    if kind == "name":
        return (reg.factor(plan[1]),)  # late binding to the provided registry
    elif kind == "one":
        return ()
    elif kind == "pow":
        base = _eval_plan(plan[1], reg)
        exp = plan[2]
        return merge_factors(f.with_exponent(f.exponent * exp) for f in base)
    elif kind == "mul":
        return merge_factors(_eval_plan(plan[1], reg), _eval_plan(plan[2], reg))
    elif kind == "div":
        right = _eval_plan(plan[2], reg)
        return merge_factors(_eval_plan(plan[1], reg), (f.with_exponent(-f.exponent) for f in right))
    else:
        raise RuntimeError(f"Invalid plan node: {plan!r}")

# ---------------- Public API with caching-safe compilation ----------------
# Cache the *compiled plan* only. Safe across registries because there's no bound objects inside.
@lru_cache(maxsize=4096)
def _compile_unit_expr(expr: str) -> Plan:
    # cheap prefilter to reject disallowed characters early.
    disallowed = set('~!@#$%&|=,:;?<>`\\[]{}')
    if any(c in disallowed for c in expr):
        raise ValueError("Only *, ·, /, ^, **, parentheses, unit names, and signed integer exponents are allowed.")
    return _UnitExprParser(expr).parse()

def extract_unit_expr(expr: str, reg: "UnitsRegistry") -> Tuple[UnitFactor, ...]:
    """
    Parse unit expressions like ``'kg m s^-2'`` or ``'kg*m/(nF**2 * s**2)'``
    into resolved unit factors.

    Caching-safety:
      * We cache a compiled syntax plan keyed by `expr` only (no registry state).
      * Evaluation binds names to units from the *provided* `reg` at call time.

    Returns:
      The merged factors, in order of first appearance.
    """
    plan = _compile_unit_expr(expr)
    return _eval_plan(plan, reg)
