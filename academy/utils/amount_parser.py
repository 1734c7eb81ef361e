import ast
import operator as op

_ALLOWED_OPS = {
    ast.Add: op.add,
    ast.Sub: op.sub,
    ast.Mult: op.mul,
    ast.Div: op.truediv,
    ast.USub: op.neg,
    ast.UAdd: op.pos,
}


def parse_amount(expr) -> float:
    """
    Parse an amount typed into a dialog.
    Accepts plain numbers with thousands separators ("14,000") and simple
    arithmetic ("12000+2000", "30000/2"). Raises ValueError otherwise.
    """
    if expr is None:
        raise ValueError("Amount is empty")
    if isinstance(expr, (int, float)) and not isinstance(expr, bool):
        val = float(expr)
    else:
        s = str(expr).strip().replace(",", "")
        if not s:
            raise ValueError("Amount is empty")
        try:
            node = ast.parse(s, mode="eval").body
        except SyntaxError as e:
            raise ValueError(f"Invalid amount: {expr!r}") from e
        val = _eval(node)

    if not (val == val) or val in (float("inf"), float("-inf")):
        raise ValueError("Invalid numeric result")
    return val


def _eval(n) -> float:
    if isinstance(n, ast.Constant) and isinstance(n.value, (int, float)) and not isinstance(n.value, bool):
        return float(n.value)
    if isinstance(n, ast.UnaryOp) and type(n.op) in _ALLOWED_OPS:
        return _ALLOWED_OPS[type(n.op)](_eval(n.operand))
    if isinstance(n, ast.BinOp) and type(n.op) in _ALLOWED_OPS:
        try:
            return _ALLOWED_OPS[type(n.op)](_eval(n.left), _eval(n.right))
        except ZeroDivisionError as e:
            raise ValueError("Division by zero") from e
    raise ValueError("Unsupported expression")


def try_parse_amount(expr):
    """parse_amount, but None instead of raising."""
    try:
        return parse_amount(expr)
    except ValueError:
        return None


def format_money(value, currency: str = "PKR") -> str:
    try:
        v = float(value or 0)
    except (TypeError, ValueError):
        v = 0.0
    return f"{currency} {int(round(v)):,}"
