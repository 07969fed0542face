"""Safety analysis for expressions expanded into scripts and code."""

from __future__ import annotations

from .expr import (
    BinaryOp,
    BinOp,
    Boolean,
    Call,
    Context,
    Expr,
    Identifier,
    Index,
    Null,
    Number,
    Star,
    String,
    UnaryOp,
)

# Values the runner or the platform controls, or plain numbers and hashes.
_GITHUB_KEYS = (
    "action_path",
    "event_name",
    "repository",
    "repository_id",
    "repositoryUrl",
    "repository_owner",
    "repository_owner_id",
    "run_attempt",
    "run_id",
    "run_number",
    "server_url",
    "sha",
    "token",
    "workspace",
)

# Event payload fields that hold only identifiers, counts or commit hashes.
_EVENT_KEYS = (
    "after",
    "before",
    "issue.number",
    "merge_group.base_sha",
    "number",
    "pull_request.commits",
    "pull_request.number",
    "workflow_run.id",
)

_RUNNER_KEYS = ("arch", "debug", "os", "temp", "tool_cache")

SAFE_CONTEXTS: frozenset[str] = frozenset(
    [f"github.{key}" for key in _GITHUB_KEYS]
    + [f"github.event.{key}" for key in _EVENT_KEYS]
    + [f"runner.{key}" for key in _RUNNER_KEYS]
)


def is_safe_context(context: str) -> bool:
    """Return True if expanding ``context`` is not considered exploitable.

    Secrets count as safe here: leaking them is a separate concern from
    letting an attacker inject code through them.
    """
    return context.startswith("secrets.") or context in SAFE_CONTEXTS


def expr_is_safe(expr: Expr) -> bool:
    """Return True if every branch of ``expr`` can only yield a literal.

    Raises ValueError for nodes that only occur inside a context.
    """
    match expr:
        case Number() | String() | Boolean() | Null():
            return True
        case Star() | Identifier() | Index():
            raise ValueError(f"{type(expr).__name__} only occurs within a context")
        case Call() | Context():
            # Treated conservatively; safe contexts are filtered by the caller.
            return False
        case BinaryOp(op=BinOp.EQ | BinOp.NEQ) | UnaryOp():
            # Comparisons and negation always produce a boolean.
            return True
        case BinaryOp(op=BinOp.AND):
            # A truthy `&&` always evaluates to its right-hand side.
            return expr_is_safe(expr.rhs)
        case BinaryOp():
            return expr_is_safe(expr.lhs) and expr_is_safe(expr.rhs)
    raise TypeError(f"unsupported expression node: {expr!r}")