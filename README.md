# actionlint_core

Building blocks for static analysis of GitHub Actions workflows.

## Install

    pip install .

For running the tests:

    pip install ".[test]"
    pytest

## What it provides

- `actionlint_core.expr`: a parser for the GitHub Actions expression language
  (the bodies of `${{ ... }}`). `parse(text)` returns an `Expr` tree made of
  `Number`, `String`, `Boolean`, `Null`, `Star`, `Call`, `Identifier`,
  `Index`, `Context`, `BinaryOp` and `UnaryOp` nodes, with operators given by
  the `BinOp` and `UnOp` enums. Malformed input raises `ExprSyntaxError`
  (a `ValueError`). `Expr.contexts()` lists the well-known contexts an
  expression refers to; contexts reached through a call's result, such as
  `fromJSON(x).y`, are left out, though the call's arguments are searched.
- `actionlint_core.template_injection`: `expr_is_safe(expr)` decides whether
  every branch of an expression can only evaluate to a literal (comparisons
  and negation always can; `a && b` is safe when `b` is; contexts and calls
  never are). `is_safe_context(context)` returns `True` for `secrets.*` and
  for the contexts in `SAFE_CONTEXTS`, such as `github.sha` or `runner.os`.
- `actionlint_core.config`: `Config` holds per-audit ignore rules.
  `Config.from_yaml(text)` builds one from YAML, `Config.load(path=None,
  no_config=False)` reads a given file or otherwise calls
  `Config.discover(cwd)`, which looks for `.github/actionlint-core.yml` and
  then `actionlint-core.yml` under the directory and falls back to an empty
  configuration. `Config.ignores(ident, locations)` takes an audit name and
  an iterable of `(filename, line, column)` tuples (1-based) and tells
  whether any of them matches a rule. `WorkflowRule.parse("ci.yml:12:5")`
  parses a single rule of the form `name.yml[:line[:column]]`; invalid rules
  and invalid files raise `ConfigError`.
- `actionlint_core.github_env`: `cmd_uses_github_env(script)` finds
  redirections into `%GITHUB_ENV%` or `%GITHUB_PATH%` in Windows `cmd`
  scripts, returning `(destination, (start, end))` pairs.

## Example

    from actionlint_core.expr import parse
    from actionlint_core.template_injection import expr_is_safe

    expr = parse("github.event.issue.title || 'untitled'")
    print(expr.contexts())      # ['github.event.issue.title']
    print(expr_is_safe(expr))   # False

An ignore configuration file:

    rules:
      template-injection:
        ignore:
          - ci.yml:12

used as:

    from actionlint_core.config import Config

    config = Config.load("actionlint-core.yml")
    config.ignores("template-injection", [("ci.yml", 12, 3)])   # True

## What it does not do

This is a library of analysis primitives, not a complete linter. It has no
command-line program, does not load or walk workflow or action files, does
not run audits or report findings, and does not query the GitHub API.
Environment-file writes are only detected for `cmd` scripts; bash and
PowerShell scripts are not examined.