"""Static analysis primitives for GitHub Actions workflows."""

__version__ = "0.1.0"
__all__ = ["config", "expr", "github_env", "template_injection"]