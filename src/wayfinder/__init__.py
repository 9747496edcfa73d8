"""Gitignore-aware, budget-bounded filesystem exploration tools."""

__version__ = "0.1.0"
