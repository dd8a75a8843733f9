"""Repository oracle backed by git."""

from .oracle import GitOracle, Oracle, OracleQueryFailed, OracleUnavailable, find_git

__all__ = ["GitOracle", "Oracle", "OracleQueryFailed", "OracleUnavailable", "find_git"]
