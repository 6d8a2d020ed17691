from __future__ import annotations


class PathContractError(RuntimeError):
    """Raised when recorded path data breaks its own construction rules."""
