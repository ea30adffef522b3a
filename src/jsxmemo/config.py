"""Transform configuration.

Example:
    >>> from jsxmemo.config import TransformConfig
    >>> config = TransformConfig(namespace=None)
    >>> config.callee("useMemo")
    'useMemo'

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TransformConfig:
    """Configuration for the memoization rewrite.

    Attributes:
        namespace: Object the primitives are read from (``React``); None
            calls them as bare names (``useCallback(...)``)
        callback_primitive: Primitive that memoizes a function reference
        value_primitive: Primitive that memoizes a computed value
        primitive_prefix: Calls whose callee name starts with this prefix
            (case-sensitive) are treated as framework primitives and never
            rewritten
        memoize_attributes: Hoist inline closures bound to UI attributes
        memoize_bindings: Memoize local constants that feed the returned UI
    """

    namespace: str | None = "React"
    callback_primitive: str = "useCallback"
    value_primitive: str = "useMemo"
    primitive_prefix: str = "use"
    memoize_attributes: bool = True
    memoize_bindings: bool = True

    def callee(self, primitive: str) -> str:
        """Source spelling of a primitive's callee (``React.useMemo``)."""
        if self.namespace:
            return f"{self.namespace}.{primitive}"
        return primitive


# Default configuration
DEFAULT_CONFIG = TransformConfig()
