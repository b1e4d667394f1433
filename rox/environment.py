from typing import Dict, Optional

from rox.errors import RoxRuntimeError
from rox.types import Value


class Environment:
    """A single scope mapping identifiers to runtime values.

    Scopes form a chain through `enclosing`; lookups and assignments walk
    outward until the name is found or the chain runs out.
    """
    def __init__(self, enclosing: Optional['Environment'] = None):
        self.enclosing = enclosing
        self.values: Dict[str, Value] = {}

    def define(self, name: str, value: Value):
        # Always binds in this scope, shadowing any outer binding
        self.values[name] = value

    def get(self, name: str, line: Optional[int] = None) -> Value:
        env = self
        while env is not None:
            if name in env.values:
                return env.values[name]
            env = env.enclosing
        raise RoxRuntimeError('NameError', f"Cannot find the variable '{name}' in the scope", line)

    def assign(self, name: str, value: Value, line: Optional[int] = None):
        env = self
        while env is not None:
            if name in env.values:
                env.values[name] = value
                return
            env = env.enclosing
        raise RoxRuntimeError('NameError', f"Cannot assign to undefined variable '{name}'", line)

    def depth(self) -> int:
        """Number of scopes between this one and the global scope."""
        count = 0
        env = self.enclosing
        while env is not None:
            count += 1
            env = env.enclosing
        return count
