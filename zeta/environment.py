from typing import Dict, Iterator

from zeta.errors import UndefinedVariable


class Environment:
    """Flat table mapping variable names to their current values."""
    def __init__(self):
        self.values: Dict[str, float] = {}

    def get(self, name: str) -> float:
        if name in self.values:
            return self.values[name]
        raise UndefinedVariable(name)

    def set(self, name: str, value: float):
        self.values[name] = value

    def __contains__(self, name: str) -> bool:
        return name in self.values

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)
