from typing import Any

from unitlabels.shell.memory_oracle import InMemoryUniquenessOracle
from unitlabels.shell.uniqueness_oracle import UniquenessOracle


def create_uniqueness_oracle(provider: str, **kwargs: Any) -> UniquenessOracle:
    if provider == "memory":
        return InMemoryUniquenessOracle(**kwargs)
    raise ValueError(f"Unknown uniqueness oracle: {provider}. Use 'memory'.")
