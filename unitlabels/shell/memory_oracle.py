import threading
from dataclasses import dataclass, field
from typing import Dict, List, Set

from unitlabels.shell.uniqueness_oracle import LabelTakenError, UniquenessOracle


@dataclass
class InMemoryUniquenessOracle(UniquenessOracle):
    labels: Dict[str, Set[str]] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def snapshot(self, property_id: str) -> List[str]:
        with self._lock:
            return sorted(self.labels.get(property_id, set()))

    def claim(self, property_id: str, label: str) -> None:
        with self._lock:
            held = self.labels.setdefault(property_id, set())
            if label in held:
                raise LabelTakenError(property_id, label)
            held.add(label)
