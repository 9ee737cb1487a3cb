from typing import List  # ---------- uniqueness oracle interface ----------


class LabelTakenError(ValueError):
    """Raised by claim() when another unit of the property already holds the label."""

    def __init__(self, property_id: str, label: str):
        super().__init__(f"A unit with number '{label}' already exists for property {property_id}")
        self.property_id = property_id
        self.label = label


class UniquenessOracle:
    """
    Interface: the authoritative store of labels per property.
    implement .snapshot(property_id) -> list[str] and .claim(property_id, label)
    """

    def snapshot(self, property_id: str) -> List[str]:
        raise NotImplementedError

    def claim(self, property_id: str, label: str) -> None:
        """Atomically record `label`; raise LabelTakenError if it is already held."""
        raise NotImplementedError
