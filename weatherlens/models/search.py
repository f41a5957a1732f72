"""Recent search history models."""

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class RecentSearch:
    id: str
    name: str
    timestamp: int  # epoch milliseconds

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "RecentSearch":
        """Build from a stored dict. Raises on missing or mistyped fields."""
        name = data["name"]
        if not isinstance(name, str):
            raise TypeError(f"name must be a string, got {type(name).__name__}")
        return cls(id=str(data["id"]), name=name, timestamp=int(data["timestamp"]))
