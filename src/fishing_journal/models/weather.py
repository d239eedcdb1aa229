"""Simulated weather snapshot model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class WeatherSnapshot:
    """Weather reading for a place and day."""

    temperature: int  # celsius
    condition: str
    icon: str

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "temperature": self.temperature,
            "condition": self.condition,
            "icon": self.icon,
        }

    def get_display(self) -> str:
        """Get a one-line human-readable string."""
        return f"{self.icon} {self.condition}, {self.temperature} °C"
