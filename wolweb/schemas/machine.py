"""Machine listing and wake-up schemas."""

from pydantic import BaseModel


class MachineOut(BaseModel):
    """Configured machine, addressed by its position in the config file."""
    id: int
    name: str
    mac: str
    ports: list[int]


class WakeResult(BaseModel):
    """Result of sending magic packets to every port of a machine."""
    sent: bool = True
    name: str
    ports: list[int]
