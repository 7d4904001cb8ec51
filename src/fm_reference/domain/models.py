"""Domain models for fm_reference — pure dataclasses, no I/O."""

from dataclasses import dataclass

from src.fm_common.enums import Role


@dataclass(frozen=True)
class PlayerRef:
    """Canonical player record. One shape for every downstream consumer."""

    id: str
    name: str
    team: str                # team code, e.g. "G2"
    role: Role
    price: int               # millions, > 0; snapshot of one provider lookup
    team_name: str | None = None
    image_url: str | None = None
