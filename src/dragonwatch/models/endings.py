"""Ending records and the ending catalog.

EndingRecord is the persisted snapshot of the moment an ending was reached.
EndingDefinition carries the presentation data for each ending.
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field

from dragonwatch.core.exceptions import ValidationError
from dragonwatch.models.enums import EndingId


class EndingRecord(BaseModel):
    """Snapshot of the run at the moment its ending was reached.

    Attributes:
        ending_id: The ending reached.
        turn: Turn counter at game end.
        survival_rate: Surviving share of the initial population.
        evacuated: Citizens evacuated.
        killed: Citizens killed in action.
        dangerous_card_count: Dangerous cards played.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    ending_id: EndingId = EndingId.GAME_OVER
    turn: int = Field(default=0, ge=0)
    survival_rate: float = Field(default=0.0, ge=0.0, le=1.0)
    evacuated: int = Field(default=0, ge=0)
    killed: int = Field(default=0, ge=0)
    dangerous_card_count: int = Field(default=0, ge=0)

    @property
    def is_true_ending(self) -> bool:
        return self.ending_id.is_true_ending


class EndingDefinition(BaseModel):
    """Presentation data for one ending.

    Attributes:
        ending_id: The ending this text belongs to.
        title: Ending title.
        description: Short summary.
        story_texts: Story pages shown in order.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    ending_id: EndingId
    title: str
    description: str = ""
    story_texts: tuple[str, ...] = ()


class EndingCatalog:
    """Lookup of ending presentation data by identifier."""

    def __init__(self, endings: Iterable[EndingDefinition]) -> None:
        """Initialize the catalog.

        Args:
            endings: Ending definitions.

        Raises:
            ValidationError: If an ending identifier appears twice.
        """
        self._endings: dict[EndingId, EndingDefinition] = {}
        for ending in endings:
            if ending.ending_id in self._endings:
                raise ValidationError(
                    "Duplicate ending in catalog",
                    field_name="ending_id",
                    invalid_value=int(ending.ending_id),
                )
            self._endings[ending.ending_id] = ending

    def get(self, ending_id: EndingId) -> EndingDefinition | None:
        return self._endings.get(ending_id)

    def __len__(self) -> int:
        return len(self._endings)


__all__ = [
    "EndingRecord",
    "EndingDefinition",
    "EndingCatalog",
]
