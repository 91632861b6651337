"""Capability flags and tunables for the game flow."""

import logging
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class GameConfig(BaseModel):
    """Game flow configuration (immutable)"""

    # Post-game prayer step (GO_TO_PRAYER / PRAYER_SUBMITTED / SKIP_PRAYER)
    prayer_bonus_enabled: bool = Field(
        False, description="Enable the post-game prayer-bonus screen"
    )
    prayer_bonus_points: int = Field(
        500, ge=0, le=100000, description="Points awarded for a submitted prayer"
    )

    # Enforced by GameSession, not by the pure transition function
    reject_duplicate_submissions: bool = Field(
        True, description="Refuse SUBMIT_ANSWER while a submission is in flight"
    )

    model_config = ConfigDict(frozen=True, extra="ignore")

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None) -> "GameConfig":
        """Build config from a plain mapping; unknown keys are ignored."""
        if not mapping:
            return cls()
        known = {k: v for k, v in mapping.items() if k in cls.model_fields}
        ignored = sorted(set(mapping) - set(known))
        if ignored:
            logger.debug(f"Ignoring unknown game config keys: {ignored}")
        return cls(**known)


DEFAULT_CONFIG = GameConfig()
