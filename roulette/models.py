from __future__ import annotations

from enum import Enum
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from roulette.matrix import PROBABILITY_TIERS, OutcomeMatrix


class BlockType(str, Enum):
    agency = "agency"
    no_agency = "noAgency"


class Trial(BaseModel):
    """One predetermined decision-and-outcome unit."""

    model_config = ConfigDict(frozen=True)

    mini_block: int = Field(..., ge=1)
    block_type: BlockType
    probability: float
    outcome_win: bool
    agency: bool

    @field_validator("probability")
    @classmethod
    def _check_tier(cls, value: float) -> float:
        if value not in PROBABILITY_TIERS:
            raise ValueError(f"probability must be one of {PROBABILITY_TIERS}, got {value}")
        return value


class MiniBlockPair(BaseModel):
    model_config = ConfigDict(frozen=True)

    mini_block_number: int = Field(..., ge=1)
    agency_block: Tuple[Trial, ...]
    no_agency_block: Tuple[Trial, ...]


class TrialSequence(BaseModel):
    model_config = ConfigDict(frozen=True)

    trials_by_mini_block: Tuple[MiniBlockPair, ...]
    matrix: OutcomeMatrix
