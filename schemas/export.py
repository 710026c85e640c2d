from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from roulette.models import BlockType


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TrialResponse(_CamelModel):
    """Participant input collected by the host for one trial."""

    selected_wheel: int = Field(ge=0, le=2)
    is_approved: bool
    confidence_rating: float = Field(ge=0.0, le=100.0)
    satisfaction_rating: float = Field(ge=0.0, le=100.0)
    timestamp: int = Field(ge=0, description="epoch milliseconds")


class TrialRecord(_CamelModel):
    trial_number: int = Field(ge=1)
    mini_block: int = Field(ge=1)
    sub_block: BlockType
    probability: float
    outcome_win: bool
    agency: bool
    selected_wheel: int = Field(ge=0, le=2)
    is_approved: bool
    confidence_rating: float = Field(ge=0.0, le=100.0)
    satisfaction_rating: float = Field(ge=0.0, le=100.0)
    timestamp: int = Field(ge=0)


class SessionSummary(_CamelModel):
    participant_id: str
    completed_trials: int = Field(ge=0)
    average_confidence: float = Field(ge=0.0, le=100.0)
    average_satisfaction: float = Field(ge=0.0, le=100.0)
    agency_rate: float = Field(ge=0.0, le=1.0)
    win_rate: float = Field(ge=0.0, le=1.0)
    completed_at: datetime


class SessionExport(_CamelModel):
    summary: SessionSummary
    trials: List[TrialRecord] = Field(default_factory=list)
    mini_blocks: List[List[int]]
