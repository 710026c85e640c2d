"""
Host-side session recorder for the roulette agency task.

Walks a generated TrialSequence in presentation order, attaches each
participant response to its predetermined trial exactly once, and produces the
summary/export payload. The interactive phases (instructions, choice, approval,
ratings, spin) are driven by the frontend, which calls into this class.
"""

from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

import numpy as np

from roulette.models import Trial, TrialSequence
from schemas.export import SessionExport, SessionSummary, TrialRecord, TrialResponse

logger = logging.getLogger(__name__)


def flatten_sequence(sequence: TrialSequence, sub_block_order: str = "agency_first") -> List[Trial]:
    trials: List[Trial] = []
    for pair in sequence.trials_by_mini_block:
        if sub_block_order == "no_agency_first":
            trials.extend(pair.no_agency_block)
            trials.extend(pair.agency_block)
        else:
            trials.extend(pair.agency_block)
            trials.extend(pair.no_agency_block)
    return trials


def summarize(participant_id: str, records: List[TrialRecord], completed_at: Optional[datetime] = None) -> SessionSummary:
    if records:
        avg_conf = float(np.mean([r.confidence_rating for r in records]))
        avg_sat = float(np.mean([r.satisfaction_rating for r in records]))
        agency_rate = float(np.mean([r.agency for r in records]))
        win_rate = float(np.mean([r.outcome_win for r in records]))
    else:
        avg_conf = avg_sat = agency_rate = win_rate = 0.0
    return SessionSummary(
        participant_id=participant_id,
        completed_trials=len(records),
        average_confidence=avg_conf,
        average_satisfaction=avg_sat,
        agency_rate=agency_rate,
        win_rate=win_rate,
        completed_at=completed_at or datetime.now(timezone.utc),
    )


class RouletteSession:
    def __init__(self, sequence: TrialSequence, participant_id: Optional[str] = None, sub_block_order: str = "agency_first"):
        self.participant_id = participant_id or str(uuid.uuid4())
        self.sequence = sequence
        self.trials = flatten_sequence(sequence, sub_block_order)
        self.records: List[TrialRecord] = []
        self.completed_at: Optional[datetime] = None
        if sequence.matrix.is_fallback:
            logger.warning("Session %s uses the fallback outcome matrix", self.participant_id)

    @property
    def is_complete(self) -> bool:
        return len(self.records) >= len(self.trials)

    @property
    def current_trial(self) -> Optional[Trial]:
        if self.is_complete:
            return None
        return self.trials[len(self.records)]

    def record_response(self, response: TrialResponse) -> TrialRecord:
        """Enrich the current trial with ``response`` and advance to the next one."""
        trial = self.current_trial
        if trial is None:
            raise ValueError(f"session {self.participant_id} is complete; no trial left to record")
        record = TrialRecord(
            trial_number=len(self.records) + 1,
            mini_block=trial.mini_block,
            sub_block=trial.block_type,
            probability=trial.probability,
            outcome_win=trial.outcome_win,
            agency=trial.agency,
            selected_wheel=response.selected_wheel,
            is_approved=response.is_approved,
            confidence_rating=response.confidence_rating,
            satisfaction_rating=response.satisfaction_rating,
            timestamp=response.timestamp,
        )
        self.records.append(record)
        if self.is_complete:
            self.completed_at = datetime.now(timezone.utc)
            logger.info("Session %s completed %d trials", self.participant_id, len(self.records))
        return record

    def summary(self) -> SessionSummary:
        return summarize(self.participant_id, self.records, self.completed_at)

    def export(self) -> SessionExport:
        return SessionExport(
            summary=self.summary(),
            trials=list(self.records),
            mini_blocks=self.sequence.matrix.to_list(),
        )

    def save(self, path: str | Path) -> Path:
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        with out.open("w") as f:
            json.dump(self.export().model_dump(mode="json", by_alias=True), f, indent=2)
        return out
