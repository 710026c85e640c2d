"""
Simulated pilot runner: loads a YAML config, pushes synthetic participants
through complete roulette sessions and writes one export JSON per participant.
Used to check the sequence and export pipeline before running real sessions.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import random
import time
from pathlib import Path
from typing import List, Optional

import numpy as np

from experiments.config import ExperimentConfig, configure_logging, load_config
from experiments.session import RouletteSession
from roulette.sequence import build_trial_sequence
from roulette.wheel import WHEEL_ROTATIONS, landing_angle, segment_at_angle
from schemas.export import TrialResponse

logger = logging.getLogger(__name__)

TRIAL_DURATION_MS = 8000


def simulate_session(cfg: ExperimentConfig, participant_index: int, start_ms: Optional[int] = None) -> RouletteSession:
    seed = None if cfg.seed is None else cfg.seed + participant_index
    rng = random.Random(seed)
    np_rng = np.random.default_rng(seed)
    sequence = build_trial_sequence(cfg.num_mini_blocks, rng=rng)
    session = RouletteSession(sequence, participant_id=f"sim-{participant_index + 1:03d}", sub_block_order=cfg.sub_block_order)

    now_ms = start_ms if start_ms is not None else int(time.time() * 1000)
    while not session.is_complete:
        trial = session.current_trial
        wheel = int(np_rng.integers(0, len(WHEEL_ROTATIONS)))
        # The selected wheel must come to rest on the predetermined outcome.
        angle = landing_angle(trial.probability, trial.outcome_win, WHEEL_ROTATIONS[wheel], animate=True, rng=rng)
        if segment_at_angle(trial.probability, angle, WHEEL_ROTATIONS[wheel]) != trial.outcome_win:
            raise RuntimeError(f"wheel {wheel} landed off target at {angle:.2f} degrees")
        confidence = float(np.clip(np_rng.normal(100 * trial.probability, 15), 0, 100))
        satisfaction = float(np.clip(np_rng.normal(75 if trial.outcome_win else 30, 15), 0, 100))
        session.record_response(
            TrialResponse(
                selected_wheel=wheel,
                is_approved=trial.agency,
                confidence_rating=round(confidence, 1),
                satisfaction_rating=round(satisfaction, 1),
                timestamp=now_ms,
            )
        )
        now_ms += TRIAL_DURATION_MS
    return session


def run(cfg: ExperimentConfig) -> List[Path]:
    results_root = Path(cfg.results_dir) / cfg.id
    paths: List[Path] = []
    for idx in range(cfg.simulated_participants):
        session = simulate_session(cfg, idx)
        path = session.save(results_root / f"{session.participant_id}.json")
        summary = session.summary()
        logger.info(
            "Saved %s: %d trials, win rate %.2f, mean confidence %.1f",
            path,
            summary.completed_trials,
            summary.win_rate,
            summary.average_confidence,
        )
        paths.append(path)
    return paths


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", required=True, help="Path to YAML experiment config")
    parser.add_argument("--participants", type=int, default=None, help="Override simulated participant count")
    args = parser.parse_args()

    configure_logging()
    cfg = load_config(args.config)
    if args.participants is not None:
        cfg = dataclasses.replace(cfg, simulated_participants=args.participants)
    run(cfg)


if __name__ == "__main__":
    main()
