from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

import yaml

from roulette.matrix import NUM_MINI_BLOCKS

RESULTS_DIR = os.getenv("ROULETTE_RESULTS_DIR", "results")
LOG_LEVEL = os.getenv("ROULETTE_LOG_LEVEL", "INFO")

SUB_BLOCK_ORDERS = ("agency_first", "no_agency_first")


@dataclass
class ExperimentConfig:
    id: str
    description: str = ""
    num_mini_blocks: int = NUM_MINI_BLOCKS
    seed: Optional[int] = None
    sub_block_order: str = "agency_first"
    results_dir: str = RESULTS_DIR
    simulated_participants: int = 1

    def __post_init__(self) -> None:
        if not 1 <= self.num_mini_blocks <= NUM_MINI_BLOCKS:
            raise ValueError(f"num_mini_blocks must be between 1 and {NUM_MINI_BLOCKS}")
        if self.sub_block_order not in SUB_BLOCK_ORDERS:
            raise ValueError(f"sub_block_order must be one of {SUB_BLOCK_ORDERS}, got {self.sub_block_order!r}")
        if self.simulated_participants < 1:
            raise ValueError("simulated_participants must be at least 1")


def load_config(path: str) -> ExperimentConfig:
    with open(path, "r") as f:
        cfg = yaml.safe_load(f) or {}
    return ExperimentConfig(
        id=cfg["id"],
        description=cfg.get("description", ""),
        num_mini_blocks=int(cfg.get("num_mini_blocks", NUM_MINI_BLOCKS)),
        seed=cfg.get("seed"),
        sub_block_order=cfg.get("sub_block_order", "agency_first"),
        results_dir=cfg.get("results_dir", RESULTS_DIR),
        simulated_participants=int(cfg.get("simulated_participants", 1)),
    )


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
