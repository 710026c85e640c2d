"""
Print a generated roulette trial sequence as JSON.

Usage:
    python -m scripts.generate_sequence --seed 42 --num-mini-blocks 5 --out sequence.json
"""

from __future__ import annotations

import argparse
import json
import random

from experiments.config import configure_logging
from roulette.matrix import NUM_MINI_BLOCKS
from roulette.sequence import build_trial_sequence


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible sequence")
    parser.add_argument("--num-mini-blocks", type=int, default=NUM_MINI_BLOCKS)
    parser.add_argument("--out", default=None, help="Write JSON here instead of stdout")
    args = parser.parse_args()

    configure_logging()
    sequence = build_trial_sequence(args.num_mini_blocks, rng=random.Random(args.seed))
    payload = sequence.model_dump(mode="json")
    if args.out:
        with open(args.out, "w") as f:
            json.dump(payload, f, indent=2)
        print(f"Wrote {len(sequence.trials_by_mini_block)} mini-blocks to {args.out}")
    else:
        print(json.dumps(payload, indent=2))


if __name__ == "__main__":
    main()
