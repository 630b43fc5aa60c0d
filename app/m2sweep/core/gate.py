"""Probabilistic run gating.

When m2sweep is hooked into every build, a full repository walk on each
invocation is wasteful. A run is therefore executed only with a given
probability, i.e. on average every 1/probability-th invocation.
"""

import random


def should_run(probability: float, rng: random.Random | None = None) -> bool:
    """Decide whether a gated run executes.

    Args:
        probability: Execution probability between 0.0 (never) and 1.0 (always).
        rng: Random source, defaults to the module-level generator.

    Returns:
        True if the run should execute.
    """
    draw = rng.random() if rng is not None else random.random()
    return probability > draw
