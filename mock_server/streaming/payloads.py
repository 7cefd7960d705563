"""Synthetic progress payloads for the mock training/testing streams."""

from __future__ import annotations

import random
from typing import Any

# env_ids whose test runs produce one image / one visualization
SINGLE_ARTIFACT_ENV_IDS = frozenset({"Classification", "Detection"})


def is_single_artifact(env_id: str) -> bool:
    return env_id in SINGLE_ARTIFACT_ENV_IDS


def training_progress(step: int, rng: random.Random) -> str:
    """Return one training progress line.

    ``episodeic_state`` keeps the field name clients already parse.
    """
    state = rng.randint(0, 9)
    action = rng.randint(0, 3)
    episodic_return = rng.uniform(-1.0, 1.0)
    return (
        f"global_step={step}, episodeic_state={state}, "
        f"episodic_action={action}, episodic_return={episodic_return:.3f}"
    )


def testing_progress(step: int, env_id: str, artifacts_root: str = "/mock_image") -> dict[str, Any]:
    """Return one testing progress payload referencing mock artifacts.

    Single-artifact env_ids get plain paths for ``image`` and ``vis_files``;
    everything else gets two-element lists.
    """
    base = f"{artifacts_root.rstrip('/')}/{env_id}"
    if is_single_artifact(env_id):
        image: Any = f"{base}/result.png"
        vis_files: Any = f"{base}/vis.png"
    else:
        image = [f"{base}/result_0.png", f"{base}/result_1.png"]
        vis_files = [f"{base}/vis_0.png", f"{base}/vis_1.png"]
    return {
        "step": step,
        "image": image,
        "vis_files": vis_files,
        "txt_file": f"{base}/result.txt",
    }
