"""Query parameter models for the simulated training/testing streams."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TrainingParams(BaseModel):
    """Required query parameters for ``/rl_train``."""

    model_config = ConfigDict(str_strip_whitespace=True)

    algorithm_name: str = Field(min_length=1)
    validation_config: str = Field(min_length=1)
    modal: str = Field(min_length=1)

    def started_payload(self) -> dict[str, Any]:
        return {
            "message": "Training started",
            "algorithm": self.algorithm_name,
            "config": self.validation_config,
            "modal": self.modal,
        }


class TestingParams(TrainingParams):
    """Required query parameters for ``/rl_test``."""

    model_path: str = Field(min_length=1)
    env_id: str = Field(min_length=1)

    def started_payload(self) -> dict[str, Any]:
        return {
            "message": "Testing started",
            "algorithm": self.algorithm_name,
            "config": self.validation_config,
            "model_path": self.model_path,
            "env_id": self.env_id,
            "modal": self.modal,
        }
