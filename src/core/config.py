"""
Engine configuration.

Search depth, move limit and the evaluator's weights live here instead of as hidden constants,
so the engine can be run (and tested) with other values.
"""

import logging
import os
from typing import Self

from pydantic import BaseModel, Field, field_validator

DEFAULT_SEARCH_DEPTH = 4
DEFAULT_MOVE_LIMIT = 60  # per side, so a draw after 120 plies in total


class EvaluationWeights(BaseModel):
    """Weights (and thresholds) of the terms in the static evaluation.

    The weights come in tiers: a corner piece costs more than a spread-out group,
    which costs more than an extra cluster, etc.
    """

    capture: int = Field(1000, ge=0)
    mobility: int = Field(1000, ge=0)
    center: int = Field(1000, ge=0)
    clusters: int = Field(2000, ge=0)
    compactness: int = Field(4000, ge=0)
    corner: int = Field(6000, ge=0)

    mobility_threshold: int = Field(10, ge=0)
    cluster_min_ply: int = Field(10, ge=0)
    max_spread: float = Field(3.0, gt=0)
    center_goal: float = Field(1.5, gt=0)


class EngineConfig(BaseModel):
    search_depth: int = Field(DEFAULT_SEARCH_DEPTH, ge=1)
    move_limit: int = Field(DEFAULT_MOVE_LIMIT, ge=1)
    log_level: str = "WARNING"
    weights: EvaluationWeights = Field(default_factory=EvaluationWeights)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @classmethod
    def from_env(cls) -> Self:
        """Defaults, overridden by LOA_SEARCH_DEPTH / LOA_MOVE_LIMIT / LOA_LOG_LEVEL when those are set."""
        overrides: dict[str, str] = {}
        for field_name, env_var in [
            ("search_depth", "LOA_SEARCH_DEPTH"),
            ("move_limit", "LOA_MOVE_LIMIT"),
            ("log_level", "LOA_LOG_LEVEL"),
        ]:
            value = os.getenv(env_var)
            if value:
                overrides[field_name] = value
        return cls.model_validate(overrides)

