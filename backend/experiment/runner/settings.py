"""Experiment runner configuration via environment variables."""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from experiment.logic.rng import validate_seed_hex


class ExperimentRunnerSettings(BaseSettings):
    model_config = {"env_prefix": "EXPERIMENT_"}

    log_dir: str = "backend/logs/experiment"
    topologies_path: Path | None = None
    topology: str = "six_node_dyadic"
    seed: str | None = None
    num_participants: int = Field(default=6, ge=0)

    @field_validator("seed")
    @classmethod
    def validate_seed(cls, v: str | None) -> str | None:
        if v is not None:
            validate_seed_hex(v)
        return v
