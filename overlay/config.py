"""Configuration models for the Bounce Runner overlay."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from games.bounce_runner.usernames import NAME_LISTS


class OverlayConfig(BaseModel):
    """
    Tuning for the simulated leaderboard.

    Defaults reproduce the shipped game's behaviour.
    """

    # Generation
    batch_size: int = Field(default=15, ge=1, description="Entries per generated batch")
    live_flag_probability: float = Field(
        default=0.3, ge=0.0, le=1.0,
        description="Chance a generated entry is flagged as just appeared"
    )
    fallback_reference_score: int = Field(
        default=500, ge=0,
        description="Base score used when the reference is at or below the threshold"
    )
    reference_threshold: int = Field(
        default=100, ge=0,
        description="Reference scores above this anchor the batch directly"
    )
    variance_ratio: float = Field(default=0.8, ge=0.0, description="Spread as a fraction of the base")
    variance_skew: float = Field(
        default=0.3, ge=0.0, le=1.0,
        description="Offset subtracted from the uniform draw; 0.3 puts ~70% of rivals above the base"
    )

    # Live updates
    live_capacity: int = Field(default=15, ge=1, description="Board size cap after a live insert")
    tick_interval: float = Field(default=3.0, gt=0.0, description="Seconds between live updates")
    live_insert_probability: float = Field(
        default=0.5, ge=0.0, le=1.0,
        description="Chance a tick injects a new rival"
    )

    # Display
    live_window_size: int = Field(default=4, ge=1, description="Rows shown during a run")
    summary_window_size: int = Field(default=10, ge=1, description="Rows shown after a run")

    # Identity and data
    player_identifier: str = Field(default="YOU", min_length=1, description="Name of the player's row")
    name_list: str = Field(default="standard", description="Username pool to draw rivals from")

    # Execution
    seed: Optional[int] = Field(default=None, description="Random seed for reproducibility")
    verbose: bool = Field(default=False, description="Enable verbose logging")

    @field_validator("name_list")
    @classmethod
    def validate_name_list(cls, v: str) -> str:
        """Validate that name_list is a known pool."""
        if v not in NAME_LISTS:
            available = list(NAME_LISTS.keys())
            raise ValueError(f"Unknown name list: {v}. Available: {available}")
        return v

    @model_validator(mode="after")
    def validate_player_identifier(self) -> "OverlayConfig":
        """The player's row must be distinguishable from every rival."""
        if self.player_identifier in NAME_LISTS[self.name_list]:
            raise ValueError(
                f"player_identifier {self.player_identifier!r} collides with a rival name"
            )
        return self

    class Config:
        extra = "forbid"


def load_config(filepath: str) -> OverlayConfig:
    """
    Load configuration from YAML or JSON file.

    Args:
        filepath: Path to config file

    Returns:
        OverlayConfig instance
    """
    import json
    from pathlib import Path

    import yaml

    path = Path(filepath)
    content = path.read_text()

    if path.suffix in [".yaml", ".yml"]:
        data = yaml.safe_load(content) or {}
    else:
        data = json.loads(content)

    return OverlayConfig(**data)


def create_config(**kwargs: Any) -> OverlayConfig:
    """Create an OverlayConfig from keyword overrides."""
    return OverlayConfig(**kwargs)


def config_summary(config: OverlayConfig) -> Dict[str, Any]:
    return config.model_dump(exclude={"verbose"})
