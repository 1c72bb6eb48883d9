from pydantic import BaseModel, Field
from typing import Literal


class WatchConfig(BaseModel):
    policy: Literal["auto", "default", "coarse"] = "auto"
    poll_interval: float = Field(default=1.0, gt=0)
    include: list[str] = Field(default_factory=lambda: ["*.py"])
    ignore_patterns: list[str] = Field(default_factory=lambda: [
        ".git", "node_modules", "__pycache__", ".venv", "build", "dist", ".tox", ".revtrack"
    ])


class StateConfig(BaseModel):
    directory: str = Field(default=".revtrack", min_length=1)
    filename: str = Field(default="state.json", min_length=1)


class RevtrackConfig(BaseModel):
    watch: WatchConfig = Field(default_factory=WatchConfig)
    state: StateConfig = Field(default_factory=StateConfig)
    alternates: dict[str, str] = Field(default_factory=dict)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
