from pydantic import BaseModel, Field
from typing import Literal


class PolicyConfig(BaseModel):
    path: str | None = None


class CLIConfig(BaseModel):
    show_wildcards_as: str = Field(default="*", min_length=1)


class WardenConfig(BaseModel):
    policy: PolicyConfig = Field(default_factory=PolicyConfig)
    cli: CLIConfig = Field(default_factory=CLIConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
