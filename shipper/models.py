from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, JsonValue, field_validator

from shipper.utils import parse_duration

Document = dict[str, JsonValue]

CycleStatus = Literal["no_files", "no_valid_data", "aborted", "delivery_failed", "committed"]

class Settings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    path_pattern: str = Field(min_length=1)
    max_files: int = Field(gt=0)
    api_endpoint: str = Field(min_length=1)
    api_token: str = Field(min_length=1)
    server_key: str = Field(min_length=1)
    check_interval: float = Field(gt=0)  # seconds
    request_timeout: float = Field(default=30.0, gt=0)
    cycle_timeout: Optional[float] = Field(default=None, gt=0)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    @field_validator("check_interval", "request_timeout", "cycle_timeout", mode="before")
    @classmethod
    def parse_durations(cls, v):
        if v is None or isinstance(v, bool):
            return v
        if isinstance(v, (str, int, float)):
            return parse_duration(v)
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v

@dataclass(frozen=True)
class LoadedDocument:
    path: str
    document: Document

class FileIssue(BaseModel):
    path: str
    reason: str

class CycleOutcome(BaseModel):
    status: CycleStatus
    discovered: int = 0
    loaded: int = 0
    deleted: int = 0
    skipped_files: list[FileIssue] = Field(default_factory=list)
    delete_failures: list[FileIssue] = Field(default_factory=list)
    error: Optional[str] = None

    @property
    def skipped(self) -> int:
        return len(self.skipped_files)

    @property
    def ok(self) -> bool:
        return self.status in ("committed", "no_files", "no_valid_data")
