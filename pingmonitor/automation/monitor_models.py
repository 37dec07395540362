"""
Models for the availability monitor using Pydantic.

These models describe the monitor settings, the result of a single probe,
and the transition events emitted by the availability tracker.
"""

from datetime import datetime, timedelta
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class MonitorSettings(BaseModel):
    """Settings for monitoring a single host."""

    address: str = Field(..., description="Target host name or IP address")
    window_size: int = Field(24, ge=1, description="Number of samples in the rolling window")
    degraded_threshold: float = Field(50.0, ge=0.0, le=100.0, description="Degraded service threshold (%)")
    lost_threshold: float = Field(5.0, ge=0.0, le=100.0, description="Lost service threshold (%)")
    interval_ms: int = Field(5000, ge=0, description="Delay between probes in milliseconds")
    timeout_ms: int = Field(120, gt=0, description="Per-probe timeout in milliseconds")
    payload_size: int = Field(32, ge=0, le=65500, description="ICMP payload size in bytes")
    privileged: bool = Field(False, description="Use raw sockets (requires root)")

    @field_validator("address")
    @classmethod
    def validate_address(cls, v: str) -> str:
        """Reject blank addresses."""
        v = v.strip()
        if not v:
            raise ValueError("Address must not be blank")
        return v

    @field_validator("lost_threshold")
    @classmethod
    def validate_lost_below_degraded(cls, v: float, info: ValidationInfo) -> float:
        """Lost service threshold cannot sit above the degraded threshold."""
        degraded = info.data.get("degraded_threshold")
        if degraded is not None and v > degraded:
            raise ValueError(
                f"Lost threshold {v} % must not exceed degraded threshold {degraded} %"
            )
        return v

    @property
    def interval_s(self) -> float:
        return self.interval_ms / 1000.0

    @property
    def timeout_s(self) -> float:
        return self.timeout_ms / 1000.0


class ProbeResult(BaseModel):
    """Outcome of one ICMP echo request."""

    success: bool
    latency_s: float | None = Field(None, ge=0.0, description="Round trip time in seconds")
    status: Literal["reply", "no-reply", "send-failed"]

    @property
    def summary(self) -> str:
        return {
            "reply": "Reply succeeded",
            "no-reply": "Reply failed",
            "send-failed": "Send failed",
        }[self.status]


class AvailabilityEvent(BaseModel):
    """A degraded/lost state transition."""

    model_config = ConfigDict(frozen=True)

    state: Literal["degraded", "lost"]
    transition: Literal["triggered", "recovered"]
    rate: float = Field(..., ge=0.0, le=100.0)
    at: datetime
    duration: timedelta | None = None

    @property
    def kind(self) -> str:
        return f"{self.state}-{self.transition}"

    @property
    def duration_hms(self) -> str | None:
        """Elapsed time in the triggered state as HH:MM:SS."""
        if self.duration is None:
            return None
        total = int(self.duration.total_seconds())
        hours, remainder = divmod(total, 3600)
        minutes, seconds = divmod(remainder, 60)
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
