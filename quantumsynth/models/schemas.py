"""
Pydantic models for request/response validation.

Defines the data contracts for the API, ensuring type safety
and automatic validation of incoming requests and outgoing responses.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class QuantumMode(str, Enum):
    """
    Modes recognised by the process transform.

    Each mode selects the label wrapped around the input text. Any
    other mode string is accepted and labelled "Classic".
    """
    SUPERPOSITION = "superposition"
    ENTANGLEMENT = "entanglement"
    QUANTUM_WALK = "quantum-walk"
    DEEP_NEURO_SYNTH = "deep-neuro-synth"


# ============================================================
# Request Models
# ============================================================

class ProcessRequest(BaseModel):
    """
    Input for quantum-inspired text processing.

    Attributes:
        input: Text to transform
        mode: Transform mode; the configured default is used when omitted
    """
    input: str = Field(
        ...,
        max_length=10000,
        description="Text to transform",
        examples=["qubit"]
    )
    mode: Optional[str] = Field(
        default=None,
        max_length=64,
        description="One of superposition, entanglement, quantum-walk, deep-neuro-synth"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "input": "qubit",
                "mode": "entanglement"
            }
        }


class InferenceRequest(BaseModel):
    """Input for a model inference run."""
    model: str = Field(..., max_length=200, description="Model identifier")
    data: str = Field(..., max_length=10000, description="Inference input")

    class Config:
        json_schema_extra = {
            "example": {
                "model": "superposition",
                "data": "hello"
            }
        }


class MatrixRequest(BaseModel):
    """Request for a square noise matrix."""
    size: int = Field(..., ge=2, le=128, description="Side length of the matrix")


class CollapseRequest(BaseModel):
    """Request to collapse a sequence of reals into 0/1 indicators."""
    data: list[float] = Field(..., description="Values to collapse")
    threshold: float = Field(
        ...,
        allow_inf_nan=False,
        description="Values with magnitude above this collapse to 1"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "data": [0.1, -2.5, 0.5, 3.0],
                "threshold": 1.0
            }
        }


# ============================================================
# Result Models
# ============================================================

class ProcessResult(BaseModel):
    """Output of a processing operation. Immutable once built."""
    output: str
    timestamp: datetime

    class Config:
        frozen = True


class InferenceResult(BaseModel):
    """Output of an inference run."""
    output: str
    model: str
    timestamp: datetime

    class Config:
        frozen = True


class MatrixResult(BaseModel):
    """A generated noise matrix."""
    matrix: list[list[float]]
    timestamp: datetime


class CollapseResult(BaseModel):
    """Collapsed 0/1 indicators, one per input value."""
    collapsed: list[int]
    timestamp: datetime


# ============================================================
# Response Models
# ============================================================

class ProcessResponse(BaseModel):
    """Envelope for POST /api/v1/quantum/process."""
    status: str = "success"
    result: ProcessResult


class InferenceResponse(BaseModel):
    """Envelope for POST /api/v1/inference."""
    output: str


class MatrixResponse(BaseModel):
    """Envelope for POST /api/v1/quantum/matrix."""
    status: str = "success"
    result: MatrixResult


class CollapseResponse(BaseModel):
    """Envelope for POST /api/v1/quantum/collapse."""
    status: str = "success"
    result: CollapseResult


class ModelsResponse(BaseModel):
    """Available model names."""
    models: list[str]


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "ok"
    service: str
    version: str
    timestamp: str
    server_time: str


class MetricsSnapshot(BaseModel):
    """In-memory counters since process start."""
    uptime_seconds: int
    requests_total: int
    active_sessions: int
    quantum_jobs_run: int


class MetricsResponse(BaseModel):
    """Envelope for GET /metrics."""
    metrics: MetricsSnapshot


class ErrorResponse(BaseModel):
    """Generic error response."""
    error: str
    detail: Optional[str] = None
    timestamp: str
