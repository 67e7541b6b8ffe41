"""
Models module containing Pydantic schemas.
"""

from .schemas import (
    QuantumMode,
    ProcessRequest,
    ProcessResult,
    InferenceRequest,
    InferenceResult,
    MatrixRequest,
    MatrixResult,
    CollapseRequest,
    CollapseResult,
    HealthResponse,
    MetricsResponse,
    ModelsResponse,
    ErrorResponse
)

__all__ = [
    "QuantumMode",
    "ProcessRequest",
    "ProcessResult",
    "InferenceRequest",
    "InferenceResult",
    "MatrixRequest",
    "MatrixResult",
    "CollapseRequest",
    "CollapseResult",
    "HealthResponse",
    "MetricsResponse",
    "ModelsResponse",
    "ErrorResponse"
]
