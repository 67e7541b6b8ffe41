"""
API Routes - FastAPI endpoints for QuantumSynth.

System endpoints report health and in-memory metrics. The /api/v1
endpoints hand each request to the QuantumDispatcher stored on the
application state; typed errors it raises are turned into JSON
responses by the handlers registered in quantumsynth.main.

Compute endpoints are plain functions so FastAPI runs them on its
thread pool.
"""

import logging
from fastapi import APIRouter, Depends, Request, status

from ..core.metrics import MetricsRegistry
from ..core.utils import get_server_time, get_timestamp
from ..models.schemas import (
    CollapseRequest,
    CollapseResponse,
    ErrorResponse,
    HealthResponse,
    InferenceRequest,
    InferenceResponse,
    MatrixRequest,
    MatrixResponse,
    MetricsResponse,
    MetricsSnapshot,
    ModelsResponse,
    ProcessRequest,
    ProcessResponse
)
from ..synth.processor import QuantumDispatcher, available_models

# Configure logging
logger = logging.getLogger(__name__)

# Health and metrics live at the root, synthesis under /api/v1
router = APIRouter()
api_router = APIRouter(prefix="/api/v1")

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid input"},
    500: {"model": ErrorResponse, "description": "Synthesis failed"},
    503: {"model": ErrorResponse, "description": "Too many jobs in flight"}
}


def get_dispatcher(request: Request) -> QuantumDispatcher:
    """Dispatcher built by the application factory."""
    return request.app.state.dispatcher


def get_metrics(request: Request) -> MetricsRegistry:
    """Metrics registry shared with the dispatcher."""
    return request.app.state.metrics


# ============================================================
# System Endpoints
# ============================================================

@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Report service identity, version and current time."
)
async def health_check(request: Request) -> HealthResponse:
    """
    Perform a health check.

    The service has no external dependencies, so a response at all
    means it is healthy.
    """
    settings = request.app.state.settings
    return HealthResponse(
        status="ok",
        service=settings.api_title,
        version=settings.api_version,
        timestamp=get_timestamp(),
        server_time=get_server_time()
    )


@router.get(
    "/metrics",
    response_model=MetricsResponse,
    summary="Service metrics",
    description="""
    In-memory counters since process start.

    - **uptime_seconds**: seconds since the service started
    - **requests_total**: synthesis requests received
    - **active_sessions**: synthesis requests currently running
    - **quantum_jobs_run**: synthesis requests completed successfully
    """
)
async def get_service_metrics(
    metrics: MetricsRegistry = Depends(get_metrics)
) -> MetricsResponse:
    """Return a consistent snapshot of every counter."""
    return MetricsResponse(metrics=MetricsSnapshot(**metrics.snapshot()))


# ============================================================
# Quantum/AI Endpoints
# ============================================================

@api_router.post(
    "/quantum/process",
    response_model=ProcessResponse,
    summary="Quantum-inspired processing",
    description="""
    Wrap the input in the label selected by mode and append a random
    number in 0..9999.

    Known modes: superposition, entanglement, quantum-walk,
    deep-neuro-synth. Other modes use the "Classic" label; an omitted
    mode uses the configured default.
    """,
    responses=ERROR_RESPONSES
)
def process_quantum(
    payload: ProcessRequest,
    dispatcher: QuantumDispatcher = Depends(get_dispatcher)
) -> ProcessResponse:
    """Run the process transform for one request."""
    result = dispatcher.process_quantum_data(payload)
    return ProcessResponse(status="success", result=result)


@api_router.get(
    "/models",
    response_model=ModelsResponse,
    summary="List models",
    description="Names of the available quantum/AI models."
)
async def list_models() -> ModelsResponse:
    """Return the available model names."""
    logger.debug("Listing available models")
    return ModelsResponse(models=available_models())


@api_router.post(
    "/inference",
    response_model=InferenceResponse,
    summary="Run inference",
    description="Run a simulated inference of data with the given model.",
    responses=ERROR_RESPONSES
)
def run_inference(
    payload: InferenceRequest,
    dispatcher: QuantumDispatcher = Depends(get_dispatcher)
) -> InferenceResponse:
    """Run one inference request."""
    return InferenceResponse(output=dispatcher.run_inference(payload))


@api_router.post(
    "/quantum/matrix",
    response_model=MatrixResponse,
    status_code=status.HTTP_200_OK,
    summary="Noise matrix",
    description="Generate a size x size matrix of quantum-inspired noise (size 2..128).",
    responses=ERROR_RESPONSES
)
def quantum_matrix(
    payload: MatrixRequest,
    dispatcher: QuantumDispatcher = Depends(get_dispatcher)
) -> MatrixResponse:
    """Generate one noise matrix."""
    return MatrixResponse(status="success", result=dispatcher.synthesize_matrix(payload))


@api_router.post(
    "/quantum/collapse",
    response_model=CollapseResponse,
    summary="Collapse values",
    description="Map each value to 1 if its magnitude exceeds threshold, else 0.",
    responses=ERROR_RESPONSES
)
def quantum_collapse(
    payload: CollapseRequest,
    dispatcher: QuantumDispatcher = Depends(get_dispatcher)
) -> CollapseResponse:
    """Collapse one sequence."""
    return CollapseResponse(status="success", result=dispatcher.collapse_data(payload))
