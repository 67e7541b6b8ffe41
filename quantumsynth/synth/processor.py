"""
Request dispatcher for quantum-inspired processing.

Validates inbound requests, runs the selected transform and packages
a timestamped result or a typed error. Every dispatch is counted in
the MetricsRegistry: a request on entry, an active session while the
job runs, and a completed job on success.
"""

import logging
from typing import Any, Callable, TypeVar

import numpy as np

from ..core.config import KNOWN_MODES, Settings
from ..core.exceptions import InternalFailureError, InvalidArgumentError, SynthError
from ..core.metrics import MetricsRegistry
from ..core.utils import truncate_string, utc_now
from ..models.schemas import (
    CollapseRequest,
    CollapseResult,
    InferenceRequest,
    InferenceResult,
    MatrixRequest,
    MatrixResult,
    ProcessRequest,
    ProcessResult,
    QuantumMode,
)
from .quantum import collapse, random_matrix

logger = logging.getLogger(__name__)

T = TypeVar("T")

MODE_LABELS = {
    QuantumMode.SUPERPOSITION.value: "Superposed",
    QuantumMode.ENTANGLEMENT.value: "Entangled",
    QuantumMode.QUANTUM_WALK.value: "QuantumWalked",
    QuantumMode.DEEP_NEURO_SYNTH.value: "DeepNeuroSynthesized",
}
DEFAULT_LABEL = "Classic"

PROCESS_RANGE = 10000
INFERENCE_RANGE = 100000


def available_models() -> list[str]:
    """Return the list of available quantum/AI models."""
    return list(KNOWN_MODES)


def label_for_mode(mode: str) -> str:
    """Label applied for mode; unknown modes get the classic label."""
    return MODE_LABELS.get(mode, DEFAULT_LABEL)


class QuantumDispatcher:
    """
    Runs synthesis operations on behalf of the API.

    Each call is stateless apart from the metrics it records. Random
    draws come from a fresh generator per call, built by rng_factory.
    """

    def __init__(
        self,
        settings: Settings,
        metrics: MetricsRegistry,
        rng_factory: Callable[[], np.random.Generator] = np.random.default_rng,
    ):
        self.settings = settings
        self.metrics = metrics
        self.default_mode = settings.quantum.default_mode
        self.max_jobs = settings.quantum.max_jobs
        self._rng_factory = rng_factory

    # ------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------

    def process_quantum_data(self, request: ProcessRequest) -> ProcessResult:
        """
        Apply the quantum-inspired transform selected by request.mode.

        Raises:
            InvalidArgumentError: If request.input is empty
            InternalFailureError: If synthesis fails unexpectedly
        """
        return self._dispatch("process", "Processing failed", self._process, request)

    def run_inference(self, request: InferenceRequest) -> str:
        """
        Run a simulated inference with the named model.

        Raises:
            InvalidArgumentError: If model or data is empty
            InternalFailureError: If synthesis fails unexpectedly
        """
        return self._dispatch("inference", "Inference failed", self._infer, request).output

    def synthesize_matrix(self, request: MatrixRequest) -> MatrixResult:
        """Generate a size x size noise matrix."""
        return self._dispatch("matrix", "Matrix synthesis failed", self._matrix, request)

    def collapse_data(self, request: CollapseRequest) -> CollapseResult:
        """Collapse request.data against request.threshold."""
        return self._dispatch("collapse", "Collapse failed", self._collapse, request)

    # ------------------------------------------------------------
    # Dispatch plumbing
    # ------------------------------------------------------------

    def _dispatch(
        self,
        operation: str,
        failure: str,
        handler: Callable[[Any], T],
        request: Any,
    ) -> T:
        self.metrics.record_request()
        with self.metrics.session(self.max_jobs):
            try:
                result = handler(request)
            except InvalidArgumentError as e:
                logger.warning(f"Invalid {operation} request: {e.detail}")
                raise
            except SynthError:
                raise
            except Exception as e:
                logger.error(f"{failure}: {e}", exc_info=True)
                raise InternalFailureError(str(e) or type(e).__name__, error=failure) from e
        self.metrics.record_job()
        return result

    def _draw(self, upper: int) -> int:
        return int(self._rng_factory().integers(0, upper))

    def _process(self, request: ProcessRequest) -> ProcessResult:
        if not request.input:
            raise InvalidArgumentError("empty input")

        mode = request.mode or self.default_mode
        logger.info(
            f"Processing quantum-inspired data: mode={mode} "
            f"input={truncate_string(request.input, 80)!r}"
        )

        output = f"{label_for_mode(mode)}({request.input}):{self._draw(PROCESS_RANGE)}"
        return ProcessResult(output=output, timestamp=utc_now())

    def _infer(self, request: InferenceRequest) -> InferenceResult:
        if not request.model or not request.data:
            raise InvalidArgumentError("model and data are required")

        logger.info(
            f"Running inference: model={request.model} "
            f"data={truncate_string(request.data, 80)!r}"
        )

        output = f"Inference({request.model}) on {request.data}: {self._draw(INFERENCE_RANGE)}"
        return InferenceResult(output=output, model=request.model, timestamp=utc_now())

    def _matrix(self, request: MatrixRequest) -> MatrixResult:
        logger.info(f"Synthesizing {request.size}x{request.size} noise matrix")
        matrix = random_matrix(request.size)
        return MatrixResult(matrix=matrix.tolist(), timestamp=utc_now())

    def _collapse(self, request: CollapseRequest) -> CollapseResult:
        logger.debug(f"Collapsing {len(request.data)} values at threshold {request.threshold}")
        return CollapseResult(
            collapsed=collapse(request.data, request.threshold),
            timestamp=utc_now()
        )

