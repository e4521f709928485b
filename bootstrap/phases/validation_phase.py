# guest_config_agent/bootstrap/phases/validation_phase.py
from __future__ import annotations
import logging

from bootstrap.exceptions import ValidationError
from bootstrap.states import BootstrapState
from domain.models import ConfigDocument
from .base_phase import BootstrapPhase, PhaseResult

logger = logging.getLogger(__name__)


class ValidationPhase(BootstrapPhase):
    """
    Parses the received file. Nothing downstream reads a field before this
    phase has accepted the whole document; on success the decoded document
    is stored on the context, read-only.
    """

    STATE = BootstrapState.VALIDATING

    async def execute(self, context) -> PhaseResult:
        path = context.document_path
        try:
            data = context.extractor.load(path)
        except ValidationError as e:
            logger.error(f'{path} is invalid, the decoder reports the following')
            logger.error(e.diagnostic)
            raise

        context.document = ConfigDocument.from_decoded(data)
        return PhaseResult.success_result(
            message=f'{path} is well-formed',
            metadata={'top_level_keys': sorted(data) if isinstance(data, dict) else []}
        )
