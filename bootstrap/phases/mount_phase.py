# guest_config_agent/bootstrap/phases/mount_phase.py
from __future__ import annotations
import logging
from typing import List

from bootstrap.exceptions import MountError, MountFailure
from bootstrap.states import BootstrapState
from domain.ports.errors import CollaboratorError
from .base_phase import BootstrapPhase, PhaseResult

logger = logging.getLogger(__name__)

# mounts[0] is the root filesystem, already mounted by the hypervisor.
FIRST_MOUNT_INDEX = 1


class MountPhase(BootstrapPhase):
    """
    Mounts ``mounts[1:]`` one at a time in document order. Each entry is
    decoded just before it is mounted, so an unreadable entry stops the
    sequence after the entries before it have been mounted.
    """

    STATE = BootstrapState.MOUNTING

    async def execute(self, context) -> PhaseResult:
        logger.info('start mount config')
        document = context.require_document()

        count = context.extractor.mount_count(document)
        mounted: List[str] = []
        for index in range(FIRST_MOUNT_INDEX, count):
            entry = context.extractor.mount_entry(document, index)
            logger.info(f'mount {entry}')
            try:
                await context.mount_admin.mount(entry)
            except (CollaboratorError, OSError) as e:
                raise MountError(
                    MountFailure.MOUNT_FAILED,
                    f'Can not mount {entry.device} at {entry.mount_point}: {e}',
                    index=index,
                ) from e
            mounted.append(entry.mount_point)

        logger.info('end mount config')
        return PhaseResult.success_result(
            message=f'{len(mounted)} filesystem(s) mounted',
            metadata={'mounted': mounted, 'entries_in_document': count}
        )
