# guest_config_agent/bootstrap/__main__.py
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from bootstrap import __version__
from bootstrap.config.bootstrap_config import AgentConfig
from bootstrap.context.bootstrap_context_builder import BootstrapContextBuilder
from bootstrap.exceptions import BootstrapError
from bootstrap.extraction import FieldExtractor
from bootstrap.orchestrator import BootstrapOrchestrator
from configs.config_loader import ConfigLoader
from core.logging_config import configure_logging, stream_for
from infrastructure.decoding.json_decoder import JsonDocumentDecoder

logger = logging.getLogger(__name__)

PROG = 'guest-config-agent'


def print_usage() -> None:
    print(f'Usage: {PROG} <output_file>')
    print(f'       {PROG} --validate <config_file.json>')
    print(f'       {PROG} --query <config_file.json> <expression>')
    print(f'       {PROG} --version')


async def load_agent_config() -> AgentConfig:
    config = await ConfigLoader().load_agent_config()
    configure_logging(config.logging.level, stream_for(config.logging.stream))
    return config


async def run_validate(path: Path) -> int:
    extractor = FieldExtractor(JsonDocumentDecoder())
    try:
        extractor.load(path)
    except BootstrapError as e:
        print(f'Validation: ✗ FAILED\n{e}')
        return 1
    print('Validation: ✓ PASSED')
    return 0


async def run_query(path: Path, expression: str) -> int:
    extractor = FieldExtractor(JsonDocumentDecoder())
    try:
        print(extractor.extract(path, expression))
    except BootstrapError as e:
        logger.error(f'✗ {e}')
        return 1
    return 0


async def run_agent(output_file: Path) -> int:
    try:
        config = await load_agent_config()
        context = BootstrapContextBuilder(config).with_document_path(output_file).build()
    except BootstrapError as e:
        logger.error(f'✗ Cannot start: {e}')
        return 1

    result = await BootstrapOrchestrator(context).run()
    if not result.success:
        logger.error(f'Bootstrap run {result.run_id} ended in {result.final_state.value}')
    return result.exit_code


async def main_cli_entry(argv: List[str]) -> int:
    if not argv:
        print_usage()
        return 1

    if argv[0] == '--version':
        if len(argv) != 1:
            print_usage()
            return 1
        print(f'{PROG} {__version__}')
        return 0

    if argv[0] == '--validate':
        if len(argv) != 2:
            print('Error: --validate requires a configuration file')
            return 1
        return await run_validate(Path(argv[1]))

    if argv[0] == '--query':
        if len(argv) != 3:
            print('Error: --query requires a configuration file and an expression')
            return 1
        return await run_query(Path(argv[1]), argv[2])

    if len(argv) != 1 or argv[0].startswith('--'):
        print_usage()
        return 1

    return await run_agent(Path(argv[0]))


def main(argv: Optional[List[str]] = None) -> int:
    configure_logging('INFO')
    args = sys.argv[1:] if argv is None else argv
    return asyncio.run(main_cli_entry(args))


if __name__ == '__main__':
    sys.exit(main())
