import logging
from dataclasses import dataclass

from fieldretype.config import RewriteConfig
from fieldretype.core.printer import gofmt, render
from fieldretype.core.rewrite import RewriteResult, rewrite
from fieldretype.core.select import find_selection
from fieldretype.core.syntax import parse_file
from fieldretype.models import Span

logger = logging.getLogger(__name__)


@dataclass
class RewriteOutcome:
    span: Span
    result: RewriteResult
    output: str


def run_rewrite(config: RewriteConfig) -> RewriteOutcome:
    """Parse, select, rewrite and print one file.

    Returns the rewritten source. The file is only written back when
    ``config.write`` is set and every step succeeded.
    """
    config.validate_options()
    assert config.file is not None

    tree = parse_file(config.file)
    span = find_selection(tree, config.locator)
    logger.info("Selected lines %d-%d of %s", span.start, span.end, config.file)

    result = rewrite(tree, span, config.spec, skip_unexported=config.skip_unexported)
    logger.info("Rewrote %d field(s) from %s to %s", len(result.rewritten), config.spec.from_type, config.spec.to_type)

    output = render(tree)
    if config.gofmt:
        output = gofmt(output, config.gofmt_binary)

    if config.write:
        config.file.write_bytes(output.encode("utf-8"))
        logger.info("Wrote %s", config.file)

    return RewriteOutcome(span=span, result=result, output=output)
