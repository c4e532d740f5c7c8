"""CLI helper - chunk a local text file without running the HTTP service.

Usage::

    python -m scripts.chunk_file notes.txt --chunk-size 600 --strategy simple
"""

from __future__ import annotations

import json
import pathlib

import click

from chunking_service.core.config import get_settings
from chunking_service.core.exceptions import ValidationError
from chunking_service.core.log_config import configure_logging
from chunking_service.core.selector import StrategySelector
from chunking_service.core.types import Strategy


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument(
    "path", type=click.Path(exists=True, dir_okay=False, path_type=pathlib.Path)
)
@click.option("--chunk-size", type=click.IntRange(min=1), default=None, help="Target chunk size in characters.")
@click.option(
    "--strategy",
    type=click.Choice([s.value for s in Strategy]),
    default=Strategy.INTELLIGENT.value,
    show_default=True,
)
def main(
    path: pathlib.Path,
    chunk_size: int | None,
    strategy: str,
    selector: StrategySelector | None = None,
) -> None:
    """Split *PATH* into chunks and print them as JSON."""
    settings = get_settings()
    configure_logging(settings.log_level)
    selector = selector or StrategySelector(settings=settings)

    content = path.read_text(encoding="utf-8")
    try:
        result = selector.select(content, chunk_size, strategy)
    except ValidationError as e:
        raise click.ClickException(f"{path}: {e}") from e

    click.echo(
        json.dumps(
            {
                "chunks": list(result.chunks),
                "chunkCount": result.chunk_count,
                "strategy": result.used_strategy.value,
                "degradationReason": result.degradation_reason.value,
                "contentLength": len(content),
            },
            ensure_ascii=False,
            indent=2,
        )
    )


if __name__ == "__main__":  # pragma: no cover
    main()
