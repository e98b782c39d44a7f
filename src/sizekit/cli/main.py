"""CLI interface for sizekit."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from sizekit import __version__, constants
from sizekit.api.store import MappingStore, info_field_name
from sizekit.api.tracker import ImageSizeTracker
from sizekit.core import codec
from sizekit.core.config import TrackerConfig, TrackerConfigBuilder
from sizekit.exceptions import SizeKitError
from sizekit.io.probe import create_probe
from sizekit.io.version_tree import AttachmentNode
from sizekit.logging_utils import setup_logging

logger = logging.getLogger("sizekit.cli.main")

_CLI_ATTACHMENT = "image"


def _build_tree(base_path: str, versions: tuple[str, ...], base_name: str) -> AttachmentNode:
    root = AttachmentNode(base_path, name=base_name)
    for spec in versions:
        key_path, sep, path = spec.partition("=")
        if not sep or not key_path or not path:
            raise click.BadParameter(f"Expected KEY=PATH, got {spec!r}", param_hint="--version")
        *parents, key = key_path.split("/")
        try:
            parent = root.version(*parents)
            parent.add_version(key, path)
        except (KeyError, ValueError) as e:
            raise click.BadParameter(str(e), param_hint="--version") from e
    return root


def _probe_config(probe_backend: str, timeout: Optional[float]) -> TrackerConfigBuilder:
    builder = TrackerConfigBuilder().with_probe_backend(probe_backend)
    if timeout is not None:
        builder.with_probe_timeout(timeout)
    return builder


@click.group()
@click.version_option(__version__)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Logging level (default: SIZEKIT_LOG_LEVEL or INFO).",
)
def main(log_level: Optional[str]) -> None:
    """sizekit - cached image sizes for attachments and their versions."""
    level = getattr(logging, log_level.upper()) if log_level else None
    setup_logging(level=level)


@main.command()
@click.argument("paths", nargs=-1, required=True)
@click.option(
    "--probe-backend",
    type=click.Choice(sorted(constants.PROBE_BACKENDS)),
    default=constants.PROBE_BACKEND_IDENTIFY,
    show_default=True,
)
@click.option("--timeout", type=float, default=None, help="Per-file probe timeout in seconds.")
def probe(paths: tuple[str, ...], probe_backend: str, timeout: Optional[float]) -> None:
    """Print the pixel size of each file in PATHS."""
    try:
        size_probe = create_probe(_probe_config(probe_backend, timeout).build())
    except SizeKitError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    failed = False
    for path in paths:
        size = size_probe.probe(path)
        if size is None:
            failed = True
            click.echo(f"{path}: unknown")
        else:
            click.echo(f"{path}: {size}")
    if failed:
        sys.exit(1)


@main.command()
@click.argument("base_path", type=str)
@click.option(
    "--version",
    "versions",
    multiple=True,
    metavar="KEY=PATH",
    help="Derived version file. Use parent/child=PATH for nested versions.",
)
@click.option("--content-type", type=str, default="", help="Content type of the upload.")
@click.option(
    "--previous",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Existing record to carry the content type forward from.",
)
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the record to a file instead of stdout.",
)
@click.option(
    "--probe-backend",
    type=click.Choice(sorted(constants.PROBE_BACKENDS)),
    default=constants.PROBE_BACKEND_IDENTIFY,
    show_default=True,
)
@click.option("--timeout", type=float, default=None, help="Per-file probe timeout in seconds.")
@click.option(
    "--fail-on-collision",
    is_flag=True,
    default=False,
    help="Fail when two versions resolve to the same name.",
)
def capture(
    base_path: str,
    versions: tuple[str, ...],
    content_type: str,
    previous: Optional[Path],
    output: Optional[Path],
    probe_backend: str,
    timeout: Optional[float],
    fail_on_collision: bool,
) -> None:
    """Probe BASE_PATH and its versions and print the metadata record.

    Examples:

    \b
        sizekit capture pic.png --version thumb=thumb_pic.png --content-type image/png

    \b
        # Nested version, keeping the content type of an earlier record
        sizekit capture pic.png --version thumb=t.png --version thumb/tiny=tt.png \\
            --previous pic_information.txt
    """
    try:
        builder = _probe_config(probe_backend, timeout)
        if fail_on_collision:
            builder.with_collision_policy(constants.COLLISION_ERROR)
        config: TrackerConfig = builder.build()

        root = _build_tree(base_path, versions, config.base_name)
        field = info_field_name(_CLI_ATTACHMENT, config.field_suffix)
        fields = {field: previous.read_text(encoding="utf-8") if previous else None}
        store = MappingStore(fields, _CLI_ATTACHMENT, suffix=config.field_suffix)
        tracker = ImageSizeTracker(root, store, config=config)
        record = tracker.capture(content_type)
    except SizeKitError as e:
        logger.error("Capture failed: %s", e)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if output is not None:
        output.write_text(record, encoding="utf-8")
        logger.info("Record written to %s", output)
        click.echo(f"Record written to: {output}")
    else:
        click.echo(record, nl=False)


@main.command()
@click.argument("record_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--version",
    "names",
    multiple=True,
    metavar="NAME",
    help="Only print these versions (default: all).",
)
@click.option("--strict", is_flag=True, default=False, help="Fail on malformed records.")
def decode(record_file: Path, names: tuple[str, ...], strict: bool) -> None:
    """Print the content type and sizes stored in RECORD_FILE."""
    record = record_file.read_text(encoding="utf-8")
    if strict:
        try:
            codec.validate_record(record)
        except SizeKitError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)

    click.echo(f"content_type: {codec.decode_content_type(record)}")
    if names:
        missing = False
        for name in names:
            size = codec.decode_size(record, name)
            if size is None:
                missing = True
            click.echo(f"{name}: {size if size is not None else 'unknown'}")
        if missing:
            sys.exit(1)
        return

    for name, size in codec.decode_sizes(record).items():
        click.echo(f"{name}: {size}")


if __name__ == "__main__":
    main()
