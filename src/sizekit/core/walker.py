"""Collect image sizes for every node of a version tree."""

import logging
from typing import Optional

from sizekit import constants
from sizekit.exceptions import ConfigurationError, VersionNameCollisionError
from sizekit.io.image_size import ImageSize
from sizekit.io.probe import SizeProbe
from sizekit.io.version_tree import VersionNode
from sizekit.logging_utils import capture_context

logger = logging.getLogger(__name__)


def collect_sizes(
    node: VersionNode,
    probe: SizeProbe,
    on_collision: str = constants.COLLISION_OVERWRITE,
) -> dict[str, ImageSize]:
    """Probe ``node`` and all of its descendant versions.

    The tree is visited depth first, parents before children, children in
    the order ``versions()`` returns them. Nodes without a stored file or
    whose probe fails are left out of the result; their descendants are
    still visited.

    Args:
        node: Root of the tree to walk (normally the ``base`` node).
        probe: Size probe run once per node with a stored file.
        on_collision: ``"overwrite"`` keeps the last size seen for a repeated
            name, ``"error"`` raises VersionNameCollisionError.

    Returns:
        Mapping of version name to size.
    """
    if on_collision not in constants.COLLISION_POLICIES:
        raise ConfigurationError(f"Unknown collision policy: {on_collision}")

    sizes: dict[str, ImageSize] = {}
    _collect(node, probe, on_collision, sizes, set())
    logger.debug("Collected %d size(s) for version tree %r", len(sizes), node.version_name)
    return sizes


def _collect(
    node: VersionNode,
    probe: SizeProbe,
    on_collision: str,
    sizes: dict[str, ImageSize],
    seen: set[str],
) -> None:
    name = node.version_name
    if name in seen:
        if on_collision == constants.COLLISION_ERROR:
            raise VersionNameCollisionError(name)
        logger.warning("Version name %r appears more than once; later size wins", name)
    seen.add(name)

    with capture_context(name):
        size = _probe_node(node, probe)
    if size is not None:
        sizes[name] = size

    for child in node.versions().values():
        _collect(child, probe, on_collision, sizes, seen)


def _probe_node(node: VersionNode, probe: SizeProbe) -> Optional[ImageSize]:
    path = node.current_path
    if not path:
        logger.debug("Version %r has no stored file; skipping", node.version_name)
        return None
    try:
        size = probe.probe(str(path))
    except Exception as exc:
        logger.warning("Size probe raised for %s: %s", path, exc)
        return None
    if size is None:
        logger.info("No size for version %r (%s)", node.version_name, path)
    return size
