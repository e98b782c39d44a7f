"""Size probes reporting the pixel dimensions of a stored file."""

import logging
import subprocess
from abc import ABC, abstractmethod
from typing import Callable, Optional, Sequence

from sizekit import constants
from sizekit.core.codec import parse_dimensions
from sizekit.core.config import TrackerConfig
from sizekit.core.identify_utils import get_identify_command, popen_kwargs
from sizekit.exceptions import ConfigurationError, ProbeError
from sizekit.io.image_size import ImageSize

logger = logging.getLogger(__name__)


class SizeProbe(ABC):
    """Abstract base class for size probes.

    ``probe`` never raises: any failure is reported as None.
    """

    @abstractmethod
    def probe(self, path: str) -> Optional[ImageSize]:
        """Return the size of the image at ``path``, or None."""
        pass

    def __call__(self, path: str) -> Optional[ImageSize]:
        return self.probe(path)


class IdentifyProbe(SizeProbe):
    """Probe backed by ImageMagick's ``identify -format "%wx%h"``.

    One process is spawned per call. Only the first output line is used,
    so multi-frame files report the size of their first frame.
    """

    def __init__(
        self,
        command: Optional[Sequence[str]] = None,
        timeout: Optional[float] = constants.DEFAULT_PROBE_TIMEOUT,
    ) -> None:
        self._command = list(command) if command else None
        self.timeout = timeout

    @property
    def command(self) -> list[str]:
        if self._command is None:
            self._command = get_identify_command()
        return self._command

    def _run(self, path: str) -> str:
        cmd = [*self.command, "-format", constants.IDENTIFY_FORMAT, path]
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                **popen_kwargs(prevent_sigint=True),
            )
        except subprocess.TimeoutExpired as e:
            raise ProbeError(f"identify timed out after {self.timeout}s on {path}") from e
        except (OSError, ValueError) as e:
            raise ProbeError(f"Unable to launch {self.command[0]}: {e}") from e

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise ProbeError(f"identify exited with {result.returncode} on {path}: {stderr}")
        return result.stdout or ""

    def probe(self, path: str) -> Optional[ImageSize]:
        try:
            output = self._run(path)
        except ProbeError as exc:
            logger.warning("%s", exc)
            return None

        lines = output.splitlines()
        first_line = lines[0] if lines else ""
        if not first_line.strip():
            logger.debug("identify printed nothing for %s", path)
            return None

        size = parse_dimensions(first_line)
        if size is None:
            logger.warning("Unexpected identify output for %s: %r", path, first_line)
        return size


class OIIOProbe(SizeProbe):
    """Probe reading the image header with OpenImageIO."""

    def probe(self, path: str) -> Optional[ImageSize]:
        try:
            import OpenImageIO as oiio
        except ImportError:
            logger.warning("OpenImageIO library not available; cannot probe %s", path)
            return None

        try:
            inp = oiio.ImageInput.open(str(path))
        except Exception as exc:
            logger.warning("OIIO failed to open %s: %s", path, exc)
            return None
        if not inp:
            logger.warning("OIIO failed to open %s: %s", path, oiio.geterror())
            return None
        try:
            spec = inp.spec()
            return ImageSize(int(spec.width), int(spec.height))
        except (ValueError, TypeError) as exc:
            logger.warning("OIIO returned an unusable size for %s: %s", path, exc)
            return None
        finally:
            inp.close()


class CallableProbe(SizeProbe):
    """Adapt a plain ``path -> (width, height) | None`` function."""

    def __init__(self, func: Callable[[str], Optional[Sequence[int]]]) -> None:
        self._func = func

    def probe(self, path: str) -> Optional[ImageSize]:
        try:
            result = self._func(path)
            if result is None:
                return None
            width, height = result
            return ImageSize(int(width), int(height))
        except Exception as exc:
            logger.warning("Size probe failed for %s: %s", path, exc)
            return None


def create_probe(config: Optional[TrackerConfig] = None) -> SizeProbe:
    """Create the probe selected by ``config.probe_backend``."""
    config = config or TrackerConfig()
    if config.probe_backend == constants.PROBE_BACKEND_IDENTIFY:
        return IdentifyProbe(command=config.identify_command, timeout=config.probe_timeout)
    if config.probe_backend == constants.PROBE_BACKEND_OIIO:
        return OIIOProbe()
    raise ConfigurationError(f"Unknown probe backend: {config.probe_backend}")
