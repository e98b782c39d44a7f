"""Helpers for locating the ImageMagick ``identify`` tool."""

import logging
import os
import shutil
import subprocess
import sys

from sizekit import constants

logger = logging.getLogger(__name__)


def _exe_names(names: list[str]) -> list[str]:
    if sys.platform == "win32":
        return [f"{name}.exe" for name in names] + names
    return names


def get_identify_command() -> list[str]:
    """Return the command prefix used to run ``identify``.

    Resolution order is the ``SIZEKIT_IDENTIFY_EXE`` environment variable,
    ``identify`` on PATH (ImageMagick 6), then ``magick identify``
    (ImageMagick 7). Falls back to a bare ``identify`` so the failure shows
    up as a launch error at probe time.
    """
    env_exe = os.environ.get("SIZEKIT_IDENTIFY_EXE")
    if env_exe:
        return [env_exe]

    for name in _exe_names(constants.IDENTIFY_EXECUTABLES):
        path_exe = shutil.which(name)
        if path_exe:
            return [path_exe]

    for name in _exe_names(constants.MAGICK_EXECUTABLES):
        path_exe = shutil.which(name)
        if path_exe:
            logger.debug("Using ImageMagick 7 front end: %s", path_exe)
            return [path_exe, "identify"]

    logger.debug("No identify executable found on PATH; falling back to 'identify'.")
    return ["identify"]


def popen_kwargs(prevent_sigint: bool = True) -> dict[str, object]:
    """Return subprocess kwargs tuned for probe execution."""
    kwargs: dict[str, object] = {}
    if prevent_sigint:
        if os.name == "nt":
            kwargs["creationflags"] = subprocess.CREATE_NEW_PROCESS_GROUP
        else:
            kwargs["start_new_session"] = True
    return kwargs
