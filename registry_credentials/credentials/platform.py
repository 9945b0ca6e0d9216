"""Detection of the platform-default native credential helper."""

import logging
import shutil
import sys

from .native_backend import HELPER_PREFIX

logger = logging.getLogger(__name__)


def get_platform_default_helper_suffix() -> str:
    """Return the helper suffix conventional for this platform.

    - macOS: "osxkeychain"
    - Windows: "wincred"
    - Linux: "pass" if the pass program is installed, else "secretservice"

    Returns:
        Helper suffix, or "" on other platforms
    """
    if sys.platform == "darwin":
        return "osxkeychain"
    if sys.platform == "win32":
        return "wincred"
    if sys.platform.startswith("linux"):
        if shutil.which("pass"):
            return "pass"
        return "secretservice"
    return ""


def get_default_helper_suffix() -> str:
    """Return the platform-default helper suffix if its helper is installed.

    Returns:
        Helper suffix, or "" if no usable default exists
    """
    suffix = get_platform_default_helper_suffix()
    if not suffix:
        return ""

    if shutil.which(HELPER_PREFIX + suffix) is None:
        logger.debug(f"Default credential helper {HELPER_PREFIX + suffix} not on PATH")
        return ""

    return suffix
