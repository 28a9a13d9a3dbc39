"""Extraction configuration.

A config file is a plain Python module (default ``svextract.config.py`` in
the working directory) that may define a preprocess hook, run over the raw
text of every component before it is parsed:

    # svextract.config.py
    def preprocess(source: str, filename: str) -> str:
        return compile_pug_templates(source)

Python 3.13+.
"""

from __future__ import annotations

import importlib.util
import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from svextract.constants import DEFAULT_CONFIG_FILENAME
from svextract.diagnostics import ConfigError
from svextract.diagnostics.templates import ErrorTemplate
from svextract.enums import OutputFormat

__all__ = [
    "ExtractConfig",
    "Preprocessor",
    "load_preprocessor",
    "resolve_config_path",
]

logger = logging.getLogger(__name__)

type Preprocessor = Callable[[str, str], str]

_CONFIG_MODULE_NAME = "_svextract_user_config"


@dataclass(frozen=True, slots=True)
class ExtractConfig:
    """Options of one extraction run.

    Attributes:
        shallow: Treat message ids as flat keys
        overwrite: Ignore an existing output file instead of seeding from it
        output_format: Rendering of the final dictionary
        config_path: Config module to load the preprocess hook from
            (None: look for the default file in the working directory)
    """

    shallow: bool = False
    overwrite: bool = False
    output_format: OutputFormat = OutputFormat.JSON
    config_path: Path | None = None


def resolve_config_path(path: str | Path | None = None) -> Path:
    """Resolve the config module location.

    Args:
        path: Explicit config file or directory, or None for the default

    Returns:
        Path of the config module (which may not exist)
    """
    if path is None:
        return Path.cwd() / DEFAULT_CONFIG_FILENAME
    resolved = Path(path)
    if resolved.is_dir():
        logger.warning(
            "Config path %s is a directory, using %s inside it",
            resolved,
            DEFAULT_CONFIG_FILENAME,
        )
        return resolved / DEFAULT_CONFIG_FILENAME
    return resolved


def load_preprocessor(path: Path) -> Preprocessor | None:
    """Load the preprocess hook defined by a config module.

    A missing file, or a module without a preprocess attribute, means no
    preprocessing. A module that fails to import is logged and treated as
    absent.

    Args:
        path: Config module path

    Returns:
        The hook, or None

    Raises:
        ConfigError: If preprocess is defined but not callable
    """
    if not path.is_file():
        logger.debug("No config at %s", path)
        return None

    spec = importlib.util.spec_from_file_location(_CONFIG_MODULE_NAME, path)
    if spec is None or spec.loader is None:
        diagnostic = ErrorTemplate.config_load_failed(str(path), "not a Python module")
        logger.warning("%s", diagnostic.message)
        return None

    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as exc:  # noqa: BLE001 - user code may raise anything
        diagnostic = ErrorTemplate.config_load_failed(str(path), repr(exc))
        logger.warning("%s", diagnostic.message)
        return None

    preprocess = getattr(module, "preprocess", None)
    if preprocess is None:
        logger.debug("Config %s defines no preprocess hook", path)
        return None
    if not callable(preprocess):
        raise ConfigError(ErrorTemplate.config_invalid_preprocess(str(path)))

    logger.debug("Loaded preprocess hook from %s", path)
    return preprocess  # type: ignore[no-any-return]
