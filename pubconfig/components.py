"""
Build Components

Locates build output produced by the external build so a publication can
reference it.
"""

from pathlib import Path
from typing import Dict, Union

import structlog

from .models import Component

logger = structlog.get_logger(__name__)


def discover_components(build_dir: Union[str, Path] = "build") -> Dict[str, Component]:
    """
    Build the ``java`` component from the jars under ``build_dir/libs``.

    The component exists even before the build has produced any jars; it
    is only a reference, the files are checked at publish time.
    """
    libs_dir = Path(build_dir) / "libs"
    jars = tuple(sorted(libs_dir.glob("*.jar"))) if libs_dir.is_dir() else ()
    if not jars:
        logger.warning("No build output found", libs_dir=str(libs_dir))
    return {"java": Component("java", jars)}
