"""Load corridor obstacle patterns from YAML."""

from pathlib import Path
from typing import Optional, Union

import yaml

from models import PatternSet
from rockrun.logging import get_logger

from ..config import PATTERNS_FILE

log = get_logger('patterns')


def load_patterns(path: Optional[Union[str, Path]] = None) -> PatternSet:
    """Read and validate a pattern file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        yaml.YAMLError: If the YAML syntax is malformed
        pydantic.ValidationError: If the content is invalid
    """
    yaml_path = Path(path) if path is not None else PATTERNS_FILE

    with open(yaml_path, 'r') as f:
        data = yaml.safe_load(f) or {}

    patterns = PatternSet.model_validate(data)
    log.debug("Loaded %d patterns from %s", len(patterns.patterns), yaml_path)
    return patterns
