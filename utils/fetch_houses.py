# 📦 utils/fetch_houses.py

from pathlib import Path
from typing import List

import structlog
import yaml
from pydantic import ValidationError

from schemas.schemas import House

log = structlog.get_logger()


def load_houses(path) -> List[House]:
    """Load the house directory from a JSON or YAML file."""
    path = Path(path).expanduser()
    if not path.is_file():
        raise FileNotFoundError(f"Houses file not found: {path}")

    log.info("Loading houses", path=str(path))
    with open(path, "r", encoding="utf-8") as f:
        try:
            document = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Could not parse houses file {path}") from e

    if isinstance(document, dict):
        document = document.get("houses")
    if document is None:
        log.warning("Houses file is empty", path=str(path))
        return []
    if not isinstance(document, list):
        raise ValueError(f"Expected a list of houses in {path}")

    try:
        houses = [House.model_validate(h) for h in document]
    except ValidationError as e:
        raise ValueError(f"Invalid house record in {path}") from e

    log.info(f"Successfully loaded {len(houses)} houses.", path=str(path))
    return houses
