"""This module provides a function to load JSON documents such as level files."""

import json
from pathlib import Path

from regionnav.utils.logger import Logger


def load_json(file_path: str):
    """Load a JSON file from a specific path.

    Args:
        file_path: The path to the JSON file to load.

    Returns:
        The JSON data from the file.

    Raises:
        FileNotFoundError: If the file does not exist or cannot be read.
        ValueError: If the file is not valid JSON.
    """
    path = Path(file_path)
    logger = Logger.get_logger('JsonLoader')
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (FileNotFoundError, IOError) as e:
        raise FileNotFoundError(f"Could not load JSON file from '{file_path}'") from e
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in '{file_path}': {e}") from e
    logger.debug(f'Loaded {path.name}')
    return data
