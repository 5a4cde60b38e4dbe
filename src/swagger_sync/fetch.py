"""Load a raw API description from a URL or a local file."""

import logging
from pathlib import Path

import requests
import yaml

from swagger_sync.errors import FetchError

logger = logging.getLogger(__name__)

TIMEOUT = 30


def load_document(source: str) -> dict:
    """Return the parsed Swagger document at ``source``.

    URLs are fetched with a single GET; anything else is read as a YAML or
    JSON file. Failures are raised as FetchError and never retried.
    """
    if source.startswith(("http://", "https://")):
        return _fetch_url(source)
    return _read_file(Path(source))


def _fetch_url(url: str) -> dict:
    logger.info("Fetching %s", url)
    try:
        response = requests.get(url, timeout=TIMEOUT)
        response.raise_for_status()
        return response.json()
    except requests.RequestException as e:
        raise FetchError(url, str(e)) from e
    except ValueError as e:
        raise FetchError(url, f"invalid JSON: {e}") from e


def _read_file(file_path: Path) -> dict:
    logger.info("Reading %s", file_path)
    try:
        doc = yaml.safe_load(file_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise FetchError(str(file_path), str(e)) from e
    except yaml.YAMLError as e:
        raise FetchError(str(file_path), f"invalid document: {e}") from e

    if not isinstance(doc, dict):
        raise FetchError(str(file_path), "document is not a mapping")
    return doc
