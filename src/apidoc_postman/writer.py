"""Writes the built collection to disk."""

import json
import logging
from pathlib import Path

from apidoc_postman.generator.collection import CollectionDocument

logger = logging.getLogger(__name__)

OUTPUT_FILENAME = "postman.json"


def write_collection(
    document: CollectionDocument,
    dest_dir: Path,
    simulate: bool = False,
    indent: int | None = None,
) -> Path:
    """Write document to ``dest_dir/postman.json`` and return that path.

    With simulate, nothing is created on disk.
    """
    if simulate:
        logger.warning("!!! Simulation !!! No file or dir will be copied or created.")

    output = dest_dir / OUTPUT_FILENAME
    text = json.dumps(document.to_dict(), indent=indent, ensure_ascii=False)

    logger.info("create dir: %s", dest_dir)
    if not simulate:
        dest_dir.mkdir(parents=True, exist_ok=True)

    logger.info("write postman json file: %s", output)
    if not simulate:
        output.write_text(text, encoding="utf-8")

    return output
