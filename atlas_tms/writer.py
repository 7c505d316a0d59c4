import logging
from pathlib import Path

from lxml import etree

logger = logging.getLogger(__name__)

MAPSOURCES_DIR = 'Mapsources'


class WriteError(Exception):
    pass


def serialize(tree) -> bytes:
    return etree.tostring(tree, pretty_print=True, xml_declaration=True,
                          encoding='UTF-8', standalone=True)


def write_tms(tree, repository, filename='Atlas') -> Path:
    """Write ``tree`` to ``<repository>/Mapsources/<filename>.tms``."""
    if not filename.endswith('.tms'):
        filename = f"{filename}.tms"
    out_dir = Path(repository) / MAPSOURCES_DIR
    out_path = out_dir / filename
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
        out_path.write_bytes(serialize(tree))
    except OSError as e:
        raise WriteError(f"Could not write {out_path}: {e}") from e
    logger.info(f"Wrote {out_path}")
    return out_path
