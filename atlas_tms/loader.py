import json
from pathlib import Path

from jsonschema import validate, ValidationError
from lxml import etree

PACKAGE_DIR = Path(__file__).parent
DEFAULT_TEMPLATE = PACKAGE_DIR / 'templates' / 'Template.tms'
DEFAULT_SCHEMA = PACKAGE_DIR / 'schema' / 'batch_schema.json'


class TemplateLoadError(Exception):
    pass


class BatchLoadError(Exception):
    pass


def load_template(path=None):
    """Parse a mapsource template, the packaged Template.tms by default."""
    p = Path(path) if path is not None else DEFAULT_TEMPLATE
    if not p.exists():
        raise TemplateLoadError(f"Template file not found: {p}")
    parser = etree.XMLParser(remove_blank_text=True)
    try:
        with p.open('rb') as f:
            return etree.parse(f, parser)
    except etree.XMLSyntaxError as e:
        raise TemplateLoadError(f"Template {p} is not valid XML: {e}") from e
    except OSError as e:
        raise TemplateLoadError(f"Could not read template {p}: {e}") from e


class StyleBatch:
    def __init__(self, urls, names, repository=None, filename=None):
        self.urls = urls
        self.names = names
        self.repository = repository
        self.filename = filename

    @staticmethod
    def load(path, schema_path=None):
        p = Path(path)
        if not p.exists():
            raise BatchLoadError(f"Batch file not found: {path}")
        try:
            data = json.loads(p.read_text(encoding='utf-8'))
        except json.JSONDecodeError as e:
            raise BatchLoadError(f"Batch file {path} is not valid JSON: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise BatchLoadError(f"Could not read batch file {path}: {e}") from e
        schema_file = Path(schema_path or DEFAULT_SCHEMA)
        try:
            schema = json.loads(schema_file.read_text(encoding='utf-8'))
        except (OSError, ValueError) as e:
            raise BatchLoadError(f"Could not read schema {schema_file}: {e}") from e
        try:
            validate(instance=data, schema=schema)
        except ValidationError as e:
            raise BatchLoadError(f"Schema validation failed: {e.message}") from e
        styles = data['styles']
        return StyleBatch([s['url'] for s in styles],
                          [s['name'] for s in styles],
                          data.get('repository'),
                          data.get('filename'))
