import copy
import dataclasses
import logging
from typing import Dict, List, Sequence

from lxml import etree

from .decompose import StyleDescriptor

logger = logging.getLogger(__name__)

WAIT_TILE_COLOR = '#dddddd'
DEFAULT_WASHOUT = '0'


class TransformError(Exception):
    pass


class InputCardinalityError(TransformError):
    pass


class TemplateShapeError(TransformError):
    pass


class InvalidValueError(TransformError):
    pass


class TemplateTransformer:
    """Rewrites a Tableau mapsource template for a list of Atlas styles.

    Five parts of the template are replaced:

    - ``connection``: API connection attributes, taken from the first style only
      since a mapsource holds a single connection
    - ``layers``: one ``layer`` per style
    - ``map-styles``: one ``map-style`` per style, each with a ``map-layer-style``
    - ``mapsource-defaults/style``: one ``style-rule`` per style

    The list entries follow the order of ``styles``, with ``names[i]`` as the
    display name of ``styles[i]``.
    """

    def __init__(self, styles: Sequence[StyleDescriptor], names: Sequence[str]):
        if len(styles) != len(names):
            raise InputCardinalityError(
                f"got {len(styles)} style(s) but {len(names)} name(s)")
        if not styles:
            raise InputCardinalityError("at least one style is required")
        for index, (style, name) in enumerate(zip(styles, names)):
            _check_xml_text(f"name {index}", name)
            for field in dataclasses.fields(style):
                _check_xml_text(f"style {index} {field.name}", getattr(style, field.name))
        self.styles = list(styles)
        self.names = list(names)

    def apply(self, template):
        """Return a rewritten copy of ``template`` (an ElementTree or its root)."""
        tree = copy.deepcopy(template)
        root = tree.getroot() if isinstance(tree, etree._ElementTree) else tree
        nodes = self._locate(root)

        self._edit_connection(nodes['connection'])
        self._edit_layers(nodes['layers'])
        self._edit_map_styles(nodes['map-styles'])
        self._edit_defaults(nodes['mapsource-defaults/style'])
        logger.debug("Rewrote template for %d style(s)", len(self.styles))
        return tree

    @staticmethod
    def _locate(root) -> Dict[str, etree._Element]:
        # everything is found before anything is edited
        if root.tag != 'mapsource':
            raise TemplateShapeError(f"template root is <{root.tag}>, expected <mapsource>")
        nodes = {}
        for path in ('connection', 'layers', 'map-styles', 'mapsource-defaults/style'):
            node = root.find(path)
            if node is None:
                raise TemplateShapeError(f"template has no mapsource/{path} element")
            nodes[path] = node
        return nodes

    def _edit_connection(self, connection):
        first = self.styles[0]
        connection.set('api-key', first.token)
        connection.set('server', first.server_url)
        connection.set('url', first.api_path)
        connection.set('port', first.port)
        connection.set('username', first.username)
        connection.set('url-format', first.url_format)

    def _edit_layers(self, layers):
        _remove_children(layers, 'layer')
        for style, name in zip(self.styles, self.names):
            etree.SubElement(layers, 'layer', {
                'display-name': name,
                'name': style.style_id,
                'show-ui': 'true',
                'type': 'features',
            })

    def _edit_map_styles(self, map_styles):
        _remove_children(map_styles, 'map-style')
        for style, name in zip(self.styles, self.names):
            map_style = etree.SubElement(map_styles, 'map-style', {
                'display-name': name,
                'name': style.style_url,
                'wait-tile-color': WAIT_TILE_COLOR,
            })
            etree.SubElement(map_style, 'map-layer-style', {
                'name': name,
                'request-string': style.style_id,
            })

    def _edit_defaults(self, default_style):
        _remove_children(default_style, 'style-rule')
        for style in self.styles:
            rule = etree.SubElement(default_style, 'style-rule', {'element': 'map'})
            etree.SubElement(rule, 'format', {'attr': 'map-style', 'value': style.style_url})
            etree.SubElement(rule, 'format', {'attr': 'washout', 'value': DEFAULT_WASHOUT})


def _check_xml_text(label, value):
    try:
        etree.Element('check', value=value)
    except (TypeError, ValueError) as e:
        raise InvalidValueError(f"{label} cannot be written to XML: {value!r}") from e


def _remove_children(parent, tag):
    for child in parent.findall(tag):
        parent.remove(child)


def transform(template, styles: List[StyleDescriptor], names: List[str]):
    return TemplateTransformer(styles, names).apply(template)
