from .decompose import MalformedUrlError, StyleDescriptor, decompose, decompose_all
from .transform import (InputCardinalityError, InvalidValueError, TemplateShapeError,
                        TemplateTransformer, TransformError, transform)

__all__ = ["MalformedUrlError", "StyleDescriptor", "decompose", "decompose_all",
           "InputCardinalityError", "InvalidValueError", "TemplateShapeError",
           "TemplateTransformer", "TransformError", "transform"]
