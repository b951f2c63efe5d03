"""JSX handler-binding normalizer package."""

from .transform import transform, transform_with_report  # noqa: F401
from .api import (  # noqa: F401
    parse_source,
    transform_document,
    transform_source,
)
