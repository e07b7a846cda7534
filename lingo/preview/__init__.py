"""WordPress Playground translation preview."""

from .playground import (
    Blueprint,
    PreviewConfig,
    ProjectType,
    build_playground_url,
    generate_blueprint,
    generate_preview_url,
    is_preview_supported,
    map_locale_to_wp_locale,
)

__all__ = [
    "Blueprint",
    "PreviewConfig",
    "ProjectType",
    "build_playground_url",
    "generate_blueprint",
    "generate_preview_url",
    "is_preview_supported",
    "map_locale_to_wp_locale",
]
