"""
WordPress Playground blueprints for translation preview.

A blueprint is a JSON list of setup steps that Playground replays to boot a
WordPress site with the project installed and our PO file in place. Building
it is pure data assembly; the URL is handed to the browser as-is.
"""

import base64
import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional
from urllib.parse import quote, unquote, urlencode

from ..config import config
from ..errors import PreviewError, UnsupportedPreviewTargetError
from ..models.session import TranslationForPreview
from ..po.encoder import create_po_entries, generate_po_content
from ..po.plurals import get_nplurals, get_plural_forms

logger = logging.getLogger(__name__)

LANGUAGES_DIR = "/wordpress/wp-content/languages"

PLUGIN_MARKER = "wp-plugins"
THEME_MARKER = "wp-themes"

# GlotPress uses lowercase-hyphen codes, WordPress uses underscore-titlecase
LOCALE_MAP = {
    # Regional variants
    "pt-br": "pt_BR",
    "zh-cn": "zh_CN",
    "zh-tw": "zh_TW",
    "es-mx": "es_MX",
    "es-ar": "es_AR",
    "es-ve": "es_VE",
    "es-co": "es_CO",
    "es-cl": "es_CL",
    "es-pe": "es_PE",
    "en-gb": "en_GB",
    "en-au": "en_AU",
    "en-ca": "en_CA",
    "fr-ca": "fr_CA",
    "fr-be": "fr_BE",
    "nl-be": "nl_BE",
    "de-ch": "de_CH",
    "de-at": "de_AT",

    # Simple mappings
    "es": "es_ES",
    "fr": "fr_FR",
    "de": "de_DE",
    "it": "it_IT",
    "nl": "nl_NL",
    "pt": "pt_PT",
    "ru": "ru_RU",
    "ja": "ja",
    "ar": "ar",
    "he": "he_IL",
    "ko": "ko_KR",
    "pl": "pl_PL",
    "tr": "tr_TR",
    "cs": "cs_CZ",
    "hu": "hu_HU",
    "ro": "ro_RO",
    "sv": "sv_SE",
    "da": "da_DK",
    "fi": "fi",
    "no": "nb_NO",
    "uk": "uk",
    "vi": "vi",
    "th": "th",
    "id": "id_ID",
    "el": "el",
}


class ProjectType(str, Enum):
    """Kind of WordPress package a GlotPress project translates."""
    PLUGIN = "plugin"
    THEME = "theme"
    CORE = "core"


@dataclass
class PreviewConfig:
    """Input for building a preview blueprint."""

    project_slug: str
    locale: str
    translations: List[TranslationForPreview]
    wp_locale: Optional[str] = None


@dataclass
class Blueprint:
    """A Playground blueprint."""

    steps: List[Dict[str, Any]]
    landing_page: str = "/wp-admin/"
    preferred_versions: Dict[str, str] = field(
        default_factory=lambda: {"php": "8.2", "wp": "latest"}
    )
    php_extension_bundles: List[str] = field(default_factory=lambda: ["kitchen-sink"])
    features: Dict[str, bool] = field(default_factory=lambda: {"networking": True})

    def to_dict(self) -> dict:
        return {
            "landingPage": self.landing_page,
            "preferredVersions": dict(self.preferred_versions),
            "phpExtensionBundles": list(self.php_extension_bundles),
            "features": dict(self.features),
            "steps": [dict(step) for step in self.steps],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, separators=(",", ":"))


def detect_project_type(project_slug: str) -> ProjectType:
    """Detect the project type from a GlotPress project slug."""
    if project_slug.startswith(f"{PLUGIN_MARKER}/"):
        return ProjectType.PLUGIN
    if project_slug.startswith(f"{THEME_MARKER}/"):
        return ProjectType.THEME
    return ProjectType.CORE


def extract_slug(project_slug: str) -> str:
    """
    Extract the plugin/theme slug from a project path.

    e.g. "wp-plugins/woocommerce/dev" -> "woocommerce"; core projects map to
    "wordpress".
    """
    parts = project_slug.split("/")
    if parts[0] in (PLUGIN_MARKER, THEME_MARKER) and len(parts) >= 2 and parts[1]:
        return parts[1]
    return "wordpress"


def map_locale_to_wp_locale(locale: str) -> str:
    """Map a GlotPress locale code to a WordPress locale."""
    return LOCALE_MAP.get(locale.lower(), locale)


def get_translation_file_path(project_type: ProjectType, slug: str, wp_locale: str) -> str:
    """Get the path WordPress loads the translation file from."""
    if project_type == ProjectType.PLUGIN:
        return f"{LANGUAGES_DIR}/plugins/{slug}-{wp_locale}.po"
    if project_type == ProjectType.THEME:
        return f"{LANGUAGES_DIR}/themes/{slug}-{wp_locale}.po"
    return f"{LANGUAGES_DIR}/{wp_locale}.po"


def get_landing_page(project_type: ProjectType, slug: str) -> str:
    """Pick the admin page to open once the site is ready."""
    if project_type == ProjectType.PLUGIN:
        if slug == "woocommerce":
            return "/wp-admin/admin.php?page=wc-admin"
        return "/wp-admin/plugins.php"
    if project_type == ProjectType.THEME:
        return "/wp-admin/themes.php"
    return "/wp-admin/"


def is_preview_supported(project_slug: str) -> bool:
    """Check if Playground can preview a project."""
    if not project_slug or not project_slug.strip("/"):
        return False
    project_type = detect_project_type(project_slug)
    if project_type in (ProjectType.PLUGIN, ProjectType.THEME):
        # A bare marker has no package to install
        return extract_slug(project_slug) != "wordpress"
    return True


def generate_translation_po(translations: List[TranslationForPreview], wp_locale: str) -> str:
    """Generate the PO file content for a preview."""
    entries = create_po_entries(translations, nplurals=get_nplurals(wp_locale))
    headers = {
        "Language": wp_locale,
        "Plural-Forms": get_plural_forms(wp_locale),
    }
    return generate_po_content(entries, headers)


def generate_blueprint(preview: PreviewConfig) -> Blueprint:
    """
    Build the Playground blueprint for a preview.

    Steps run in order: log in, switch the site language, install the
    plugin/theme, create the languages directory, then write the PO file.
    The same PO text is also written at the .mo path; it is not compiled.
    """
    project_type = detect_project_type(preview.project_slug)
    slug = extract_slug(preview.project_slug)
    wp_locale = preview.wp_locale or map_locale_to_wp_locale(preview.locale)

    po_content = generate_translation_po(preview.translations, wp_locale)

    steps: List[Dict[str, Any]] = [
        {"step": "login", "username": "admin", "password": "password"},
        {"step": "setSiteLanguage", "language": wp_locale},
    ]

    if project_type == ProjectType.PLUGIN:
        steps.append({
            "step": "installPlugin",
            "pluginData": {"resource": "wordpress.org/plugins", "slug": slug},
        })
    elif project_type == ProjectType.THEME:
        steps.append({
            "step": "installTheme",
            "themeData": {"resource": "wordpress.org/themes", "slug": slug},
        })

    translation_path = get_translation_file_path(project_type, slug, wp_locale)
    lang_dir = translation_path.rsplit("/", 1)[0]

    steps.append({"step": "mkdir", "path": lang_dir})
    steps.append({"step": "writeFile", "path": translation_path, "data": po_content})
    steps.append({
        "step": "writeFile",
        "path": translation_path[: -len(".po")] + ".mo",
        "data": po_content,
    })

    logger.debug(
        "Built blueprint for %s (%s, %d strings)",
        preview.project_slug, wp_locale, len(preview.translations),
    )

    return Blueprint(steps=steps, landing_page=get_landing_page(project_type, slug))


def build_playground_url(blueprint: Blueprint, base_url: Optional[str] = None) -> str:
    """Build a Playground URL carrying the blueprint in the fragment."""
    base = (base_url or config.playground_base_url).rstrip("/")
    return f"{base}/#{quote(blueprint.to_json(), safe='')}"


def build_playground_url_with_query(blueprint: Blueprint, base_url: Optional[str] = None) -> str:
    """Build a Playground URL carrying the blueprint as a base64 data URL."""
    base = (base_url or config.playground_base_url).rstrip("/")
    encoded = base64.b64encode(blueprint.to_json().encode("utf-8")).decode("ascii")
    query = urlencode({"blueprint-url": f"data:application/json;base64,{encoded}"})
    return f"{base}/?{query}"


def decode_playground_url(url: str) -> dict:
    """Recover the blueprint dict from a fragment URL."""
    _, _, fragment = url.partition("#")
    return json.loads(unquote(fragment))


def prepare_preview(preview: PreviewConfig) -> Blueprint:
    """
    Check that a preview can be built, then build its blueprint.

    Raises:
        UnsupportedPreviewTargetError: The project cannot be previewed
        PreviewError: There are no translations to preview
    """
    if not is_preview_supported(preview.project_slug):
        raise UnsupportedPreviewTargetError(
            f"Preview is not supported for project '{preview.project_slug}'"
        )
    if not preview.translations:
        raise PreviewError("No translations to preview")

    return generate_blueprint(preview)


def generate_preview_url(preview: PreviewConfig, use_query: bool = False) -> str:
    """Generate a complete Playground preview URL."""
    blueprint = prepare_preview(preview)
    if use_query:
        return build_playground_url_with_query(blueprint)
    return build_playground_url(blueprint)
