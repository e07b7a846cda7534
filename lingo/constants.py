"""Projects and locales offered by the workbench."""

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class Project:
    """A GlotPress project that can be translated."""

    id: str
    name: str
    slug: str
    description: str


@dataclass(frozen=True)
class Locale:
    """A translation locale with its WordPress equivalent."""

    code: str
    name: str
    wp_locale: str


PROJECTS: List[Project] = [
    Project("wp-core", "WordPress Core", "wp/dev", "WordPress core software"),
    Project("woocommerce", "WooCommerce", "wp-plugins/woocommerce/dev", "eCommerce plugin"),
    Project("jetpack", "Jetpack", "wp-plugins/jetpack/dev", "Security and performance"),
    Project("akismet", "Akismet", "wp-plugins/akismet/dev", "Spam protection"),
]

LOCALES: List[Locale] = [
    Locale("pt-br", "Portuguese (Brazil)", "pt_BR"),
    Locale("es", "Spanish", "es_ES"),
    Locale("fr", "French", "fr_FR"),
    Locale("de", "German", "de_DE"),
    Locale("it", "Italian", "it_IT"),
    Locale("ja", "Japanese", "ja"),
    Locale("ar", "Arabic", "ar"),
    Locale("nl", "Dutch", "nl_NL"),
]

DEFAULT_PROJECT = "woocommerce"
DEFAULT_LOCALE = "it"


def get_project(project_id: str) -> Optional[Project]:
    """Find a project by id or GlotPress slug."""
    for project in PROJECTS:
        if project.id == project_id or project.slug == project_id:
            return project
    return None


def get_locale(code: str) -> Optional[Locale]:
    """Find a locale by GlotPress code."""
    for locale in LOCALES:
        if locale.code == code.lower():
            return locale
    return None
