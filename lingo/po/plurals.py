"""Plural-Forms expressions for gettext catalogs."""

import re

DEFAULT_PLURAL_FORMS = "nplurals=2; plural=(n != 1);"

_ONE_FORM = "nplurals=1; plural=0;"
_FRENCH = "nplurals=2; plural=(n > 1);"
_EAST_SLAVIC = (
    "nplurals=3; plural=(n%10==1 && n%100!=11 ? 0 : "
    "n%10>=2 && n%10<=4 && (n%100<12 || n%100>14) ? 1 : 2);"
)
_CZECH = "nplurals=3; plural=(n==1 ? 0 : (n>=2 && n<=4) ? 1 : 2);"

# Keys are gettext locale codes (underscore separated). Lookups fall back
# from the full code to the language prefix.
PLURAL_FORMS = {
    # Germanic languages
    "en": DEFAULT_PLURAL_FORMS,
    "de": DEFAULT_PLURAL_FORMS,
    "nl": DEFAULT_PLURAL_FORMS,
    "sv": DEFAULT_PLURAL_FORMS,
    "da": DEFAULT_PLURAL_FORMS,
    "nb": DEFAULT_PLURAL_FORMS,
    "no": DEFAULT_PLURAL_FORMS,

    # Romance languages
    "es": DEFAULT_PLURAL_FORMS,
    "fr": _FRENCH,
    "it": DEFAULT_PLURAL_FORMS,
    "pt": DEFAULT_PLURAL_FORMS,
    "pt_BR": _FRENCH,
    "ro": "nplurals=3; plural=(n==1 ? 0 : (n==0 || (n%100 > 0 && n%100 < 20)) ? 1 : 2);",

    # Slavic languages
    "ru": _EAST_SLAVIC,
    "uk": _EAST_SLAVIC,
    "be": _EAST_SLAVIC,
    "sr": _EAST_SLAVIC,
    "hr": _EAST_SLAVIC,
    "bs": _EAST_SLAVIC,
    "pl": "nplurals=3; plural=(n==1 ? 0 : n%10>=2 && n%10<=4 && (n%100<12 || n%100>14) ? 1 : 2);",
    "cs": _CZECH,
    "sk": _CZECH,
    "sl": "nplurals=4; plural=(n%100==1 ? 0 : n%100==2 ? 1 : n%100==3 || n%100==4 ? 2 : 3);",

    # Baltic languages
    "lt": "nplurals=3; plural=(n%10==1 && n%100!=11 ? 0 : n%10>=2 && (n%100<10 || n%100>=20) ? 1 : 2);",
    "lv": "nplurals=3; plural=(n%10==1 && n%100!=11 ? 0 : n != 0 ? 1 : 2);",

    # Asian languages
    "ja": _ONE_FORM,
    "zh": _ONE_FORM,
    "zh_CN": _ONE_FORM,
    "zh_TW": _ONE_FORM,
    "ko": _ONE_FORM,
    "vi": _ONE_FORM,
    "th": _ONE_FORM,
    "id": _ONE_FORM,

    # Other
    "ar": (
        "nplurals=6; plural=(n==0 ? 0 : n==1 ? 1 : n==2 ? 2 : "
        "n%100>=3 && n%100<=10 ? 3 : n%100>=11 && n%100<=99 ? 4 : 5);"
    ),
    "ga": "nplurals=5; plural=(n==1 ? 0 : n==2 ? 1 : n<7 ? 2 : n<11 ? 3 : 4);",
    "he": DEFAULT_PLURAL_FORMS,
    "tr": _FRENCH,
    "el": DEFAULT_PLURAL_FORMS,
    "fi": DEFAULT_PLURAL_FORMS,
    "hu": DEFAULT_PLURAL_FORMS,
}

_NPLURALS_RE = re.compile(r"nplurals\s*=\s*(\d+)")


def get_plural_forms(locale: str) -> str:
    """
    Get the Plural-Forms expression for a locale.

    Accepts GlotPress (``pt-br``) and WordPress (``pt_BR``) spellings.
    """
    normalized = (locale or "").replace("-", "_")
    language = normalized.split("_")[0]

    if normalized in PLURAL_FORMS:
        return PLURAL_FORMS[normalized]

    # GlotPress uses lowercase regions
    parts = normalized.split("_", 1)
    if len(parts) == 2:
        canonical = f"{parts[0].lower()}_{parts[1].upper()}"
        if canonical in PLURAL_FORMS:
            return PLURAL_FORMS[canonical]

    return PLURAL_FORMS.get(language.lower(), DEFAULT_PLURAL_FORMS)


def get_nplurals(locale: str) -> int:
    """Get the number of plural forms for a locale."""
    match = _NPLURALS_RE.search(get_plural_forms(locale))
    return int(match.group(1)) if match else 2
