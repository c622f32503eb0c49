# emoji_picker/context/normalizer.py
import unicodedata


def strip_control(s: str) -> str:
    """Drop C0/C1 control characters (keeps ZWJ and variation selectors)."""
    return "".join(ch for ch in s if unicodedata.category(ch) != "Cc")


def fold_case(s: str) -> str:
    """
    Caseless form used on both sides of a match (index tokens and queries).
    Upper-casing first sends letters like dotless "ı" to the same form as
    their capital, so s and s.upper() always fold alike.
    """
    return s.upper().casefold()


def normalize_query(s: str) -> str:
    """
    Canonical form of a raw search string:
    control chars removed, outer whitespace trimmed, inner runs collapsed,
    case folded so "COW" and "cow" hit the same terms.
    """
    if not s:
        return ""
    s = strip_control(s)
    # normalize weird whitespace
    s = " ".join(s.split())
    return fold_case(s)


def normalize_tag(s: str) -> str:
    """Trim + collapse internal whitespace; case is preserved for display."""
    if not s:
        return ""
    return " ".join(s.split())
