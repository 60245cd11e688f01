"""Classify key codes as content-affecting or ignorable."""

BACKSPACE = 8
SPACE = 32
DELETE = 46

# Codes below Delete are navigation, modifier and control keys (shift, ctrl,
# alt, arrows, paging, escape, tab, enter), except the two listed here.
_CONTENT_BELOW_DELETE = frozenset({BACKSPACE, SPACE})


def accepts(key_code: int) -> bool:
    """Return True if a keyup with *key_code* may have changed the input value."""
    return key_code >= DELETE or key_code in _CONTENT_BELOW_DELETE
