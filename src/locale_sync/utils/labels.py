"""
Default labels for keys that have no authored text yet
"""

import re

# lower/digit -> Upper, and the last capital of an acronym before a lowercase run
_WORD_BOUNDARY_RE = re.compile(r'(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])')
_WHITESPACE_RE = re.compile(r'\s+')


def generate_default_label(key: str) -> str:
    """
    Derive a human readable base-language label from a key

    Examples:
        whatNeedsToBeDone -> What needs to be done
        common.submit -> Submit
        XMLParser -> Xml parser
        common. -> Common
    """
    segments = [part for part in key.split('.') if part.strip()]
    last_part = segments[-1] if segments else key
    spaced = _WORD_BOUNDARY_RE.sub(' ', last_part)
    label = _WHITESPACE_RE.sub(' ', spaced.lower()).strip()
    return label[:1].upper() + label[1:]
