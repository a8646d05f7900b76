# dictengine/utils.py

import html
from ftfy import fix_text


def clean_meaning(text: str) -> str:
    """
    Tidy a decoded definition for storage / display.
    - Unescape HTML entities (&amp; -> &) left in the dictionary text
    - Fix mojibake (ftfy), e.g. text that was double-encoded before packing
    - Normalize line endings and trim surrounding blank space
    """
    text = fix_text(html.unescape(text))
    return text.replace("\r\n", "\n").replace("\r", "\n").strip()
