"""Prompt construction for lyric generation.

Escaping policy: the user's text is appended to :data:`USER_PROMPT_PREFIX`
by plain concatenation. It is never passed through ``str.format`` or ``%``
formatting, so braces and percent signs in the prompt stay literal. No other
escaping or sanitisation is applied; the text travels as its own ``user``
message, separate from the system persona.
"""

from __future__ import annotations

SYSTEM_PROMPT = (
    "You are a skilled hip-hop lyricist. Create hip-hop lyrics in the style of "
    "modern rap music. Include a verse and a hook. Format the output with clear "
    "section labels and line breaks."
)

USER_PROMPT_PREFIX = "Write hip-hop lyrics about: "


def render_user_prompt(prompt: str) -> str:
    """Embed the raw prompt into the user instruction."""
    return USER_PROMPT_PREFIX + prompt


def build_messages(prompt: str) -> list[dict[str, str]]:
    """Return the ordered system + user messages for *prompt*."""
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": render_user_prompt(prompt)},
    ]
