import time

from messages import CMD_PROMPTS

STATUS_MESSAGE_SECONDS = 2.0


def render_status(model, width, now=None):
    """Status line text for ``model``, padded or cut to ``width``."""
    if width <= 0:
        return ""
    now = time.monotonic() if now is None else now
    if model.status_message and model.status_age(now) < STATUS_MESSAGE_SECONDS:
        text = f" {model.status_message}"
        return text.ljust(width)[:width]

    left = f" {model.name}"
    current = model.abs_selected_row + 1 if model.nrows else 0
    right = f"{current}/{model.nrows} "
    gap = width - len(left) - len(right)
    if gap < 1:
        return (left + " " + right)[:width].ljust(width)
    return left + " " * gap + right


def render_command_line(model, width):
    """Prompt plus input text scrolled so the cursor stays visible.

    Returns ``(text, cursor_x)``.
    """
    prompt = CMD_PROMPTS.get(model.cmd_mode, ":")
    text_w = max(1, width - len(prompt) - 1)
    hscroll = max(0, model.cmd_cursor - text_w)
    visible = model.cmd_text[hscroll : hscroll + text_w]
    line = (prompt + visible).ljust(width)[:width]
    cursor_x = min(max(0, width - 1), len(prompt) + model.cmd_cursor - hscroll)
    return line, cursor_x
