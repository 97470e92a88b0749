import logging
import subprocess

logger = logging.getLogger(__name__)

FALLBACK_COMMANDS = (
    ["wl-copy"],
    ["xclip", "-selection", "clipboard"],
    ["xsel", "-ib"],
)


def quote_field(value: str) -> str:
    out = value
    if '"' in out:
        out = out.replace('"', '""')
    if any(ch in out for ch in (" ", "\t", ",")):
        out = f'"{out}"'
    return out


def format_row(values) -> str:
    return ",".join(quote_field(v) for v in values)


def copy_to_clipboard(text: str, command=None) -> bool:
    """Pipe ``text`` into a clipboard command. Returns False instead of raising."""
    candidates = [list(command)] if command else [list(c) for c in FALLBACK_COMMANDS]
    for argv in candidates:
        try:
            subprocess.run(argv, input=text, text=True, check=True)
        except FileNotFoundError:
            logger.debug("Clipboard command %s not found", argv[0])
            continue
        except (subprocess.CalledProcessError, OSError):
            logger.exception("Clipboard command %s failed", argv)
            return False
        logger.debug("Copied %d characters with %s", len(text), argv[0])
        return True
    logger.warning("No clipboard command available")
    return False
