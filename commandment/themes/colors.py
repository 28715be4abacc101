# Commandment Command-Line Toolkit - MIT Licensed
"""
Color constants and the rich `Theme` used for Commandment output.

`OneColors` holds hex values from the One Dark palette, with `_b` variants
for bold text. They are plain strings and can be dropped into rich markup,
e.g. `f"[{OneColors.DARK_RED}]error[/]"`.
"""
from rich.style import Style
from rich.theme import Theme


class OneColors:
    BLACK = "#282C34"
    WHITE = "#ABB2BF"
    COMMENT_GREY = "#5C6370"
    LIGHT_RED = "#E06C75"
    DARK_RED = "#BE5046"
    GREEN = "#98C379"
    LIGHT_YELLOW = "#E5C07B"
    DARK_YELLOW = "#D19A66"
    BLUE = "#61AFEF"
    MAGENTA = "#C678DD"
    CYAN = "#56B6C2"

    LIGHT_RED_b = f"bold {LIGHT_RED}"
    DARK_RED_b = f"bold {DARK_RED}"
    GREEN_b = f"bold {GREEN}"
    LIGHT_YELLOW_b = f"bold {LIGHT_YELLOW}"
    BLUE_b = f"bold {BLUE}"
    CYAN_b = f"bold {CYAN}"


def get_theme() -> Theme:
    """Return the rich theme with the named styles used by the reporter."""
    return Theme(
        {
            "usage": Style.parse(OneColors.BLUE_b),
            "heading": Style.parse("bold"),
            "error": Style.parse(OneColors.DARK_RED),
            "hint": Style.parse(OneColors.COMMENT_GREY),
            "command": Style.parse(OneColors.CYAN_b),
            "option": Style.parse(OneColors.LIGHT_YELLOW),
        }
    )
