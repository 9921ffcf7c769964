"""Frame rendering for the chat panel.

Hides how a computed frame becomes a Rich renderable, including how
emote placements are drawn over their cell spans.
"""

from rich.cells import cell_len
from rich.style import Style
from rich.text import Text

from ..chat import Frame

GLYPH_STYLE = Style(bold=True, reverse=True)


def column_to_offset(plain: str, column: int) -> int:
    """Character offset of the cell at `column` in `plain`.

    Returns len(plain) when the column lies past the end of the text.
    """
    used = 0
    for index, char in enumerate(plain):
        if used >= column:
            return index
        used += cell_len(char)
    return len(plain)


def render_frame(frame: Frame, glyph_style: Style = GLYPH_STYLE) -> Text:
    """Join frame rows into one Text, highlighting emote placements."""
    lines: list[Text] = [row.text.copy() for row in frame.rows]

    for placement in frame.placements:
        if not 0 <= placement.row < len(lines):
            continue
        line = lines[placement.row]
        start = column_to_offset(line.plain, placement.col_span[0])
        end = column_to_offset(line.plain, placement.col_span[1])
        line.stylize(glyph_style, start, end)

    return Text("\n", no_wrap=True, overflow="crop").join(lines)
