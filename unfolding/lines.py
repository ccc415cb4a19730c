"""Static configuration of the lines: data file names, colours and labels."""

LINE_FILES = {
    "METRO 1": "final_M1",
    "METRO 2": "final_M2",
    "METRO 3": "final_M3",
    "METRO 3BIS": "final_M3b",
    "METRO 4": "final_M4",
    "METRO 5": "final_M5",
    "METRO 6": "final_M6",
    "METRO 7": "final_M7",
    "METRO 7BIS": "final_M7b",
    "METRO 8": "final_M8",
    "METRO 9": "final_M9",
    "METRO 10": "final_M10",
    "METRO 11": "final_M11",
    "METRO 12": "final_M12",
    "METRO 13": "final_M13",
    "METRO 14": "final_M14",
    "RER A": "final_RA",
    "RER B": "final_RB",
    "RER C": "final_RC",
    "RER D": "final_RD",
    "RER E": "final_RE",
}

AVAILABLE_LINES = list(LINE_FILES)

LINE_COLORS = {
    "METRO 1": "#FFCD00",
    "METRO 2": "#5A9FD4",
    "METRO 3": "#A89D3D",
    "METRO 3BIS": "#6EC4E8",
    "METRO 4": "#C04191",
    "METRO 5": "#F28E42",
    "METRO 6": "#6ECA97",
    "METRO 7": "#F3A4BA",
    "METRO 7BIS": "#6ECA97",
    "METRO 8": "#CEADD2",
    "METRO 9": "#CECE00",
    "METRO 10": "#E3B32A",
    "METRO 11": "#B8936D",
    "METRO 12": "#2CA67A",
    "METRO 13": "#6EC4E8",
    "METRO 14": "#9060B0",
    "RER A": "#E4002B",
    "RER B": "#5291CE",
    "RER C": "#F99D1D",
    "RER D": "#00A88F",
    "RER E": "#C760AA",
}

DEFAULT_COLOR = "#999999"


def line_file(line: str) -> str:
    """Resource name (without extension) of a line's CSV. Raises KeyError for unknown lines."""
    return LINE_FILES[line]


def line_color(line: str) -> str:
    return LINE_COLORS.get(line, DEFAULT_COLOR)


def contrast_color(hex_color: str) -> str:
    """Black or white, whichever reads better on top of ``hex_color``."""
    h = hex_color.lstrip("#")
    r, g, b = (int(h[i:i + 2], 16) for i in (0, 2, 4))
    luminance = (0.299 * r + 0.587 * g + 0.114 * b) / 255
    return "#000000" if luminance > 0.5 else "#FFFFFF"


def short_label(line: str) -> str:
    # "METRO 3BIS" -> "M3BIS", RER names stay as they are
    if line.startswith("RER"):
        return line
    return line.replace("METRO ", "M")


def chart_line_name(line: str) -> str:
    return line.replace("METRO ", "line ")
