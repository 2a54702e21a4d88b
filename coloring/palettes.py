from fractals.base import Palette
from utils.enums import PaletteChoice

PALETTE_SIZE = 16


def create_grayscale(levels=PALETTE_SIZE):
    """
    Builds a grayscale ramp where level i repeats the hex digit of i six times
    ('#000000', '#111111', ... '#ffffff').

    Parameters:
        levels (int): Number of entries, at most 16.

    Returns:
        Palette: The grayscale ramp.
    """
    if not 1 <= levels <= PALETTE_SIZE:
        raise ValueError("Grayscale ramp supports between 1 and 16 levels.")
    colors = tuple("#" + format(i, "x") * 6 for i in range(levels))
    return Palette("grayscale", colors)


# Curated 16 color RGB palette
COLOR_PALETTE = Palette("color", (
    "#140c1c",
    "#442434",
    "#30346d",
    "#4e4a4e",
    "#854c30",
    "#346524",
    "#d04648",
    "#757161",
    "#597dce",
    "#d27d2c",
    "#8595a1",
    "#6daa2c",
    "#d2aa99",
    "#6dc2ca",
    "#dad45e",
    "#deeed6",
))

GRAYSCALE_PALETTE = create_grayscale()


def palette_for(choice: PaletteChoice) -> Palette:
    if choice == PaletteChoice.COLOR:
        return COLOR_PALETTE
    return GRAYSCALE_PALETTE


def select_palette(colors: bool) -> Palette:
    """Maps the UI 'Colors' toggle onto a built-in palette."""
    return palette_for(PaletteChoice.COLOR if colors else PaletteChoice.GRAYSCALE)
