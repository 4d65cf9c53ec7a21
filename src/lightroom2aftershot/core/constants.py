"""Constants shared by the Lightroom reader and the AfterShot writer."""

LIGHTROOM_CURVE_MAX = 255
AFTERSHOT_CURVE_MAX = 65535

# Integer ratio between the two curve ranges (65535 // 255 == 257).
CURVE_SCALE = AFTERSHOT_CURVE_MAX // LIGHTROOM_CURVE_MAX

# Number of point slots AfterShot stores for each curve channel.
AFTERSHOT_NUM_POINTS = 20

# Header tokens in front of the curve lists. "4" is the channel count, the
# second token is the number of values per channel.
CURVE_CHANNEL_COUNT = 4

# Channel order used by both formats.
CHANNELS = ("rgb", "red", "green", "blue")

# Lightroom element names holding the tone curve of each channel.
LIGHTROOM_TONE_CURVES: dict[str, str] = {
    "ToneCurvePV2012": "rgb",
    "ToneCurvePV2012Red": "red",
    "ToneCurvePV2012Green": "green",
    "ToneCurvePV2012Blue": "blue",
}

# AfterShot XMP namespaces.
NAMESPACES: dict[str, str] = {
    "x": "adobe:ns:meta/",
    "rdf": "http://www.w3.org/1999/02/22-rdf-syntax-ns#",
    "bib": "http://www.bibblelabs.com/BibbleToplevel/5.0/",
    "bset": "http://www.bibblelabs.com/BibbleSettings/5.0/",
    "blay": "http://www.bibblelabs.com/BibbleLayers/5.0/",
    "bopt": "http://www.bibblelabs.com/BibbleOpt/5.0/",
}

XMP_TOOLKIT = "XMP Core 4.4.0"
SETTINGS_VERSION = "66"

# Equalizer color names in AfterShot, keyed by the Lightroom color name.
# Lightroom has a seventh color (Purple) without a counterpart.
EQUALIZER_COLORS: dict[str, str] = {
    "Red": "red",
    "Orange": "orange",
    "Yellow": "yellow",
    "Green": "green",
    "Aqua": "cyan",
    "Blue": "blue",
    "Magenta": "magenta",
}

EQUALIZER_ENABLED = "bopt:Equalizer_kb.kbs_enabled"


def equalizer_field(color: str, kind: str) -> str:
    """Name of an AfterShot equalizer field, e.g. ``kbs_redhue``."""
    return f"bopt:Equalizer_kb.kbs_{color}{kind}"


# Baseline target state: every feature disabled or zero.
DEFAULT_ATTRIBUTES: dict[str, str] = {
    "bopt:scont": "0",
    "bopt:highlightrecval": "0",
    "bopt:fillamount": "0",
    **{
        equalizer_field(color, kind): "0"
        for kind in ("hue", "sat", "lum")
        for color in EQUALIZER_COLORS.values()
    },
    EQUALIZER_ENABLED: "true",
}

# Features that are always switched on in converted presets.
ALWAYS_ON_ATTRIBUTES: dict[str, str] = {
    EQUALIZER_ENABLED: "true",
    "bopt:curveson": "true",
}
