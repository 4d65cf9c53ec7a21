import dataclasses
import logging
import xml.etree.ElementTree as ET
from typing import IO, Any

from lightroom2aftershot import xml_utils
from lightroom2aftershot.core.aftershot import AftershotPreset
from lightroom2aftershot.core.constants import (
    NAMESPACES,
    SETTINGS_VERSION,
    XMP_TOOLKIT,
)
from lightroom2aftershot.core.converter import Converter
from lightroom2aftershot.core.diagnostics import Diagnostic
from lightroom2aftershot.core.lightroom import LightroomPreset

logger = logging.getLogger(__name__)

DEFAULT_INDENT = "    "

# Column of the broken-out bopt: attributes, a rough match of the indentation
# of the options element.
ATTRIBUTE_COLUMN = 40


@dataclasses.dataclass
class AftershotDocument:
    """AfterShot preset document.

    Example usage::

        from lightroom2aftershot import AftershotDocument
        from lightroom2aftershot.core.lightroom import LightroomPreset

        lightroom = LightroomPreset.parse("input.xmp")
        document = AftershotDocument.from_lightroom(lightroom)

        document.save("output.xmp")
        xmp_string = document.tostring()
        document.diagnostics  # settings that could not be converted
    """

    preset: AftershotPreset
    diagnostics: list[Diagnostic] = dataclasses.field(default_factory=list)

    @staticmethod
    def from_lightroom(
        lightroom: LightroomPreset, **kwargs: Any
    ) -> "AftershotDocument":
        """Create a new AftershotDocument from a Lightroom preset.

        Args:
            lightroom: Parsed Lightroom preset.
            kwargs: Passed to :class:`~lightroom2aftershot.core.converter.Converter`
                (``mappers``, ``passes``, ``curve_capacity``).
        """
        converter = Converter(lightroom, **kwargs)
        preset = converter.build()
        return AftershotDocument(preset=preset, diagnostics=converter.diagnostics)

    def build_xml(self) -> ET.Element:
        """Build the AfterShot XMP tree around the preset options."""
        root = xml_utils.create_node(
            "x:xmpmeta",
            attrib={"xmlns:x": NAMESPACES["x"], "x:xmptk": XMP_TOOLKIT},
        )
        rdf = xml_utils.create_node(
            "rdf:RDF", parent=root, attrib={"xmlns:rdf": NAMESPACES["rdf"]}
        )
        description = xml_utils.create_node(
            "rdf:Description",
            parent=rdf,
            attrib={
                "rdf:about": "",
                **{
                    f"xmlns:{prefix}": NAMESPACES[prefix]
                    for prefix in ("bib", "bset", "blay", "bopt")
                },
            },
        )
        settings = xml_utils.create_node("bib:settings", parent=description)
        settings_description = xml_utils.create_node(
            "rdf:Description",
            parent=settings,
            attrib={
                "bset:settingsVersion": SETTINGS_VERSION,
                "bset:respectsTransfor": "True",
                "bset:curLayer": "0",
            },
        )
        layers = xml_utils.create_node("bset:layers", parent=settings_description)
        seq = xml_utils.create_node("rdf:Seq", parent=layers)
        li = xml_utils.create_node("rdf:li", parent=seq)
        layer = xml_utils.create_node(
            "rdf:Description",
            parent=li,
            attrib={
                "blay:layerId": "0",
                "blay:layerPos": "0",
                "blay:name": "",
                "blay:enabled": "True",
            },
        )
        xml_utils.create_node(
            "blay:options", parent=layer, attrib=self.preset.to_attributes()
        )
        return root

    def tostring(self, indent: str = DEFAULT_INDENT, pretty: bool = True) -> str:
        """Convert the document to an XMP string.

        Args:
            indent: Indentation string for the nested elements.
            pretty: Put every ``bopt:`` option on its own line.
        """
        text = xml_utils.tostring(self.build_xml(), indent=indent)
        if pretty:
            text = xml_utils.break_attributes(text, "bopt", ATTRIBUTE_COLUMN)
        return text

    def save(
        self, filepath: str, indent: str = DEFAULT_INDENT, pretty: bool = True
    ) -> None:
        """Save the document to a file."""
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(self.tostring(indent=indent, pretty=pretty))

    def write(
        self, file: IO[str], indent: str = DEFAULT_INDENT, pretty: bool = True
    ) -> None:
        """Write the document to an open text stream."""
        file.write(self.tostring(indent=indent, pretty=pretty))


def convert(
    input_path: str,
    output_path: str | None = None,
    indent: str = DEFAULT_INDENT,
    pretty: bool = True,
) -> str:
    """Convenience method to convert a Lightroom preset file.

    Args:
        input_path: Path to the Lightroom XMP preset.
        output_path: Path to the AfterShot XMP file to write. If None, nothing
            is written and only the string is returned.
        indent: Indentation string for the nested elements.
        pretty: Put every ``bopt:`` option on its own line.

    Returns:
        The AfterShot XMP document as a string.
    """
    logger.info(f"Opening {input_path}")
    lightroom = LightroomPreset.parse(input_path)
    document = AftershotDocument.from_lightroom(lightroom)
    text = document.tostring(indent=indent, pretty=pretty)
    if output_path is not None:
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(text)
    return text
