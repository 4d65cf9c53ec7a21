"""Tests for writing AfterShot documents."""

import os
import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

from lightroom2aftershot import AftershotDocument, LightroomPreset, convert
from lightroom2aftershot.core.constants import NAMESPACES

from tests.conftest import get_fixture, make_preset

BOPT = "{%s}" % NAMESPACES["bopt"]
BLAY = "{%s}" % NAMESPACES["blay"]


def find_options(text: str) -> ET.Element:
    root = ET.fromstring(text)
    options = root.find(f".//{BLAY}options")
    assert options is not None
    return options


@pytest.fixture
def document(lightroom: LightroomPreset) -> AftershotDocument:
    return AftershotDocument.from_lightroom(lightroom)


def test_skeleton(document: AftershotDocument) -> None:
    """Test the fixed XMP wrapper elements."""
    root = ET.fromstring(document.tostring())
    assert root.tag == "{adobe:ns:meta/}xmpmeta"
    assert root.get("{adobe:ns:meta/}xmptk") == "XMP Core 4.4.0"
    rdf = "{%s}" % NAMESPACES["rdf"]
    bset = "{%s}" % NAMESPACES["bset"]
    settings = root.find(
        f"{rdf}RDF/{rdf}Description/{{{NAMESPACES['bib']}}}settings/{rdf}Description"
    )
    assert settings is not None
    assert settings.get(f"{bset}settingsVersion") == "66"
    assert settings.get(f"{bset}respectsTransfor") == "True"
    layer = settings.find(f"{bset}layers/{rdf}Seq/{rdf}li/{rdf}Description")
    assert layer is not None
    assert layer.get(f"{BLAY}enabled") == "True"
    assert layer.get(f"{BLAY}name") == ""


def test_options(document: AftershotDocument) -> None:
    """Test that curve and preset attributes end up on blay:options."""
    options = find_options(document.tostring())
    assert options.get(f"{BOPT}scont") == "+25"
    assert options.get(f"{BOPT}fillamount") == "0.500000"
    assert options.get(f"{BOPT}curves_m_cn") == "4,1,6,2,3,2"
    assert options.get(f"{BOPT}curves_m_cx").startswith("4,20,0,10023,")


def test_options_order(document: AftershotDocument) -> None:
    """Test that curve attributes come first, then sorted options."""
    names = list(document.preset.to_attributes())
    assert names[0] == "bopt:curves_m_cn"
    assert names[8:] == sorted(names[8:])


def test_pretty(document: AftershotDocument) -> None:
    """Test that every bopt: option is on its own line."""
    text = document.tostring()
    for line in text.splitlines():
        assert line.count("bopt:") <= 1
    assert "\n" + " " * 40 + 'bopt:scont="+25"' in text
    # The namespace declaration stays in place.
    assert 'xmlns:bopt="http://www.bibblelabs.com/BibbleOpt/5.0/"' in text


def test_not_pretty(document: AftershotDocument) -> None:
    text = document.tostring(pretty=False)
    options_line = [line for line in text.splitlines() if "blay:options" in line]
    assert len(options_line) == 1
    assert options_line[0].count("bopt:") == len(document.preset.to_attributes())


def test_escaping() -> None:
    """Test that copied values are escaped in the output."""
    document = AftershotDocument.from_lightroom(make_preset({"Vibrance": '<"&>'}))
    options = find_options(document.tostring())
    assert options.get(f"{BOPT}vibe") == '<"&>'


def test_save(document: AftershotDocument, tmp_path: Path) -> None:
    output_path = str(tmp_path / "output.xmp")
    document.save(output_path)
    with open(output_path, encoding="utf-8") as f:
        assert f.read() == document.tostring()


def test_convert(tmp_path: Path) -> None:
    """Test the convenience function."""
    output_path = str(tmp_path / "output.xmp")
    text = convert(get_fixture("preset.xmp"), output_path)
    assert os.path.exists(output_path)
    assert find_options(text).get(f"{BOPT}highlightrecval") == "40"


def test_convert_without_output() -> None:
    text = convert(get_fixture("grayscale.xmp"))
    assert find_options(text).get(f"{BOPT}sat") == "0"


def test_convert_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        convert(str(tmp_path / "missing.xmp"))
