from pathlib import Path
import copy
import json
import sys

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

from dialog_core import Materializer, MaterializerSettings, from_json, from_file
from dialog_core.schema_models import (
    AutocapitalizationType,
    AutocorrectionType,
    BooleanElement,
    CellAccessory,
    CellStyle,
    Color,
    EntryElement,
    Font,
    KeyboardType,
    LineBreakMode,
    MultilineElement,
    ReturnKeyType,
    StringElement,
    StyledMultilineElement,
    StyledStringElement,
)
from samples.handlers import build_registry

SAMPLE = ROOT / "samples" / "settings.json"


@pytest.fixture
def diagnostics():
    return []


@pytest.fixture
def materializer(diagnostics):
    return Materializer(settings=MaterializerSettings(base_path="/app"), emit=diagnostics.append)


def test_none_document_returns_none(materializer, diagnostics):
    assert materializer.from_json(None) is None
    assert diagnostics == []


@pytest.mark.parametrize("document", [[], "x", 3])
def test_non_object_document_returns_none(materializer, diagnostics, document):
    assert materializer.from_json(document) is None
    assert len(diagnostics) == 1


def test_title_defaults_to_empty_string(materializer):
    root = materializer.from_json({})
    assert root.title == ""
    assert root.sections == []


def test_title_wrong_type_defaults_to_empty_string(materializer):
    assert materializer.from_json({"title": 12}).title == ""


def test_sections_headers_and_footers(materializer):
    root = materializer.from_json({
        "title": "Ajustes",
        "sections": [
            {"header": "A", "footer": "pie"},
            {"header": "B"},
            {},
        ],
    })
    assert root.title == "Ajustes"
    assert [(s.header, s.footer) for s in root.sections] == [("A", "pie"), ("B", None), (None, None)]
    assert all(s.elements == [] for s in root.sections)


def test_elements_not_an_array_is_empty(materializer):
    root = materializer.from_json({"sections": [{"elements": {"type": "bool"}}]})
    assert root.sections[0].elements == []


def test_non_object_section_is_skipped(materializer, diagnostics):
    root = materializer.from_json({"sections": ["bad", {"header": "ok"}]})
    assert [s.header for s in root.sections] == ["ok"]
    assert len(diagnostics) == 1


def test_mixed_section_keeps_good_elements_in_order(materializer, diagnostics):
    root = materializer.from_json({
        "sections": [{
            "elements": [
                {"type": "bool", "caption": "Wifi", "value": True},
                {"type": "slider", "caption": "Volumen"},
                {"type": "entry", "caption": "Usuario", "ontap": "oops-no-dot"},
            ],
        }],
    })
    elements = root.sections[0].elements
    assert [type(e) for e in elements] == [BooleanElement, EntryElement]
    assert elements[0].caption == "Wifi"
    assert elements[1].caption == "Usuario"
    assert len(diagnostics) == 1
    assert "slider" in diagnostics[0]


def test_failing_element_does_not_abort_siblings(materializer, diagnostics):
    root = materializer.from_json({
        "sections": [{
            "elements": [
                {"type": "string", "caption": "uno"},
                {"type": "string", "caption": {"bad": True}},
                {"type": "string", "background": "relative.png"},
                {"type": "string", "caption": "dos"},
            ],
        }],
    })
    assert [e.caption for e in root.sections[0].elements] == ["uno", "dos"]
    assert len(diagnostics) == 2


def test_color_with_trailing_newline_keeps_the_element(materializer, diagnostics):
    root = materializer.from_json({
        "sections": [{"elements": [{"type": "string", "caption": "x", "textcolor": "#fff\n"}]}],
    })
    [element] = root.sections[0].elements
    assert type(element) is StyledStringElement
    assert element.text_color == Color.black()
    assert len(diagnostics) == 1


def test_non_object_elements_are_skipped_silently(materializer, diagnostics):
    root = materializer.from_json({"sections": [{"elements": [None, 3, "x", {"type": "bool"}]}]})
    assert len(root.sections[0].elements) == 1
    assert diagnostics == []


def test_materialization_is_idempotent_and_does_not_mutate_input():
    document = json.loads(SAMPLE.read_text(encoding="utf-8"))
    original = copy.deepcopy(document)
    events = []

    first = from_json(document, events)
    second = from_json(document, events)

    assert first == second
    assert first is not second
    assert document == original


def test_same_materializer_is_idempotent(materializer):
    document = {"sections": [{"elements": [{"type": "string", "ontap": "A.b", "font": "Helvetica-12"}]}]}
    assert materializer.from_json(document) == materializer.from_json(document)


def test_settings_drive_fonts_and_paths(diagnostics):
    settings = MaterializerSettings(base_path="/srv/app", system_font_size=17,
                                    known_fonts=["Helvetica"], system_font_name="Sans")
    m = Materializer(settings=settings, emit=diagnostics.append)
    root = m.from_json({"sections": [{"elements": [
        {"type": "string", "font": "Helvetica"},
        {"type": "string", "font": "Comic-10"},
        {"type": "string", "background": "~/bg.png"},
    ]}]})
    elements = root.sections[0].elements
    assert elements[0].font == Font(name="Helvetica", size=17)
    assert elements[1].font == Font(name="Sans", size=12)
    assert elements[2].background_uri == Path("/srv/app/bg.png").as_uri()
    assert len(diagnostics) == 1


def test_sample_document():
    events = []
    diagnostics = []
    root = from_file(SAMPLE, events, handlers=build_registry(), emit=diagnostics.append)

    assert diagnostics == []
    assert root.title == "Ajustes"
    account, info = root.sections

    assert account.header == "Cuenta"
    assert account.footer == "Los datos se guardan en este dispositivo"
    user, password, remember = account.elements
    assert user.keyboard_type is KeyboardType.ASCII_CAPABLE
    assert user.autocapitalization is AutocapitalizationType.NONE
    assert user.autocorrection is AutocorrectionType.NO
    assert user.is_password is False
    assert password.is_password is True
    assert password.return_key_type is ReturnKeyType.DONE
    assert remember == BooleanElement(caption="Recordar sesión", value=True)

    version, notes, about, warning, support = info.elements
    assert type(version) is StringElement
    assert type(notes) is MultilineElement
    assert type(about) is StyledStringElement
    assert about.accessory is CellAccessory.DISCLOSURE_INDICATOR
    assert type(warning) is StyledMultilineElement
    assert warning.lines == 2
    assert warning.text_color == Color(r=204, g=0, b=0, a=255)
    assert warning.line_break_mode is LineBreakMode.WORD_WRAP
    assert support.style is CellStyle.SUBTITLE

    assert about.on_tap() is True
    assert support.on_accessory_tap() is True
    assert events == ["about", "support"]


def test_from_file_missing(tmp_path):
    assert from_file(tmp_path / "missing.json") is None


def test_from_file_yaml(tmp_path):
    path = tmp_path / "dialog.yaml"
    path.write_text("title: Demo\nsections:\n  - header: A\n    elements:\n      - type: bool\n        caption: X\n",
                    encoding="utf-8")
    root = from_file(path)
    assert root.title == "Demo"
    assert root.sections[0].elements == [BooleanElement(caption="X")]


def test_model_dump_exposes_variant_kind(materializer):
    root = materializer.from_file(SAMPLE)
    dumped = root.model_dump()
    assert dumped["sections"][1]["elements"][3]["kind"] == "styled_multiline"
    assert dumped["sections"][0]["elements"][2]["kind"] == "boolean"
