import pytest

pytest.importorskip("PyQt5")

from asphalt_viewer import main
from asphalt_viewer.services.app_settings import AppSettings


def test_parse_args_defaults_from_environment(monkeypatch):
    monkeypatch.setenv("BPO_ASPHALT_LOG_LEVEL", "warning")

    args = main.parse_args([])

    assert args.log_level == "warning"
    assert args.sample is False
    assert args.settings is None


def test_parse_args_flags():
    args = main.parse_args(["--debug", "--sample", "--settings", "editor.ini"])

    assert args.debug is True
    assert args.sample is True
    assert args.settings == "editor.ini"


def test_build_document_with_sample_data(tmp_path):
    settings = AppSettings(tmp_path / "settings.ini")

    document = main.build_document(settings, sample=True)

    assert len(document.stations) == 5
    assert len(document.layers) == 3
    assert main.build_document(settings, sample=False).stations == []


def test_build_document_honours_default_section_setting(tmp_path):
    path = tmp_path / "settings.ini"
    path.write_text("[editor]\ndefault_section_active = no\n", encoding="utf-8")

    document = main.build_document(AppSettings(path), sample=True)

    assert document.tonnage_report().total_tonnage == 0
