"""Unit tests for sync_tasks.export_options module."""

import base64
from pathlib import PurePosixPath

import pytest

from src.sync_tasks.errors import FilesystemError
from src.sync_tasks.export_options import ExportOptionsBuilder


class RecordingInferer:
    """Returns a fixed language and remembers the content it received."""

    def __init__(self, result="en"):
        self.result = result
        self.received = []

    def infer(self, content):
        self.received.append(content)
        return self.result


class TestExportOptionsBuilder:
    """Test cases for ExportOptionsBuilder.build."""

    def test_generates_proper_options(self, make_config, locales_path):
        path = locales_path / "en.yml"
        path.write_text("hello: world")

        options = ExportOptionsBuilder(make_config()).build(path, PurePosixPath("en.yml"))

        assert options.data == base64.b64encode(b"hello: world").decode("ascii")
        assert options.filename == "en.yml"
        assert options.lang_iso == "hello"

    def test_strips_content_before_encoding(self, make_config, locales_path):
        path = locales_path / "ru.yml"
        path.write_text("\n\nru_RU:\n  my_key: Значение\n\n", encoding="utf-8")

        options = ExportOptionsBuilder(make_config()).build(path, "ru.yml")

        expected = "ru_RU:\n  my_key: Значение".encode("utf-8")
        assert base64.b64decode(options.data) == expected
        assert options.lang_iso == "ru_RU"

    def test_inferer_receives_raw_content(self, make_config, locales_path):
        path = locales_path / "en.yml"
        raw = "  en:\n    key: value\n\n"
        path.write_text(raw)
        inferer = RecordingInferer("en")

        ExportOptionsBuilder(make_config(lang_iso_inferer=inferer)).build(path, "en.yml")

        assert inferer.received == [raw]

    def test_nested_relative_path_is_posix(self, make_config, locales_path):
        (locales_path / "nested").mkdir()
        path = locales_path / "nested" / "en.yml"
        path.write_text("en: {}\n")

        options = ExportOptionsBuilder(make_config()).build(path, PurePosixPath("nested/en.yml"))

        assert options.filename == "nested/en.yml"

    def test_allows_to_redefine_options(self, make_config, locales_path):
        path = locales_path / "en.yml"
        path.write_text("en:\n  key: value\n")
        config = make_config(export_opts={
            'detect_icu_plurals': True,
            'convert_placeholders': True,
        })

        params = ExportOptionsBuilder(config).build(path, "en.yml").to_params()

        assert params['data'] == base64.b64encode(b"en:\n  key: value").decode("ascii")
        assert params['filename'] == "en.yml"
        assert params['lang_iso'] == "en"
        assert params['detect_icu_plurals'] is True
        assert params['convert_placeholders'] is True

    def test_extra_options_cannot_overwrite_data(self, make_config, locales_path):
        path = locales_path / "en.yml"
        path.write_text("en:\n  key: value\n")
        config = make_config(export_opts={'data': 'bogus', 'lang_iso': 'en_US'})

        params = ExportOptionsBuilder(config).build(path, "en.yml").to_params()

        assert params['data'] == base64.b64encode(b"en:\n  key: value").decode("ascii")
        assert params['lang_iso'] == "en_US"

    def test_none_extra_options_do_not_drop_required_keys(self, make_config, locales_path):
        path = locales_path / "en.yml"
        path.write_text("en:\n  key: value\n")
        config = make_config(export_opts={'filename': None, 'lang_iso': None})

        params = ExportOptionsBuilder(config).build(path, "en.yml").to_params()

        assert params['filename'] == "en.yml"
        assert params['lang_iso'] == "en"

    def test_unreadable_file_raises_filesystem_error(self, make_config, locales_path):
        missing = locales_path / "missing.yml"

        with pytest.raises(FilesystemError) as exc_info:
            ExportOptionsBuilder(make_config()).build(missing, "missing.yml")

        assert exc_info.value.file_path == str(missing)
        assert exc_info.value.operation == 'read'
