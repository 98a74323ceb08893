import pytest

from file_types import (
    SUPPORTED_EXTENSIONS,
    ExtensionError,
    NoExtensionError,
    UnsupportedExtensionError,
    classify,
    describe,
    get_extension,
    main,
)


@pytest.mark.parametrize("ext,name", sorted(SUPPORTED_EXTENSIONS.items()))
def test_classify_supported(ext, name):
    assert classify(f"document.{ext}") == name


@pytest.mark.parametrize("path", ["REPORT.DOCX", "Report.Docx", "slides.PpTx"])
def test_classify_is_case_insensitive(path):
    assert classify(path) == SUPPORTED_EXTENSIONS[path.rsplit(".", 1)[1].lower()]


@pytest.mark.parametrize("path", ["README", ".gitignore", "file.", "some.dir/README"])
def test_no_extension(path):
    assert get_extension(path) is None
    with pytest.raises(NoExtensionError):
        classify(path)


def test_get_extension_keeps_case_and_uses_last_dot():
    assert get_extension("archive.tar.GZ") == "GZ"
    assert get_extension("/tmp/x/report.docx") == "docx"


def test_unsupported_extension_keeps_original_case():
    with pytest.raises(UnsupportedExtensionError) as exc_info:
        classify("bundle.ZIP")
    assert exc_info.value.extension == "ZIP"
    assert "Unsupported file extension 'ZIP'" in str(exc_info.value)
    assert isinstance(exc_info.value, ValueError)


def test_table_is_read_only():
    with pytest.raises(TypeError):
        SUPPORTED_EXTENSIONS["zip"] = "ZIP Archive"


def test_describe_reports(capsys):
    assert describe("notes.txt") == "Plain Text Document"
    assert "File type: Plain Text Document" in capsys.readouterr().out

    assert describe("README") is None
    assert "No extension found for file: README" in capsys.readouterr().err

    assert describe("a.zip") is None
    assert "Unsupported file extension 'zip'" in capsys.readouterr().err


def test_main_exit_codes(capsys):
    assert main(["subs.srt"]) == 0
    assert main(["subs.zip"]) == 1


def test_main_requires_filename(capsys):
    with pytest.raises(SystemExit):
        main([])
    assert "usage" in capsys.readouterr().err.lower()


def test_error_hierarchy():
    assert issubclass(NoExtensionError, ExtensionError)
    assert issubclass(UnsupportedExtensionError, ExtensionError)
