import os
import sys
import argparse
from types import MappingProxyType

SUPPORTED_EXTENSIONS = MappingProxyType({
    "docx": "Microsoft Word Document",
    "doc": "Microsoft Word Document",
    "pptx": "Microsoft PowerPoint Document",
    "xlsx": "Microsoft Excel Document",
    "pdf": "Portable Document Format",
    "htm": "HTML Document",
    "html": "HTML Document",
    "txt": "Plain Text Document",
    "xlf": "XLIFF Document, version 2.1",
    "xliff": "XLIFF Document, version 2.1",
    "srt": "SubRip Subtitle file",
})


class ExtensionError(ValueError):
    pass


class NoExtensionError(ExtensionError):
    def __init__(self, path):
        super().__init__(f"No extension found for file: {path}")
        self.path = path


class UnsupportedExtensionError(ExtensionError):
    def __init__(self, extension):
        super().__init__(f"Unsupported file extension '{extension}'.")
        self.extension = extension


def get_extension(path):
    """Return the text after the last dot of the file name, or None for dotfiles and trailing dots."""
    name = os.path.basename(str(path))
    i = name.rfind(".")
    if 0 < i < len(name) - 1:
        return name[i + 1:]
    return None


def classify(path):
    extension = get_extension(path)
    if extension is None:
        raise NoExtensionError(path)
    try:
        return SUPPORTED_EXTENSIONS[extension.lower()]
    except KeyError:
        raise UnsupportedExtensionError(extension) from None


def describe(path):
    try:
        name = classify(path)
    except ExtensionError as e:
        print(f"❌ {e}", file=sys.stderr)
        return None
    print(f"File type: {name}")
    return name


def main(argv=None):
    parser = argparse.ArgumentParser(description="Check a file name against the supported document types.")
    parser.add_argument("filename", help="File name to check")
    args = parser.parse_args(argv)

    return 0 if describe(args.filename) else 1


if __name__ == "__main__":
    sys.exit(main())
