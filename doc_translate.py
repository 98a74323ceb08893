import os
import sys
import time
import logging
import argparse
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv
from tqdm import tqdm

from file_types import ExtensionError, classify
from translation_service import DeepLService, JobStatus

logger = logging.getLogger(__name__)

AUTH_KEY_ENV = "DEEPL_AUTH_KEY"
POLL_INTERVAL = 5.0
TIMEOUT = 600.0


class TranslateError(Exception):
    pass


class ConfigError(TranslateError):
    pass


class OutputDirError(TranslateError):
    pass


class ServiceError(TranslateError):
    pass


class TranslationTimeout(TranslateError):
    def __init__(self, timeout):
        super().__init__(f"Translation timed out after {timeout:g} seconds.")
        self.timeout = timeout


@dataclass
class TranslationResult:
    output_path: Path
    document_id: str = None
    billed_characters: int = None


def derive_output_path(input_path, target_lang, prefix=False):
    """
    Sibling of input_path named after the original file plus the uppercased language code:
    report.docx + de -> report.docx_DE (or DE_report.docx with prefix=True).
    """
    input_path = Path(input_path)
    lang = target_lang.upper()
    name = f"{lang}_{input_path.name}" if prefix else f"{input_path.name}_{lang}"
    return input_path.with_name(name)


def load_auth_key(environ=None):
    environ = os.environ if environ is None else environ
    auth_key = environ.get(AUTH_KEY_ENV)
    if not auth_key:
        raise ConfigError(f"{AUTH_KEY_ENV} environment variable not set.")
    return auth_key


def ensure_output_dir(output_path):
    out_dir = Path(output_path).parent
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputDirError(f"Could not create output directory: {out_dir.resolve()} ({e})") from e


def wait_for_job(handle, poll_interval=POLL_INTERVAL, timeout=TIMEOUT,
                 sleep=time.sleep, clock=time.monotonic, progress=True):
    """
    Poll handle at a fixed interval until it reaches DONE or ERROR.
    timeout=None waits forever; otherwise TranslationTimeout is raised once it is exceeded.
    """
    start = clock()
    with tqdm(desc="Waiting for DeepL", unit="poll", disable=not progress) as bar:
        while True:
            status = handle.status()
            bar.update(1)
            if status in (JobStatus.DONE, JobStatus.ERROR):
                return status
            if timeout is not None and clock() - start > timeout:
                raise TranslationTimeout(timeout)
            sleep(poll_interval)


def translate_document(input_path, target_lang, service, source_lang=None, prefix=False,
                       poll_interval=POLL_INTERVAL, timeout=TIMEOUT,
                       sleep=time.sleep, clock=time.monotonic, progress=True):
    input_path = Path(input_path)
    output_path = derive_output_path(input_path, target_lang, prefix=prefix)

    print("Starting document translation...")
    print(f"Input file: {input_path.resolve()}")
    print(f"Output file: {output_path.resolve()}")
    print(f"Target language: {target_lang}")

    ensure_output_dir(output_path)

    try:
        handle = service.submit(input_path, output_path, source_lang, target_lang)
        print(f"Document translation initiated. Document ID: {handle.document_id}")
        print("Waiting for translation to complete...")

        status = wait_for_job(handle, poll_interval=poll_interval, timeout=timeout,
                              sleep=sleep, clock=clock, progress=progress)
        if status == JobStatus.ERROR:
            raise ServiceError(f"Error during translation: {handle.error_message()}")
        billed = handle.billed_characters()
    except TranslateError:
        raise
    except Exception as e:
        logger.debug("Translation service call failed", exc_info=True)
        raise ServiceError(f"An unexpected error occurred: {e}") from e

    return TranslationResult(output_path=output_path, document_id=handle.document_id, billed_characters=billed)


def connect(auth_key):
    try:
        return DeepLService(auth_key)
    except Exception as e:
        logger.debug("Could not create DeepL client", exc_info=True)
        raise ServiceError(f"Could not create DeepL client: {e}") from e


def main(argv=None):
    parser = argparse.ArgumentParser(description="Translate a document with DeepL and save it next to the input.")
    parser.add_argument("input", help="Input document path")
    parser.add_argument("target_lang", help="Target language code, e.g. DE or EN-US")
    parser.add_argument("-s", "--source-lang", default=None, help="Source language code (default: auto-detect)")
    parser.add_argument("--prefix", action="store_true",
                        help="Put the language code before the file name (DE_input.docx) instead of after it")
    parser.add_argument("--poll-interval", type=float, default=POLL_INTERVAL,
                        help=f"Seconds between status checks (default: {POLL_INTERVAL:g})")
    parser.add_argument("--timeout", type=float, default=TIMEOUT,
                        help=f"Give up after this many seconds, 0 to wait forever (default: {TIMEOUT:g})")
    parser.add_argument("-q", "--quiet", action="store_true", help="Hide the progress bar")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging, including the DeepL client")
    parser.epilog = f"Output file is auto-generated (e.g. input.docx_DE). Ensure {AUTH_KEY_ENV} is set."
    args = parser.parse_args(argv)
    if args.poll_interval < 0:
        parser.error("--poll-interval must not be negative")
    if args.timeout < 0:
        parser.error("--timeout must not be negative")

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")
    if not args.verbose:
        logging.getLogger("deepl").setLevel(logging.WARNING)

    load_dotenv()

    try:
        print(f"File type: {classify(args.input)}")
        service = connect(load_auth_key())
        result = translate_document(
            args.input,
            args.target_lang,
            service,
            source_lang=args.source_lang,
            prefix=args.prefix,
            poll_interval=args.poll_interval,
            timeout=args.timeout or None,
            progress=not args.quiet,
        )
    except (ExtensionError, TranslateError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    print("✅ Translation completed successfully.")
    if result.billed_characters is not None:
        print(f"Billed characters: {result.billed_characters}")
    print(f"✅ Saved translated output to {result.output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
