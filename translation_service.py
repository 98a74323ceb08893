import os
import logging
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path

import deepl

logger = logging.getLogger(__name__)


class JobStatus(Enum):
    PENDING = "pending"
    DONE = "done"
    ERROR = "error"


class JobHandle(ABC):
    document_id = None

    @abstractmethod
    def status(self):
        """Query the service and return the current JobStatus."""

    @abstractmethod
    def billed_characters(self):
        """Characters billed for the job, once it is DONE. May be None."""

    @abstractmethod
    def error_message(self):
        """Message reported by the service, once the job is in ERROR."""


class TranslationService(ABC):
    @abstractmethod
    def submit(self, input_path, output_path, source_lang, target_lang):
        """Start translating input_path; the result is written to output_path. Returns a JobHandle."""


class DeepLJob(JobHandle):
    def __init__(self, translator, handle, output_path):
        self.translator = translator
        self.handle = handle
        self.output_path = Path(output_path)
        self.document_id = handle.document_id
        self._last = None
        self._downloaded = False

    def status(self):
        self._last = self.translator.translate_document_get_status(self.handle)
        logger.debug("Document %s status: %s", self.document_id, self._last.status)

        if self._last.status == deepl.DocumentStatus.Status.ERROR:
            return JobStatus.ERROR
        if self._last.done:
            if not self._downloaded:
                self._download()
            return JobStatus.DONE
        return JobStatus.PENDING

    def _download(self):
        # Output is only written once the service reports the document as done.
        try:
            with open(self.output_path, "wb") as out_file:
                self.translator.translate_document_download(self.handle, out_file)
        except Exception:
            self.output_path.unlink(missing_ok=True)
            raise
        self._downloaded = True
        logger.debug("Downloaded document %s to %s", self.document_id, self.output_path)

    def billed_characters(self):
        return self._last.billed_characters if self._last else None

    def error_message(self):
        return self._last.error_message if self._last else None


class DeepLService(TranslationService):
    def __init__(self, auth_key, server_url=None):
        self.translator = deepl.Translator(auth_key, server_url=server_url or os.getenv("DEEPL_SERVER_URL"))

    def submit(self, input_path, output_path, source_lang, target_lang):
        input_path = Path(input_path)
        with open(input_path, "rb") as in_file:
            handle = self.translator.translate_document_upload(
                in_file,
                source_lang=source_lang,
                target_lang=target_lang,
                filename=input_path.name,
            )
        return DeepLJob(self.translator, handle, output_path)
