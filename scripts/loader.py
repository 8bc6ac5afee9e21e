# Run the preview read and the EXIF decode for a chosen file in the background

from concurrent.futures import ThreadPoolExecutor, wait

from loguru import logger

from scripts.exif_utils import ExifDecodeError, read_metadata
from scripts.image_utils import read_preview


class LoadRequest:
    """Handle for one file load. Carries the generation its results are applied under."""

    def __init__(self, generation, preview, metadata):
        self.generation = generation
        self.preview = preview
        self.metadata = metadata

    def wait(self, timeout=None):
        """Block until both jobs settle. Returns False on timeout."""
        _, pending = wait([self.preview, self.metadata], timeout=timeout)
        return not pending

    def result(self, timeout=None):
        """
        Wait for both jobs, re-raising anything unexpected they hit.

        Returns whether each result was applied (False means it went stale).
        """
        return self.preview.result(timeout), self.metadata.result(timeout)


class FileLoader:
    def __init__(self, state, decode=read_metadata, executor=None):
        self.state = state
        self._decode = decode
        self._executor = executor or ThreadPoolExecutor(max_workers=2, thread_name_prefix="exif-load")

    def load(self, name, data, mime=None):
        generation = self.state.begin_load(name)
        logger.debug("Loading {} as generation {}", name, generation)
        preview = self._executor.submit(self._load_preview, generation, name, data, mime)
        metadata = self._executor.submit(self._load_metadata, generation, data)
        return LoadRequest(generation, preview, metadata)

    def _load_preview(self, generation, name, data, mime):
        return self.state.apply_preview(generation, read_preview(name, data, mime))

    def _load_metadata(self, generation, data):
        try:
            snapshot = self._decode(data)
        except ExifDecodeError as e:
            return self.state.apply_failure(generation, e)
        return self.state.apply_metadata(generation, snapshot)
