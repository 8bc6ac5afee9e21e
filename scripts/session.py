# Live viewer state for the most recently chosen file
#
# Every file load gets a new generation number. Results from background jobs
# are applied only if they carry the latest generation, so a slow job for an
# older file can never overwrite the state of a newer one.

import threading

from loguru import logger

from scripts.location import resolve_location
from scripts.map_view import MapView


class ViewerState:
    def __init__(self):
        self._lock = threading.Lock()
        self.generation = 0
        self.file_name = None
        self.preview = None
        self.snapshot = None
        self.location = None
        self.map_view = None
        self.error = None
        self.show_full_view = False

    @property
    def location_known(self):
        return self.location is not None

    def begin_load(self, file_name):
        """Start a new file and drop everything derived from the previous one."""
        with self._lock:
            self.generation += 1
            self.file_name = file_name
            self.preview = None
            self.snapshot = None
            self.location = None
            self.map_view = None
            self.error = None
            self.show_full_view = False
            return self.generation

    def _is_current(self, generation, what):
        if generation != self.generation:
            logger.debug("Dropping stale {} for generation {} (current {})", what, generation, self.generation)
            return False
        return True

    def apply_preview(self, generation, data_url):
        with self._lock:
            if not self._is_current(generation, "preview"):
                return False
            self.preview = data_url
            return True

    def apply_metadata(self, generation, snapshot):
        with self._lock:
            if not self._is_current(generation, "metadata"):
                return False
            self.snapshot = snapshot
            self.error = None
            self.location = resolve_location(snapshot)
            self.map_view = MapView.at(self.location) if self.location is not None else None
            logger.info(
                "Loaded {} tags from {} (location {})",
                len(snapshot),
                self.file_name,
                "known" if self.location is not None else "unknown",
            )
            return True

    def apply_failure(self, generation, error):
        with self._lock:
            if not self._is_current(generation, "failure"):
                return False
            logger.warning("Error processing EXIF data for {}: {}", self.file_name, error)
            self.snapshot = None
            self.location = None
            self.map_view = None
            self.error = str(error)
            return True

    def open_full_view(self):
        if self.snapshot is not None:
            self.show_full_view = True

    def close_full_view(self):
        self.show_full_view = False
