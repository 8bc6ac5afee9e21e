"""
Tests for ViewerState and FileLoader:
- results are applied only for the latest generation
- decode failures leave no metadata or location behind
- loading A then B always ends on B, whatever order the jobs finish in
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from types import SimpleNamespace

import exifread
import pytest

from scripts.exif_utils import ExifDecodeError
from scripts.loader import FileLoader
from scripts.location import Coordinate
from scripts.session import ViewerState


@pytest.fixture
def executor():
    pool = ThreadPoolExecutor(max_workers=4)
    yield pool
    pool.shutdown(wait=True)


class TestViewerState:

    def test_metadata_sets_location_and_map(self, gps_snapshot):
        state = ViewerState()
        gen = state.begin_load("a.jpg")
        assert state.apply_metadata(gen, gps_snapshot)
        assert state.snapshot is gps_snapshot
        assert state.location == Coordinate(37.7749, -122.4194)
        assert state.location_known
        assert state.map_view.original == state.location

    def test_stale_results_dropped(self, gps_snapshot, make_snapshot):
        state = ViewerState()
        old = state.begin_load("a.jpg")
        new = state.begin_load("b.jpg")
        assert not state.apply_metadata(old, gps_snapshot)
        assert not state.apply_preview(old, "data:image/jpeg;base64,AAAA")
        assert state.snapshot is None
        assert state.preview is None

        b_snapshot = make_snapshot({"Make": "Nikon"})
        assert state.apply_metadata(new, b_snapshot)
        assert state.snapshot is b_snapshot

    def test_new_load_clears_previous_file(self, gps_snapshot):
        state = ViewerState()
        gen = state.begin_load("a.jpg")
        state.apply_preview(gen, "data:image/jpeg;base64,AAAA")
        state.apply_metadata(gen, gps_snapshot)
        state.open_full_view()

        state.begin_load("b.jpg")
        assert state.preview is None
        assert state.snapshot is None
        assert state.location is None
        assert state.map_view is None
        assert not state.show_full_view

    def test_missing_location_removes_map(self, gps_snapshot, make_snapshot):
        state = ViewerState()
        state.apply_metadata(state.begin_load("a.jpg"), gps_snapshot)
        assert state.map_view is not None

        state.apply_metadata(state.begin_load("b.jpg"), make_snapshot({"GPSLatitude": "1.0"}))
        assert state.location is None
        assert state.map_view is None

    def test_failure_clears_metadata(self):
        state = ViewerState()
        gen = state.begin_load("bad.png")
        assert state.apply_failure(gen, ExifDecodeError("No EXIF metadata found"))
        assert state.snapshot is None
        assert not state.location_known
        assert state.error == "No EXIF metadata found"

    def test_full_view_toggle(self, gps_snapshot):
        state = ViewerState()
        state.open_full_view()
        assert not state.show_full_view

        state.apply_metadata(state.begin_load("a.jpg"), gps_snapshot)
        state.open_full_view()
        assert state.show_full_view
        state.close_full_view()
        assert not state.show_full_view
        assert state.snapshot is gps_snapshot


class TestFileLoader:

    def test_load_sets_preview_and_metadata(self, executor, gps_snapshot):
        state = ViewerState()
        loader = FileLoader(state, decode=lambda data: gps_snapshot, executor=executor)
        request = loader.load("a.jpg", b"\xff\xd8", "image/jpeg")
        assert request.result(timeout=5) == (True, True)
        assert state.preview.startswith("data:image/jpeg;base64,")
        assert state.snapshot is gps_snapshot
        assert state.map_view is not None

    def test_decode_failure_is_not_fatal(self, executor):
        def decode(data):
            raise ExifDecodeError("No EXIF metadata found")

        state = ViewerState()
        loader = FileLoader(state, decode=decode, executor=executor)
        loader.load("plain.png", b"\x89PNG", "image/png").result(timeout=5)
        assert state.preview is not None
        assert state.snapshot is None
        assert state.map_view is None

    def test_unexpected_errors_propagate(self, executor):
        def decode(data):
            raise KeyError("bug")

        loader = FileLoader(ViewerState(), decode=decode, executor=executor)
        with pytest.raises(KeyError):
            loader.load("a.jpg", b"x").result(timeout=5)

    def test_slow_first_file_does_not_overwrite_second(self, executor, gps_snapshot, make_snapshot):
        release_a = threading.Event()
        b_snapshot = make_snapshot({"Make": "Nikon", "GPSLatitude": "48.8566", "GPSLongitude": "2.3522"})

        def decode(data):
            if data == b"A":
                release_a.wait(timeout=5)
                return gps_snapshot
            return b_snapshot

        state = ViewerState()
        loader = FileLoader(state, decode=decode, executor=executor)
        request_a = loader.load("a.jpg", b"A", "image/jpeg")
        request_b = loader.load("b.jpg", b"B", "image/jpeg")
        request_b.result(timeout=5)

        release_a.set()
        _, a_metadata_applied = request_a.result(timeout=5)

        assert not a_metadata_applied
        assert state.file_name == "b.jpg"
        assert state.snapshot is b_snapshot
        assert state.location == Coordinate(48.8566, 2.3522)
        assert state.map_view.original == Coordinate(48.8566, 2.3522)
        assert state.preview.endswith(",Qg==")

    def test_wait_times_out_while_decode_is_running(self, executor, gps_snapshot):
        release = threading.Event()

        def decode(data):
            release.wait(timeout=5)
            return gps_snapshot

        loader = FileLoader(ViewerState(), decode=decode, executor=executor)
        request = loader.load("a.jpg", b"A", "image/jpeg")
        assert not request.wait(timeout=0.05)

        release.set()
        assert request.wait(timeout=5)

    def test_empty_gps_tag_from_decoder_is_not_fatal(self, executor, monkeypatch):
        tags = {
            "Image Make": SimpleNamespace(printable="Canon", values="Canon"),
            "GPS GPSLatitude": SimpleNamespace(printable="[]", values=[]),
        }
        monkeypatch.setattr(exifread, "process_file", lambda fh, **kwargs: tags)

        state = ViewerState()
        FileLoader(state, executor=executor).load("bad.jpg", b"x", "image/jpeg").result(timeout=5)
        assert state.snapshot.get("Make").description == "Canon"
        assert state.location is None
        assert state.map_view is None

    def test_malformed_tags_become_a_failure(self, executor, monkeypatch):
        class Unprintable:
            def __str__(self):
                raise UnicodeDecodeError("ascii", b"\xff", 0, 1, "bad byte")

        tags = {"Image Make": SimpleNamespace(printable=Unprintable(), values="Canon")}
        monkeypatch.setattr(exifread, "process_file", lambda fh, **kwargs: tags)

        state = ViewerState()
        FileLoader(state, executor=executor).load("bad.jpg", b"x", "image/jpeg").result(timeout=5)
        assert state.snapshot is None
        assert state.map_view is None
        assert "Malformed EXIF tags" in state.error
