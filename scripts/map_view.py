# Map state for the capture location and the folium map built from it

import folium

from scripts.config import COORDINATE_DECIMALS, MAP_TILES, MAP_ZOOM_START
from scripts.location import Coordinate

_marker_icon_options = None


def init_map_icons(color="red", icon="camera"):
    """Configure the default marker icon once per process. Later calls are no-ops."""
    global _marker_icon_options
    if _marker_icon_options is not None:
        return
    _marker_icon_options = {"color": color, "icon": icon, "prefix": "fa"}


def marker_icon():
    if _marker_icon_options is None:
        raise RuntimeError("init_map_icons() must be called before building a map")
    return folium.Icon(**_marker_icon_options)


class MapView:
    """
    Viewport over a marker fixed at the coordinate recorded when the image loaded.

    Panning only moves the viewport; reset() brings it back to the recorded
    coordinate and the initial zoom. The map widget keeps returning its last
    viewport on every rerun, so report() treats a repeat of the previous
    report as no movement.
    """

    def __init__(self, original, zoom=MAP_ZOOM_START):
        self._original = Coordinate(*original)
        self._initial_zoom = zoom
        self._last_report = None
        self.center = self._original
        self.zoom = zoom

    @classmethod
    def at(cls, coord, zoom=MAP_ZOOM_START):
        return cls(coord, zoom)

    @property
    def original(self):
        return self._original

    @property
    def initial_zoom(self):
        return self._initial_zoom

    @property
    def is_moved(self):
        return self.center != self._original or self.zoom != self._initial_zoom

    def pan(self, center, zoom=None):
        self.center = Coordinate(float(center[0]), float(center[1]))
        if zoom is not None:
            self.zoom = int(zoom)

    def report(self, center, zoom=None):
        """Apply a viewport reported by the map widget. Returns True if it moved the view."""
        reported = (float(center[0]), float(center[1]), zoom)
        if reported == self._last_report:
            return False
        self._last_report = reported
        self.pan(center, zoom)
        return True

    def reset(self):
        self.center = self._original
        self.zoom = self._initial_zoom

    def __repr__(self):
        return f"MapView(original={self._original}, center={self.center}, zoom={self.zoom})"


def popup_text(coord):
    return (
        f"Latitude: {coord.latitude:.{COORDINATE_DECIMALS}f}<br>"
        f"Longitude: {coord.longitude:.{COORDINATE_DECIMALS}f}"
    )


def build_map(view, tiles=MAP_TILES):
    """Folium map centred on the current viewport with one marker at the original position."""
    icon = marker_icon()
    map_obj = folium.Map(location=list(view.center), zoom_start=view.zoom, tiles=tiles)
    folium.Marker(
        list(view.original),
        popup=folium.Popup(popup_text(view.original), max_width=250),
        tooltip="Photo location",
        icon=icon,
    ).add_to(map_obj)
    return map_obj
