# Streamlit rendering of the preview, metadata panels, full-metadata overlay and map
import streamlit as st
from streamlit_folium import st_folium

from scripts.config import MAP_HEIGHT, PREVIEW_WIDTH_PERCENT
from scripts.location import format_coordinate
from scripts.map_view import build_map
from scripts.presenter import full_view, grouped_view, metadata_csv, summary_view


def render_preview(data_url):
    if not data_url:
        return
    st.markdown(
        f"<img src='{data_url}' alt='Preview' style='width: {PREVIEW_WIDTH_PERCENT}%; height: auto;'/>",
        unsafe_allow_html=True,
    )


def _render_lines(lines):
    for line in lines:
        st.markdown(f"**{line.tag}:** {line.text}")


def render_group(group):
    st.markdown(f"###### {group.title}")
    _render_lines(group.lines)


def render_summary(snapshot):
    lines = summary_view(snapshot)
    if lines:
        with st.container(border=True):
            _render_lines(lines)


def render_grouped_metadata(snapshot):
    st.subheader("Grouped Image Metadata")
    groups = grouped_view(snapshot)
    for row in (groups[:3], groups[3:]):
        for col, group in zip(st.columns(len(row)), row):
            with col:
                render_group(group)


@st.dialog("All Image Metadata", width="large")
def _full_metadata_dialog(state, snapshot):
    _render_lines(full_view(snapshot))
    if st.button("Close", key="close_full_view"):
        state.close_full_view()
        st.rerun()


def render_full_metadata(state):
    snapshot = state.snapshot
    if st.button("Show all metadata", key="open_full_view"):
        state.open_full_view()
        _full_metadata_dialog(state, snapshot)
    else:
        state.close_full_view()

    st.download_button(
        label="⬇️ Download All Metadata (CSV)",
        data=metadata_csv(snapshot),
        file_name=f"{(state.file_name or 'image').rsplit('.', 1)[0]}_metadata.csv",
        mime="text/csv",
    )


def render_map(state):
    view = state.map_view
    if view is None:
        return

    st.subheader("📍 Photo Location")
    st.caption(format_coordinate(view.original))

    if st.button("Reset view", key="reset_map_view"):
        view.reset()

    result = st_folium(
        build_map(view),
        center=list(view.center),
        zoom=view.zoom,
        height=MAP_HEIGHT,
        use_container_width=True,
        returned_objects=["center", "zoom"],
        key=f"map_{state.generation}",
    )

    center = (result or {}).get("center")
    if center:
        view.report((center["lat"], center["lng"]), result.get("zoom"))
