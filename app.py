import os
os.environ.setdefault('STREAMLIT_SERVER_FILE_WATCHER_TYPE', 'none')

from concurrent.futures import ThreadPoolExecutor

import streamlit as st

from scripts.config import ACCEPTED_IMAGE_TYPES
from scripts.display import (
    render_full_metadata,
    render_grouped_metadata,
    render_map,
    render_preview,
    render_summary,
)
from scripts.loader import FileLoader
from scripts.log_utils import init_logging
from scripts.map_view import init_map_icons
from scripts.session import ViewerState

st.set_page_config(page_title="Image EXIF Metadata Viewer", layout="wide")

init_logging()
init_map_icons()


@st.cache_resource
def get_executor():
    return ThreadPoolExecutor(max_workers=4, thread_name_prefix="exif-load")


if 'viewer' not in st.session_state:
    st.session_state['viewer'] = ViewerState()
    st.session_state['loader'] = FileLoader(st.session_state['viewer'], executor=get_executor())
state = st.session_state['viewer']
loader = st.session_state['loader']

st.title("Image EXIF Metadata Viewer")

col_left, col_right = st.columns([1, 3])

with col_left:
    uploaded = st.file_uploader("Choose an image", type=ACCEPTED_IMAGE_TYPES)

    if uploaded is not None:
        file_id = getattr(uploaded, "file_id", None) or f"{uploaded.name}:{uploaded.size}"
        if st.session_state.get('loaded_file_id') != file_id:
            st.session_state['loaded_file_id'] = file_id
            with st.spinner("Reading metadata..."):
                request = loader.load(uploaded.name, uploaded.getvalue(), uploaded.type)
                request.result()

    render_preview(state.preview)

with col_right:
    if state.snapshot is not None:
        render_summary(state.snapshot)
        render_grouped_metadata(state.snapshot)
        render_full_metadata(state)

    render_map(state)
