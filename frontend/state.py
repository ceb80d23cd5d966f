import streamlit as st


def init_state():
    defaults = {
        "uploaded_url": None,
        "last_analysis": None,
        "upload_history": [],
    }
    for k, v in defaults.items():
        if k not in st.session_state:
            st.session_state[k] = v
